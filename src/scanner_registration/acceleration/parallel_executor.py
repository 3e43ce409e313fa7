"""
Parallel execution of independent alignment attempts.

Each attempt is a pure function of its (candidate, reference) pair, so a
round of attempts can be spread over worker processes and read back in
submission order without changing the registration result.
"""

from __future__ import annotations

import logging
import time
from functools import partial
from multiprocessing import Pool, cpu_count
from typing import Any, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


def _capture(worker_fn: Callable, task: Any) -> Tuple[Any, Optional[str]]:
    # Module level for pickling; errors travel back as text
    try:
        return worker_fn(task), None
    except Exception as e:
        return None, f"{type(e).__name__}: {e}"


class AlignmentParallelExecutor:
    """
    Map a picklable worker over alignment tasks.

    With one worker or one task everything runs in-process; otherwise a
    ``multiprocessing.Pool`` is used and results keep the input order.
    """

    def __init__(self, n_workers: Optional[int] = None):
        """
        Args:
            n_workers: Worker processes. If None, uses cpu_count - 1. Minimum is 1.
        """
        if n_workers is None:
            n_workers = cpu_count() - 1
        self.n_workers = max(1, int(n_workers))

    def map_tasks(
        self,
        tasks: List[Any],
        worker_fn: Callable,
        worker_kwargs: Optional[Dict[str, Any]] = None,
    ) -> List[Any]:
        """
        Apply ``worker_fn(task, **worker_kwargs)`` to every task.

        Returns:
            Results in the same order as ``tasks``

        Raises:
            RuntimeError: If any task fails
        """
        if not tasks:
            return []
        fn = partial(worker_fn, **(worker_kwargs or {}))

        if self.n_workers == 1 or len(tasks) == 1:
            try:
                return [fn(task) for task in tasks]
            except Exception as e:
                logger.error(f"Alignment task failed: {e}", exc_info=True)
                raise RuntimeError(f"Task processing failed: {e}") from e

        start = time.time()
        with Pool(processes=min(self.n_workers, len(tasks))) as pool:
            outcomes = pool.map(partial(_capture, fn), tasks)

        errors = [(i, err) for i, (_, err) in enumerate(outcomes) if err]
        if errors:
            for i, err in errors[:5]:
                logger.error(f"Task {i}: {err}")
            raise RuntimeError(f"{len(errors)} tasks failed out of {len(tasks)}")

        logger.debug(f"{len(tasks)} alignment tasks on {self.n_workers} workers in {time.time() - start:.2f}s")
        return [result for result, _ in outcomes]
