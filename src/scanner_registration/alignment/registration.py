"""
Registration Engine

Places every scanner in one global frame anchored to the first scanner of
the input. Three pools drive the work-list:

- aligning: placed scanners not yet tried against the pending pool (frontier)
- pending: scanners not yet placed
- aligned: placed scanners that have already served as reference

Each round pops one frontier scanner, tries to align every pending scanner to
it, and moves successes onto the frontier. Registration succeeds when the
frontier empties with nothing left pending.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from itertools import combinations
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from ..acceleration.parallel_executor import AlignmentParallelExecutor
from ..geometry.coordinate import Coordinate
from ..geometry.orientation import ORIENTATIONS, Orientation
from ..geometry.scanner import Scanner
from ..utils.logging import setup_logger
from .overlap import DEFAULT_MIN_OVERLAP
from .scanner_alignment import ScannerAligner

logger = setup_logger(__name__)


def align_task(
    task: Tuple[Scanner, Scanner],
    min_overlap: int = DEFAULT_MIN_OVERLAP,
    orientations: Sequence[Orientation] = ORIENTATIONS,
) -> Optional[Scanner]:
    """Worker function for one (candidate, reference) attempt. Module level for pickling."""
    candidate, reference = task
    return ScannerAligner(min_overlap=min_overlap, orientations=orientations).align(candidate, reference)


def unique_beacons(scanners: Iterable[Scanner]) -> FrozenSet[Coordinate]:
    return frozenset(beacon for scanner in scanners for beacon in scanner.beacons)


def max_manhattan_distance(positions: Sequence[Coordinate]) -> int:
    """Largest Manhattan distance over all unordered pairs; 0 for fewer than two positions."""
    return max((a.manhattan_distance(b) for a, b in combinations(positions, 2)), default=0)


@dataclass(frozen=True)
class RegistrationResult:
    """
    Outcome of a successful registration.

    Attributes:
        unique_beacon_count: Number of distinct beacons in the global frame
        max_scanner_distance: Largest Manhattan distance between two scanners
        scanners: Placed scanners, ordered by input index
        beacons: Deduplicated beacon coordinates in the global frame
        attempts: Number of pairwise alignment attempts performed
    """

    unique_beacon_count: int
    max_scanner_distance: int
    scanners: Tuple[Scanner, ...]
    beacons: FrozenSet[Coordinate]
    attempts: int = 0

    @classmethod
    def from_scanners(cls, scanners: Iterable[Scanner], attempts: int = 0) -> "RegistrationResult":
        ordered = tuple(sorted(scanners, key=lambda s: s.index))
        beacons = unique_beacons(ordered)
        return cls(
            unique_beacon_count=len(beacons),
            max_scanner_distance=max_manhattan_distance([s.position for s in ordered]),
            scanners=ordered,
            beacons=beacons,
            attempts=attempts,
        )

    def beacon_observations(self) -> Dict[Coordinate, int]:
        """Number of placed scanners that observed each global beacon."""
        counts: Dict[Coordinate, int] = {}
        for scanner in self.scanners:
            for beacon in scanner.beacons:
                counts[beacon] = counts.get(beacon, 0) + 1
        return counts


class RegistrationEngine:
    """
    Work-list propagation of pairwise alignments across all scanners.

    Each alignment attempt is a pure function of two scanners, so the
    attempts of one round can optionally be spread over worker processes
    without changing the result.
    """

    def __init__(
        self,
        min_overlap: int = DEFAULT_MIN_OVERLAP,
        *,
        parallel: bool = False,
        n_workers: Optional[int] = None,
        orientations: Sequence[Orientation] = ORIENTATIONS,
    ):
        """
        Args:
            min_overlap: Coinciding beacons required for two scanners to overlap.
            parallel: If True, run the attempts of each round in a worker pool.
            n_workers: Worker processes when parallel (None = cpu_count - 1).
            orientations: Rotations tried by every alignment attempt.
        """
        self.min_overlap = min_overlap
        self.orientations = tuple(orientations)
        self.aligner = ScannerAligner(min_overlap=min_overlap, orientations=self.orientations)
        self.executor = AlignmentParallelExecutor(n_workers=n_workers) if parallel else None

    def register(self, scanners: Sequence[Scanner]) -> Optional[RegistrationResult]:
        """
        Place all scanners in the frame of the first one.

        Args:
            scanners: Parsed (unplaced) scanners in input order

        Returns:
            RegistrationResult, or None if the input is empty or some scanner
            could not be connected to the first one through overlaps.
        """
        if not scanners:
            logger.warning("No scanners supplied; nothing to register.")
            return None

        start = time.time()
        logger.info(f"Registering {len(scanners)} scanners (min overlap {self.min_overlap})")

        aligned: List[Scanner] = []
        aligning: List[Scanner] = [scanners[0].as_placed()]
        pending: List[Scanner] = list(scanners[1:])
        attempts = 0

        while aligning:
            reference = aligning.pop()
            results = self._attempt_round(pending, reference)
            attempts += len(pending)

            skipped = []
            for candidate, placed in zip(pending, results):
                if placed is None:
                    skipped.append(candidate)
                else:
                    aligning.append(placed)
            pending = skipped
            aligned.append(reference)

        if pending:
            logger.warning(
                f"Registration incomplete: {len(pending)} scanner(s) share no overlap with the rest: "
                f"{sorted(s.index for s in pending)}"
            )
            return None

        result = RegistrationResult.from_scanners(aligned, attempts=attempts)
        logger.info(
            f"Registered {len(aligned)} scanners in {time.time() - start:.2f}s "
            f"({attempts} alignment attempts): {result.unique_beacon_count} unique beacons, "
            f"max scanner distance {result.max_scanner_distance}"
        )
        return result

    def _attempt_round(self, pending: List[Scanner], reference: Scanner) -> List[Optional[Scanner]]:
        if self.executor is None:
            return [self.aligner.align(candidate, reference) for candidate in pending]
        return self.executor.map_tasks(
            tasks=[(candidate, reference) for candidate in pending],
            worker_fn=align_task,
            worker_kwargs={"min_overlap": self.min_overlap, "orientations": self.orientations},
        )


def register(
    scanners: Sequence[Scanner],
    min_overlap: int = DEFAULT_MIN_OVERLAP,
) -> Optional[RegistrationResult]:
    """Register scanners sequentially with default settings."""
    return RegistrationEngine(min_overlap=min_overlap).register(scanners)
