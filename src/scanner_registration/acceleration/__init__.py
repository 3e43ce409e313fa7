"""
Acceleration Module

Parallel processing of independent alignment attempts across CPU cores.
"""

from .parallel_executor import AlignmentParallelExecutor

__all__ = [
    "AlignmentParallelExecutor",
]
