"""
Overlap Matching

Finds the translation that superimposes two beacon sets that are already in
the same orientation. Every pair (a, b) of candidate and reference beacons
votes for the offset ``b - a``; an offset that collects ``min_overlap`` votes
means that many beacons coincide exactly once the candidate is shifted by it.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from ..geometry.coordinate import Coordinate

DEFAULT_MIN_OVERLAP = 12


@dataclass
class OverlapMatcher:
    min_overlap: int = DEFAULT_MIN_OVERLAP

    def __post_init__(self):
        if self.min_overlap < 1:
            raise ValueError(f"min_overlap must be >= 1, got {self.min_overlap}")

    def find_translation(
        self,
        candidate: Iterable[Coordinate],
        reference: Iterable[Coordinate],
    ) -> Optional[Coordinate]:
        """
        Translation mapping at least ``min_overlap`` candidate beacons onto reference beacons.

        Args:
            candidate: Beacons already rotated into the trial orientation
            reference: Beacons of the fixed, placed scanner

        Returns:
            The first offset whose tally reaches the threshold, or None
        """
        match = self.find_match(candidate, reference)
        return match[0] if match is not None else None

    def find_match(
        self,
        candidate: Iterable[Coordinate],
        reference: Iterable[Coordinate],
    ) -> Optional[Tuple[Coordinate, int]]:
        """Like ``find_translation`` but also returns the tally that crossed the threshold."""
        reference = tuple(reference)
        tally: Counter = Counter()
        for beacon in candidate:
            for other in reference:
                offset = beacon.difference(other)
                tally[offset] += 1
                if tally[offset] >= self.min_overlap:
                    return offset, tally[offset]
        return None
