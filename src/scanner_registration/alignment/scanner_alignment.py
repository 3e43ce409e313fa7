"""
Scanner Alignment

Aligns one scanner to an already placed reference scanner by trying each of
the 24 orientations in turn and asking the OverlapMatcher for a translation
that makes enough beacons coincide.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..geometry.coordinate import Coordinate
from ..geometry.orientation import ORIENTATIONS, Orientation
from ..geometry.scanner import Scanner
from ..utils.logging import setup_logger
from .overlap import DEFAULT_MIN_OVERLAP, OverlapMatcher

logger = setup_logger(__name__)


@dataclass(frozen=True)
class Alignment:
    """Transform that places a candidate scanner in the reference frame."""

    orientation: Orientation
    translation: Coordinate
    shared_beacons: int


class ScannerAligner:
    """
    Search over orientations for a rigid transform between two scanners.

    For each orientation (identity first):
    1. Rotate the candidate's beacons and position
    2. Tally candidate-to-reference offsets with the OverlapMatcher
    3. On success, translate the rotated copy and return it as placed
    """

    def __init__(
        self,
        min_overlap: int = DEFAULT_MIN_OVERLAP,
        orientations: Sequence[Orientation] = ORIENTATIONS,
    ):
        """
        Args:
            min_overlap: Number of coinciding beacons required to accept a transform.
            orientations: Rotations to try, in order.
        """
        self.matcher = OverlapMatcher(min_overlap=min_overlap)
        self.orientations = tuple(orientations)

    def find_alignment(self, candidate: Scanner, reference: Scanner) -> Optional[Tuple[Scanner, Alignment]]:
        """
        Find the transform placing ``candidate`` in ``reference``'s frame.

        Returns:
            Tuple of (placed scanner, alignment) or None if no orientation overlaps.
        """
        for orientation in self.orientations:
            rotated = candidate.rotate(orientation)
            match = self.matcher.find_match(rotated.beacons, reference.beacons)
            if match is None:
                continue
            translation, shared = match
            placed = rotated.translate(translation).as_placed()
            return placed, Alignment(orientation=orientation, translation=translation, shared_beacons=shared)
        return None

    def align(self, candidate: Scanner, reference: Scanner) -> Optional[Scanner]:
        """Place ``candidate`` in ``reference``'s frame, or None if they do not overlap."""
        found = self.find_alignment(candidate, reference)
        if found is None:
            return None
        placed, alignment = found
        logger.debug(
            f"Scanner {candidate.index} aligned to scanner {reference.index}: "
            f"position {placed.position}, {alignment.shared_beacons} shared beacons"
        )
        return placed


def align(candidate: Scanner, reference: Scanner, min_overlap: int = DEFAULT_MIN_OVERLAP) -> Optional[Scanner]:
    return ScannerAligner(min_overlap=min_overlap).align(candidate, reference)
