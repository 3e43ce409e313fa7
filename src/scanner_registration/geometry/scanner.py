"""
Scanner Value Type

A scanner is the set of beacons it reports plus where it sits in the global
frame. Parsed scanners are unplaced: their position is the origin and their
beacons are in the scanner's own local frame. Alignment produces a new,
placed Scanner; instances are never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable

import numpy as np

from .coordinate import Coordinate
from .orientation import Orientation

BeaconSet = FrozenSet[Coordinate]


@dataclass(frozen=True)
class Scanner:
    """
    Beacons observed by one scanner and its absolute placement.

    Attributes:
        index: Ordinal position of the scanner in the input report
        beacons: Duplicate-free beacon coordinates
        position: Absolute position (origin while unplaced)
        orientation: Rotation from the scanner's local frame into the global frame
        placed: True once the scanner is expressed in the global frame
    """

    index: int
    beacons: BeaconSet
    position: Coordinate = field(default_factory=Coordinate.origin)
    orientation: Orientation = field(default_factory=Orientation.identity)
    placed: bool = False

    def __post_init__(self):
        if not isinstance(self.beacons, frozenset):
            object.__setattr__(self, "beacons", frozenset(self.beacons))
        if not self.beacons:
            raise ValueError(f"Scanner {self.index} has no beacons")

    @classmethod
    def from_beacons(cls, index: int, beacons: Iterable[Coordinate]) -> "Scanner":
        return cls(index=index, beacons=frozenset(beacons))

    def rotate(self, orientation: Orientation) -> "Scanner":
        return replace(
            self,
            beacons=frozenset(orientation.apply(b) for b in self.beacons),
            position=orientation.apply(self.position),
            orientation=orientation.compose(self.orientation),
        )

    def translate(self, delta: Coordinate) -> "Scanner":
        return replace(
            self,
            beacons=frozenset(b.translate(delta) for b in self.beacons),
            position=self.position.translate(delta),
        )

    def as_placed(self) -> "Scanner":
        return replace(self, placed=True)

    def transform_matrix(self) -> np.ndarray:
        """4x4 homogeneous transform from the local frame to the global frame."""
        T = np.eye(4, dtype=np.int64)
        T[:3, :3] = self.orientation.matrix
        T[:3, 3] = self.position.as_tuple()
        return T

    def __len__(self) -> int:
        return len(self.beacons)
