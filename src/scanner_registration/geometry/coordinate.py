"""
Integer Coordinate Primitives

Immutable 3-D integer points used for beacon and scanner positions.
All arithmetic is exact; no floating point is involved anywhere in the
registration pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple

if TYPE_CHECKING:
    from .orientation import Orientation


@dataclass(frozen=True)
class Coordinate:
    """A point (or offset) in 3-D integer space, compared and hashed by value."""

    x: int
    y: int
    z: int

    @classmethod
    def origin(cls) -> "Coordinate":
        return cls(0, 0, 0)

    @classmethod
    def parse(cls, text: str) -> "Coordinate":
        """
        Parse a comma-separated integer triple such as ``"-618,-824,-621"``.

        Raises:
            ValueError: If a field is not an integer or there are not exactly three fields.
        """
        fields = text.split(",")
        values = []
        for field in fields:
            try:
                values.append(int(field.strip()))
            except ValueError as e:
                raise ValueError(f"Invalid coordinate '{field.strip()}': {e}") from e
        if len(values) != 3:
            raise ValueError(f"Invalid coordinates '{text}'")
        return cls(*values)

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.x, self.y, self.z)

    def difference(self, other: "Coordinate") -> "Coordinate":
        """Offset that moves this point onto ``other`` (``other - self``)."""
        return Coordinate(other.x - self.x, other.y - self.y, other.z - self.z)

    def translate(self, delta: "Coordinate") -> "Coordinate":
        return Coordinate(self.x + delta.x, self.y + delta.y, self.z + delta.z)

    def rotate(self, orientation: "Orientation") -> "Coordinate":
        return orientation.apply(self)

    def manhattan_distance(self, other: "Coordinate") -> int:
        return abs(other.x - self.x) + abs(other.y - self.y) + abs(other.z - self.z)

    def euclidean_distance_squared(self, other: "Coordinate") -> int:
        dx, dy, dz = other.x - self.x, other.y - self.y, other.z - self.z
        return dx * dx + dy * dy + dz * dz

    def __str__(self) -> str:
        return f"{self.x},{self.y},{self.z}"
