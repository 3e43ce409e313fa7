"""
Scanner Orientations

A scanner may face along any of the six axis directions and have any of four
"up" directions, giving the 24 proper rotations of the cube. Each rotation is
a signed permutation matrix with determinant +1.

Rather than listing the 24 matrices by hand, the group is generated as the
closure of two quarter turns (about X and about Z) under composition, and the
result is checked with ``verify_rotation_group``.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from itertools import product
from typing import Iterable, Iterator, Sequence, Tuple

import numpy as np

from .coordinate import Coordinate

Rows = Tuple[Tuple[int, int, int], Tuple[int, int, int], Tuple[int, int, int]]

ROTATION_GROUP_SIZE = 24


@dataclass(frozen=True)
class Orientation:
    """Rigid axis-aligned rotation stored as integer matrix rows."""

    rows: Rows

    @classmethod
    def identity(cls) -> "Orientation":
        return cls(((1, 0, 0), (0, 1, 0), (0, 0, 1)))

    @classmethod
    def from_matrix(cls, matrix: np.ndarray) -> "Orientation":
        m = np.asarray(matrix, dtype=np.int64)
        if m.shape != (3, 3):
            raise ValueError(f"Orientation matrix must be 3x3, got {m.shape}")
        return cls(tuple(tuple(int(v) for v in row) for row in m))  # type: ignore[arg-type]

    @property
    def matrix(self) -> np.ndarray:
        return np.array(self.rows, dtype=np.int64)

    def apply(self, coordinate: Coordinate) -> Coordinate:
        (a, b, c), (d, e, f), (g, h, i) = self.rows
        x, y, z = coordinate.x, coordinate.y, coordinate.z
        return Coordinate(a * x + b * y + c * z, d * x + e * y + f * z, g * x + h * y + i * z)

    def compose(self, other: "Orientation") -> "Orientation":
        """Rotation equivalent to applying ``other`` first, then ``self``."""
        return Orientation.from_matrix(self.matrix @ other.matrix)

    def inverse(self) -> "Orientation":
        # Orthogonal matrix: inverse is the transpose
        return Orientation.from_matrix(self.matrix.T)

    def determinant(self) -> int:
        return int(round(np.linalg.det(self.matrix)))

    def is_signed_permutation(self) -> bool:
        m = np.abs(self.matrix)
        return bool(
            np.isin(m, (0, 1)).all()
            and (m.sum(axis=0) == 1).all()
            and (m.sum(axis=1) == 1).all()
        )


# Quarter turns about X and Z; together they generate the full rotation group
QUARTER_TURN_X = Orientation(((1, 0, 0), (0, 0, -1), (0, 1, 0)))
QUARTER_TURN_Z = Orientation(((0, -1, 0), (1, 0, 0), (0, 0, 1)))
GENERATORS: Tuple[Orientation, ...] = (QUARTER_TURN_X, QUARTER_TURN_Z)


def enumerate_orientations(generators: Sequence[Orientation] = GENERATORS) -> Iterator[Orientation]:
    """
    Lazily yield every orientation reachable from the identity.

    Breadth-first closure of ``generators`` under composition. The identity is
    always yielded first and no orientation is yielded twice. Each call returns
    a fresh iterator, so the sequence can be restarted at will.

    Args:
        generators: Rotations to close over (default: quarter turns about X and Z)

    Yields:
        Distinct Orientation values
    """
    identity = Orientation.identity()
    seen = {identity}
    frontier = deque([identity])
    yield identity
    while frontier:
        current = frontier.popleft()
        for generator in generators:
            candidate = generator.compose(current)
            if candidate not in seen:
                seen.add(candidate)
                frontier.append(candidate)
                yield candidate


def _face_directions() -> Tuple[Coordinate, ...]:
    faces = []
    for axis, sign in product(range(3), (1, -1)):
        values = [0, 0, 0]
        values[axis] = sign
        faces.append(Coordinate(*values))
    return tuple(faces)


FACE_DIRECTIONS = _face_directions()


def verify_rotation_group(orientations: Iterable[Orientation]) -> None:
    """
    Check that ``orientations`` is exactly the rotation group of the cube.

    Raises:
        ValueError: If the set has duplicates, the wrong size, an improper or
            non-axis-aligned member, or is not closed under composition.
    """
    members = list(orientations)
    distinct = set(members)
    if len(distinct) != len(members):
        raise ValueError(f"Orientation sequence contains {len(members) - len(distinct)} duplicate(s)")
    if len(distinct) != ROTATION_GROUP_SIZE:
        raise ValueError(f"Expected {ROTATION_GROUP_SIZE} orientations, got {len(distinct)}")

    faces = set(FACE_DIRECTIONS)
    for orientation in members:
        if not orientation.is_signed_permutation():
            raise ValueError(f"Orientation {orientation.rows} is not a signed permutation")
        if orientation.determinant() != 1:
            raise ValueError(f"Orientation {orientation.rows} has determinant {orientation.determinant()}")
        if {orientation.apply(face) for face in FACE_DIRECTIONS} != faces:
            raise ValueError(f"Orientation {orientation.rows} is not a bijection on the face directions")

    for first, second in product(members, repeat=2):
        if first.compose(second) not in distinct:
            raise ValueError("Orientation set is not closed under composition")


ORIENTATIONS: Tuple[Orientation, ...] = tuple(enumerate_orientations())
