"""
Geometry Module

Exact integer geometry for scanner registration:
- Coordinate value type and vector arithmetic
- The 24 axis-aligned orientations of a scanner
- Immutable Scanner values (beacon set + placement)
"""

from .coordinate import Coordinate
from .orientation import (
    ORIENTATIONS,
    Orientation,
    enumerate_orientations,
    verify_rotation_group,
)
from .scanner import BeaconSet, Scanner

__all__ = [
    "Coordinate",
    "Orientation",
    "ORIENTATIONS",
    "enumerate_orientations",
    "verify_rotation_group",
    "BeaconSet",
    "Scanner",
]
