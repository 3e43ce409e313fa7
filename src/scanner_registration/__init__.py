"""
Scanner Registration Package

A Python package for placing a fleet of beacon scanners into one global frame.
Each scanner only reports beacon positions relative to itself, in an unknown
axis-aligned orientation. Pairs of scanners are aligned by searching the 24
orientations for a translation that makes at least 12 beacons coincide, and
the alignments are propagated from the first scanner to all others.
"""

__version__ = "0.1.0"

from .geometry import *
from .alignment import *
from .preprocessing import *
from .utils import *

__all__ = [
    "geometry",
    "alignment",
    "preprocessing",
    "utils",
    "visualization",
    "acceleration",
]
