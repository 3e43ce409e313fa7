"""
Scanner Alignment Module

This module places scanners with unknown position and orientation into one
global frame:
- OverlapMatcher: translation voting between two beacon sets
- ScannerAligner: orientation search for a single scanner pair
- RegistrationEngine: work-list propagation over all scanners
"""

from .overlap import DEFAULT_MIN_OVERLAP, OverlapMatcher
from .scanner_alignment import Alignment, ScannerAligner, align
from .registration import (
    RegistrationEngine,
    RegistrationResult,
    max_manhattan_distance,
    register,
    unique_beacons,
)

__all__ = [
    "DEFAULT_MIN_OVERLAP",
    "OverlapMatcher",
    "Alignment",
    "ScannerAligner",
    "align",
    "RegistrationEngine",
    "RegistrationResult",
    "register",
    "unique_beacons",
    "max_manhattan_distance",
]
