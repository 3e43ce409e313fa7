"""
Tests for translation voting between two beacon sets.
"""

from pathlib import Path
import sys

import numpy as np
import pytest

# Ensure src is importable
sys.path.append(str(Path(__file__).parent.parent / "src"))

from scanner_registration.alignment.overlap import DEFAULT_MIN_OVERLAP, OverlapMatcher
from scanner_registration.geometry.coordinate import Coordinate


def _points(n: int, low: int, high: int, seed: int):
    rng = np.random.default_rng(seed)
    pts = set()
    while len(pts) < n:
        pts.add(Coordinate(*map(int, rng.integers(low, high, size=3))))
    return sorted(pts, key=Coordinate.as_tuple)


def _overlapping_sets(n_shared: int, shift: Coordinate, seed: int = 0):
    """Candidate and reference sharing ``n_shared`` beacons once the candidate is shifted."""
    shared = _points(n_shared, -1000, 1001, seed)
    # Disjoint ranges so the extra beacons never vote for ``shift``
    candidate_extra = _points(10, 5000, 6001, seed + 1)
    reference_extra = _points(10, -6000, -4999, seed + 2)
    candidate = shared + candidate_extra
    reference = [p.translate(shift) for p in shared] + reference_extra
    return candidate, reference


def test_default_threshold_is_twelve():
    assert DEFAULT_MIN_OVERLAP == 12
    assert OverlapMatcher().min_overlap == 12


def test_finds_translation_with_exactly_twelve_shared():
    shift = Coordinate(68, -1246, -43)
    candidate, reference = _overlapping_sets(12, shift)
    assert OverlapMatcher().find_translation(candidate, reference) == shift


def test_translation_maps_candidate_onto_reference():
    shift = Coordinate(-10, 20, -30)
    candidate, reference = _overlapping_sets(15, shift, seed=5)
    found = OverlapMatcher().find_translation(candidate, reference)
    moved = {p.translate(found) for p in candidate}
    assert len(moved & set(reference)) == 15


def test_eleven_shared_is_not_enough():
    shift = Coordinate(10, -20, 30)
    candidate, reference = _overlapping_sets(11, shift, seed=9)
    assert OverlapMatcher().find_translation(candidate, reference) is None
    assert OverlapMatcher(min_overlap=11).find_translation(candidate, reference) == shift


def test_find_match_reports_tally_at_threshold():
    shift = Coordinate(1, 1, 1)
    candidate, reference = _overlapping_sets(20, shift, seed=13)
    translation, tally = OverlapMatcher().find_match(candidate, reference)
    assert translation == shift
    assert tally == 12


def test_unrelated_sets_do_not_match():
    candidate = _points(25, -1000, 1001, seed=21)
    reference = _points(25, -1000, 1001, seed=22)
    assert OverlapMatcher().find_match(candidate, reference) is None


def test_invalid_threshold_rejected():
    with pytest.raises(ValueError):
        OverlapMatcher(min_overlap=0)
