"""
Tests for the registration engine.

The reference scenario (tests/sample_data/reference_scanners.txt) is the
primary end-to-end regression: five scanners registering to 79 unique
beacons with a largest scanner distance of 3621.
"""

from pathlib import Path
import sys

import numpy as np
import pytest

# Ensure src is importable
sys.path.append(str(Path(__file__).parent.parent / "src"))

from scanner_registration.alignment.registration import (
    RegistrationEngine,
    RegistrationResult,
    max_manhattan_distance,
    register,
)
from scanner_registration.geometry import Coordinate, ORIENTATIONS, Orientation, Scanner
from scanner_registration.preprocessing.loader import ScannerReportLoader

REFERENCE_REPORT = Path(__file__).parent / "sample_data" / "reference_scanners.txt"

REFERENCE_POSITIONS = {
    0: Coordinate(0, 0, 0),
    1: Coordinate(68, -1246, -43),
    2: Coordinate(1105, -1205, 1229),
    3: Coordinate(-92, -2380, -20),
    4: Coordinate(-20, -1133, 1061),
}


def _random_beacons(n: int, seed: int, low: int = -1000, high: int = 1001):
    rng = np.random.default_rng(seed)
    pts = set()
    while len(pts) < n:
        pts.add(Coordinate(*map(int, rng.integers(low, high, size=3))))
    return sorted(pts, key=Coordinate.as_tuple)


def _observe(index: int, global_beacons, orientation: Orientation, position: Coordinate) -> Scanner:
    inverse = orientation.inverse()
    return Scanner.from_beacons(index, [inverse.apply(position.difference(b)) for b in global_beacons])


@pytest.fixture(scope="module")
def reference_scanners():
    return ScannerReportLoader().load(str(REFERENCE_REPORT))


@pytest.fixture(scope="module")
def reference_result(reference_scanners):
    return register(reference_scanners)


class TestReferenceScenario:
    def test_unique_beacon_count(self, reference_result):
        assert reference_result is not None
        assert reference_result.unique_beacon_count == 79
        assert len(reference_result.beacons) == 79

    def test_max_scanner_distance(self, reference_result):
        assert reference_result.max_scanner_distance == 3621

    def test_scanner_positions(self, reference_result):
        positions = {s.index: s.position for s in reference_result.scanners}
        assert positions == REFERENCE_POSITIONS

    def test_scanners_ordered_and_placed(self, reference_result):
        assert [s.index for s in reference_result.scanners] == [0, 1, 2, 3, 4]
        assert all(s.placed for s in reference_result.scanners)

    def test_seed_defines_global_frame(self, reference_scanners, reference_result):
        seed = reference_result.scanners[0]
        assert seed.orientation == Orientation.identity()
        assert seed.beacons == reference_scanners[0].beacons

    def test_known_shared_beacons_land_in_global_frame(self, reference_result):
        scanner_1 = reference_result.scanners[1]
        for beacon in [Coordinate(-618, -824, -621), Coordinate(459, -707, 401), Coordinate(-485, -357, 347)]:
            assert beacon in scanner_1.beacons

    def test_union_never_exceeds_total(self, reference_scanners, reference_result):
        total = sum(len(s) for s in reference_scanners)
        assert total == 127
        assert reference_result.unique_beacon_count <= total

    def test_attempts_counted(self, reference_result):
        assert reference_result.attempts >= 4

    def test_beacon_observations(self, reference_result):
        observations = reference_result.beacon_observations()
        assert len(observations) == 79
        assert sum(observations.values()) == 127
        assert observations[Coordinate(-618, -824, -621)] >= 2


def test_single_scanner():
    scanner = Scanner.from_beacons(0, _random_beacons(17, seed=1))
    result = register([scanner])
    assert result.unique_beacon_count == 17
    assert result.max_scanner_distance == 0
    assert result.attempts == 0


def test_empty_input_returns_none():
    assert register([]) is None


def test_disconnected_scanner_returns_none(reference_scanners):
    loner = Scanner.from_beacons(2, _random_beacons(25, seed=7, low=20000, high=21001))
    assert register([reference_scanners[0], reference_scanners[1], loner]) is None


def test_transitive_placement_through_intermediate_scanner():
    scene = _random_beacons(60, seed=11)
    # A sees 0..24, B sees 12..47, C sees 35..59: C overlaps B only
    a = _observe(0, scene[:25], Orientation.identity(), Coordinate.origin())
    b = _observe(1, scene[12:48], ORIENTATIONS[7], Coordinate(300, -200, 100))
    c = _observe(2, scene[35:], ORIENTATIONS[20], Coordinate(-900, 450, 1200))

    # C comes before B so it has to stay pending for a round
    result = RegistrationEngine().register([a, c, b])

    assert result is not None
    placed = {s.index: s for s in result.scanners}
    assert placed[2].position == Coordinate(-900, 450, 1200)
    assert placed[2].orientation == ORIENTATIONS[20]
    assert placed[2].beacons == frozenset(scene[35:])
    assert result.unique_beacon_count == 60
    assert result.max_scanner_distance == Coordinate(300, -200, 100).manhattan_distance(Coordinate(-900, 450, 1200))


def test_result_independent_of_pending_order(reference_scanners, reference_result):
    shuffled = [reference_scanners[0]] + list(reversed(reference_scanners[1:]))
    result = register(shuffled)
    assert result.unique_beacon_count == reference_result.unique_beacon_count
    assert result.max_scanner_distance == reference_result.max_scanner_distance
    assert {s.index: s.position for s in result.scanners} == REFERENCE_POSITIONS


def test_unreachable_threshold_disconnects_reference(reference_scanners):
    assert RegistrationEngine(min_overlap=27).register(reference_scanners) is None


def test_parallel_matches_sequential(reference_scanners, reference_result):
    engine = RegistrationEngine(parallel=True, n_workers=2)
    result = engine.register(reference_scanners)
    assert result.unique_beacon_count == reference_result.unique_beacon_count
    assert result.max_scanner_distance == reference_result.max_scanner_distance
    assert result.scanners == reference_result.scanners


def test_max_manhattan_distance_helper():
    assert max_manhattan_distance([]) == 0
    assert max_manhattan_distance([Coordinate(1, 1, 1)]) == 0
    assert max_manhattan_distance([Coordinate(0, 0, 0), Coordinate(1, -2, 3), Coordinate(-1, 0, 0)]) == 7


def test_result_from_scanners_sorts_by_index():
    s0 = Scanner.from_beacons(0, [Coordinate(0, 0, 1)]).as_placed()
    s1 = Scanner.from_beacons(1, [Coordinate(0, 0, 1), Coordinate(5, 5, 5)]).translate(Coordinate(3, 0, 0))
    result = RegistrationResult.from_scanners([s1, s0])
    assert [s.index for s in result.scanners] == [0, 1]
    assert result.unique_beacon_count == 3
    assert result.max_scanner_distance == 3
