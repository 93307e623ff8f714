"""Tests for day balancing."""

import random
from collections import Counter

import pytest

from backend.app.models.activity import Activity
from backend.app.models.common import Coordinate
from backend.app.planning.balance import (
    balance_clusters,
    balance_clusters_with_report,
    day_bounds,
)
from tests.helpers import make_clusters


def _ids(clusters: list[list[Activity]]) -> Counter[str]:
    return Counter(a.id for cluster in clusters for a in cluster)


def test_day_bounds() -> None:
    """Test target/min/max derivation."""
    assert day_bounds(23, 5) == (4, 3, 6)
    assert day_bounds(50, 10) == (5, 4, 7)
    assert day_bounds(4, 2) == (2, 3, 4)  # minimum never drops below 3


def test_scenario_23_activities_over_5_days(start: Coordinate) -> None:
    """Test that [10,10,1,1,1] converges into [3,6] and keeps all 23."""
    clusters = make_clusters([10, 10, 1, 1, 1])

    result, report = balance_clusters_with_report(clusters, 5, start)

    assert [len(c) for c in result] == [6, 6, 4, 4, 3]
    assert sum(len(c) for c in result) == 23
    assert all(3 <= len(c) <= 6 for c in result)
    assert report.target_per_day == 4
    assert (report.min_per_day, report.max_per_day) == (3, 6)
    assert report.moves == 8
    assert report.iterations == 9
    assert report.converged is True


def test_returns_same_partition_object(start: Coordinate) -> None:
    """Test that the partition is mutated in place and handed back."""
    clusters = make_clusters([8, 1, 3])
    result = balance_clusters(clusters, 3, start)
    assert result is clusters


def test_balanced_input_is_left_untouched(start: Coordinate) -> None:
    """Test that no spurious moves happen when every day is within bounds."""
    clusters = make_clusters([4, 4, 4, 4])
    before = [list(c) for c in clusters]

    result, report = balance_clusters_with_report(clusters, 4, start)

    assert result == before
    assert report.moves == 0
    assert report.iterations == 1
    assert report.converged is True


def test_moves_nearest_activity_to_receiver() -> None:
    """Test that the donor gives up the activity closest to the receiving day."""
    donor = [
        Activity(id=f"p{i}", name=f"P{i}", latitude=0.0, longitude=float(i)) for i in range(6)
    ]
    clusters: list[list[Activity]] = [donor, []]
    start = Coordinate(lat=0.0, lng=5.1)

    balance_clusters(clusters, 2, start)

    # Empty receiver anchors on start (p5), then on its own centroid.
    assert [a.id for a in clusters[1]] == ["p5", "p4", "p3"]
    assert [a.id for a in clusters[0]] == ["p0", "p1", "p2"]


def test_single_activity_donor_is_never_emptied(start: Coordinate) -> None:
    """Test the stuck case: all days hold one activity and cannot reach the minimum."""
    clusters = make_clusters([1, 1, 1])

    result, report = balance_clusters_with_report(clusters, 3, start)

    assert [len(c) for c in result] == [1, 1, 1]
    assert report.moves == 0
    assert report.iterations == 1
    assert report.converged is False


def test_stops_at_iteration_ceiling(start: Coordinate) -> None:
    """Test termination with all 50 activities on one of 10 days."""
    clusters = make_clusters([50] + [0] * 9)

    result, report = balance_clusters_with_report(clusters, 10, start)

    assert report.iterations == 30
    assert report.moves == 30
    assert sum(len(c) for c in result) == 50
    assert report.converged is False


def test_custom_iteration_ceiling(start: Coordinate) -> None:
    clusters = make_clusters([10, 0])
    _, report = balance_clusters_with_report(clusters, 2, start, max_iterations=2)
    assert report.iterations == 2
    assert [len(c) for c in clusters] == [8, 2]


def test_empty_trip_is_returned_unchanged(start: Coordinate) -> None:
    clusters: list[list[Activity]] = [[], [], []]
    result, report = balance_clusters_with_report(clusters, 3, start)
    assert result == [[], [], []]
    assert report.iterations == 0


def test_fewer_clusters_than_days_is_not_an_error(start: Coordinate) -> None:
    """Test that the day count only drives the target, not the partition shape."""
    clusters = make_clusters([1, 1])

    result, report = balance_clusters_with_report(clusters, 3, start)

    assert result is clusters
    assert [len(c) for c in result] == [1, 1]
    assert report.target_per_day == 0
    assert report.moves == 0
    assert report.converged is False


def test_no_clusters_for_empty_pool(start: Coordinate) -> None:
    result = balance_clusters([], 3, start)
    assert result == []


def test_same_day_min_and_max_spins_to_ceiling(start: Coordinate) -> None:
    """Test that equal days below the floor shuffle in place until the ceiling."""
    clusters = make_clusters([2, 2])
    before = _ids(clusters)

    result, report = balance_clusters_with_report(clusters, 2, start)

    assert [len(c) for c in result] == [2, 2]
    assert _ids(result) == before
    assert report.iterations == 30
    assert report.moves == 30
    assert report.converged is False


def test_non_positive_day_count_raises(start: Coordinate) -> None:
    with pytest.raises(ValueError):
        balance_clusters([], 0, start)


@pytest.mark.parametrize("seed", [1, 7, 42, 123, 2024])
def test_random_partitions_conserve_activities(seed: int, start: Coordinate) -> None:
    """Test conservation, termination and no-empty-donor on random inputs."""
    rng = random.Random(seed)
    days = rng.randint(1, 8)
    sizes = [rng.randint(0, 12) for _ in range(days)]
    clusters = make_clusters(sizes)
    before = _ids(clusters)
    nonempty_before = [bool(c) for c in clusters]

    result, report = balance_clusters_with_report(clusters, days, start)

    assert _ids(result) == before
    assert report.iterations <= 30
    for was_nonempty, cluster in zip(nonempty_before, result, strict=True):
        if was_nonempty:
            assert cluster
