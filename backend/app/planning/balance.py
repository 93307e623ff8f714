"""Day balancing - redistribute activities so every day is reasonably full.

The partition arrives roughly clustered by geography. This is a bounded greedy
pass, not an optimal assignment: each iteration moves at most one activity from
the fullest day to the emptiest one, picking the activity that sits closest to
the receiving day.

Convergence is not guaranteed. A donor holding a single activity is never
emptied, and when no move is possible the loop stops with whatever imbalance
remains. Callers get a best-effort partition, never an error.
"""

import logging

from backend.app.config import settings
from backend.app.geo.geomath import centroid, haversine_m
from backend.app.models.activity import Activity, BalanceReport
from backend.app.models.common import Coordinate
from backend.app.utils.metrics import metrics

logger = logging.getLogger(__name__)


def day_bounds(total: int, number_of_days: int, min_floor: int | None = None) -> tuple[int, int, int]:
    """Return (target, min_per_day, max_per_day) for a trip."""
    floor = settings.balance_min_floor if min_floor is None else min_floor
    target = total // number_of_days
    return target, max(floor, target - 1), target + 2


def _extremes(clusters: list[list[Activity]]) -> tuple[int, int]:
    """Indices of the smallest and largest day, first occurrence wins."""
    min_idx = max_idx = 0
    for idx, cluster in enumerate(clusters):
        if len(cluster) < len(clusters[min_idx]):
            min_idx = idx
        if len(cluster) > len(clusters[max_idx]):
            max_idx = idx
    return min_idx, max_idx


def _nearest_index(cluster: list[Activity], point: Coordinate) -> int:
    best_idx = 0
    best_dist = float("inf")
    for idx, activity in enumerate(cluster):
        dist = haversine_m(activity.coordinate, point)
        if dist < best_dist:
            best_dist = dist
            best_idx = idx
    return best_idx


def balance_clusters_with_report(
    clusters: list[list[Activity]],
    number_of_days: int,
    start: Coordinate,
    *,
    max_iterations: int | None = None,
) -> tuple[list[list[Activity]], BalanceReport]:
    """Balance day clusters in place and describe what happened.

    Args:
        clusters: One list of activities per trip day. Taken over for the
            duration of the call and returned.
        number_of_days: Trip length. Only sets the per-day target; the
            partition may hold fewer clusters (or none) than days.
        start: Trip starting point, used as the receiver centroid for an
            empty day.
        max_iterations: Iteration ceiling (defaults to settings).

    Returns:
        (clusters, report) where clusters is the same list object passed in.

    Raises:
        ValueError: If number_of_days is not positive.
    """
    if number_of_days <= 0:
        raise ValueError(f"number_of_days must be positive, got {number_of_days}")

    ceiling = settings.balance_max_iterations if max_iterations is None else max_iterations
    total = sum(len(c) for c in clusters)
    target, min_per_day, max_per_day = day_bounds(total, number_of_days)

    logger.info(
        f"[balance] target per day: {target}, min: {min_per_day}, max: {max_per_day}"
    )

    iterations = 0
    moves = 0
    rebalanced = total > 0

    while rebalanced and iterations < ceiling:
        rebalanced = False
        iterations += 1

        min_idx, max_idx = _extremes(clusters)
        receiver = clusters[min_idx]
        donor = clusters[max_idx]

        if len(receiver) < min_per_day or len(donor) > max_per_day:
            anchor = centroid(a.coordinate for a in receiver) if receiver else start
            best = _nearest_index(donor, anchor)

            if len(donor) > 1:
                receiver.append(donor.pop(best))
                moves += 1
                rebalanced = True

    sizes = [len(c) for c in clusters]
    converged = all(min_per_day <= size <= max_per_day for size in sizes)

    logger.info(
        f"[balance] after rebalancing ({iterations} attempts): {', '.join(map(str, sizes))}",
        extra={"structured": {"moves": moves, "converged": converged}},
    )
    metrics.record_balance(moves, converged)

    report = BalanceReport(
        target_per_day=target,
        min_per_day=min_per_day,
        max_per_day=max_per_day,
        iterations=iterations,
        moves=moves,
        sizes=sizes,
        converged=converged,
    )
    return clusters, report


def balance_clusters(
    clusters: list[list[Activity]],
    number_of_days: int,
    start: Coordinate,
) -> list[list[Activity]]:
    """Balance day clusters in place; see balance_clusters_with_report."""
    balanced, _ = balance_clusters_with_report(clusters, number_of_days, start)
    return balanced
