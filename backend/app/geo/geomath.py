"""Geographic helpers shared by planning code."""

import math
from collections.abc import Iterable

from backend.app.models.common import Coordinate

EARTH_RADIUS_M = 6_371_000.0


def haversine_m(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two coordinates in meters.

    Uses a spherical Earth of mean radius, which is accurate enough for
    ranking nearby places against each other.
    """
    lat1, lng1 = math.radians(a.lat), math.radians(a.lng)
    lat2, lng2 = math.radians(b.lat), math.radians(b.lng)

    dlat = lat2 - lat1
    dlng = lng2 - lng1

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def centroid(points: Iterable[Coordinate]) -> Coordinate:
    """Arithmetic mean of latitudes and longitudes.

    Not a geodesic centroid; only used as a local bias point. Raises
    ValueError on empty input, callers must supply their own fallback.
    """
    pts = list(points)
    if not pts:
        raise ValueError("centroid of an empty point set is undefined")

    return Coordinate(
        lat=sum(p.lat for p in pts) / len(pts),
        lng=sum(p.lng for p in pts) / len(pts),
    )
