"""Pure geographic helpers for rendezvous mobility.

This module contains stateless operations on latitude/longitude points:
- Great-circle (haversine) distance
- Per-axis linear interpolation
- Flat-earth projection to/from a local metric frame

All functions operate on the immutable GeoPoint value type, making them
easy to test and reuse independently of the simulation framework.

Author: rendezvous_mobility contributors
Date: October 19, 2026
"""

import math
from dataclasses import dataclass
from typing import Tuple

EARTH_RADIUS_KM: float = 6371.0

# Meters per degree of latitude used by the local projection.
METERS_PER_DEGREE: float = 111_111.0


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.latitude, self.longitude)


def haversine_distance(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points.

    Args:
        a: First point (degrees).
        b: Second point (degrees).

    Returns:
        Distance in kilometers on a sphere of radius EARTH_RADIUS_KM.
    """
    if a == b:
        return 0.0

    lat_a = math.radians(a.latitude)
    lat_b = math.radians(b.latitude)
    dlat = math.radians(b.latitude - a.latitude)
    dlon = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat_a) * math.cos(lat_b) * math.sin(dlon / 2) ** 2
    )
    # Rounding can push h a hair outside [0, 1] for near-antipodal points.
    h = min(1.0, max(0.0, h))
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c


def interpolate(start: GeoPoint, end: GeoPoint, fraction: float) -> GeoPoint:
    """Linear interpolation applied independently on each axis.

    current = start + (end - start) * fraction
    """
    return GeoPoint(
        latitude=start.latitude + (end.latitude - start.latitude) * fraction,
        longitude=start.longitude + (end.longitude - start.longitude) * fraction,
    )


def project_to_local(point: GeoPoint, origin: GeoPoint) -> Tuple[float, float]:
    """Project a point to (x, y) meters east/north of `origin`.

    Equirectangular approximation; adequate for the few-kilometer extents a
    rendezvous covers.
    """
    scale_x = METERS_PER_DEGREE * math.cos(math.radians(origin.latitude))
    x = (point.longitude - origin.longitude) * scale_x
    y = (point.latitude - origin.latitude) * METERS_PER_DEGREE
    return (x, y)


def unproject_from_local(xy: Tuple[float, float], origin: GeoPoint) -> GeoPoint:
    """Inverse of project_to_local."""
    x, y = xy[0], xy[1]
    scale_x = METERS_PER_DEGREE * math.cos(math.radians(origin.latitude))
    if abs(scale_x) < 1e-6:
        raise ValueError("origin latitude must not be a pole")
    return GeoPoint(
        latitude=origin.latitude + y / METERS_PER_DEGREE,
        longitude=origin.longitude + x / scale_x,
    )
