"""Geometric-median estimation for rendezvous points.

Weiszfeld's algorithm applied to raw latitude/longitude pairs:

    w_i = 1 / d(p_i, x_k)          (haversine, skipping d == 0)
    x_{k+1} = sum(w_i * p_i) / sum(w_i)

The iteration stops when the Euclidean change between x_k and x_{k+1},
measured directly in degrees, falls below `epsilon`. Weighting uses
great-circle distance while stopping uses coordinate distance; the two
are intentionally kept as they are.

This is a planar approximation of the spherical median and is meant for
agents a few kilometers apart.

Author: rendezvous_mobility contributors
Date: October 19, 2026
"""

import logging
import math
from dataclasses import dataclass
from typing import Sequence

from .geo import GeoPoint, haversine_distance

logger = logging.getLogger(__name__)


class EmptyInputError(ValueError):
    """Raised when a median or a simulation is requested for zero points."""


@dataclass(frozen=True)
class MedianResult:
    """Outcome of a median estimation.

    Attributes:
        point: Best estimate of the geometric median.
        converged: False when max_iterations ran out before the change
            dropped below epsilon. The estimate is still usable.
        iterations: Number of Weiszfeld iterations performed.
    """
    point: GeoPoint
    converged: bool
    iterations: int


def mean_point(points: Sequence[GeoPoint]) -> GeoPoint:
    """Componentwise arithmetic mean (not a spherical centroid)."""
    if not points:
        raise EmptyInputError("No points provided")
    n = len(points)
    return GeoPoint(
        latitude=sum(p.latitude for p in points) / n,
        longitude=sum(p.longitude for p in points) / n,
    )


def solve_geometric_median(
    points: Sequence[GeoPoint],
    max_iterations: int = 100,
    epsilon: float = 1e-10,
) -> MedianResult:
    """Estimate the point minimizing the summed distance to `points`.

    Args:
        points: Input positions. Must not be empty.
        max_iterations: Upper bound on Weiszfeld iterations.
        epsilon: Convergence threshold on the coordinate change (degrees).

    Returns:
        MedianResult with the estimate and convergence information.

    Raises:
        EmptyInputError: If `points` is empty.
    """
    if not points:
        raise EmptyInputError("No points provided")

    if len(points) == 1:
        return MedianResult(point=points[0], converged=True, iterations=0)

    current = mean_point(points)

    for iteration in range(1, max_iterations + 1):
        numerator_lat = 0.0
        numerator_lon = 0.0
        denominator = 0.0

        for point in points:
            distance = haversine_distance(current, point)
            # A point sitting on the estimate gets no influence this round.
            if distance == 0:
                continue
            weight = 1.0 / distance
            numerator_lat += weight * point.latitude
            numerator_lon += weight * point.longitude
            denominator += weight

        if denominator == 0:
            # Every input coincides with the estimate.
            return MedianResult(point=current, converged=True, iterations=iteration)

        candidate = GeoPoint(
            latitude=numerator_lat / denominator,
            longitude=numerator_lon / denominator,
        )

        change = math.hypot(
            candidate.latitude - current.latitude,
            candidate.longitude - current.longitude,
        )
        if change < epsilon:
            logger.debug("Median converged after %d iterations (change=%.3e)", iteration, change)
            return MedianResult(point=candidate, converged=True, iterations=iteration)

        current = candidate

    logger.warning(
        "Median did not converge within %d iterations (epsilon=%.3e); using last estimate",
        max_iterations,
        epsilon,
    )
    return MedianResult(point=current, converged=False, iterations=max_iterations)


def sum_of_distances(points: Sequence[GeoPoint], candidate: GeoPoint) -> float:
    """Total haversine distance (km) from every point to `candidate`."""
    return sum(haversine_distance(p, candidate) for p in points)
