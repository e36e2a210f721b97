"""
Douglas-Peucker trajectory simplification

Reduces the number of points in a trajectory while keeping every dropped point
within `epsilon` of the line through the kept endpoints that bracket it. The
distance is to the infinite line, not the segment, so a point that doubles
back past an endpoint can be dropped while far from the segment itself.

Distance model: (latitude, longitude) are treated as a flat 2-D plane measured
in degrees. At the tolerances used for GPS tracks (~0.001 degrees) the
distortion this introduces is negligible. Altitude and time never enter the
distance.

The divide-and-conquer runs on an explicit stack of (start, end) index pairs,
so a long trajectory that cannot be simplified does not exhaust the call stack.
"""

import math
from typing import List, Sequence

from trajpress.errors import InvalidArgument
from trajpress.models import Point
from trajpress.protocols import SimplifierProtocol


def _check_epsilon(epsilon: float) -> None:
    # `not >=` also rejects NaN
    if not epsilon >= 0:
        raise InvalidArgument(f"epsilon must be non-negative, got {epsilon}")


def _distance_squared(point: Point, start: Point, end: Point) -> float:
    dx = end.longitude - start.longitude
    dy = end.latitude - start.latitude
    px = point.longitude - start.longitude
    py = point.latitude - start.latitude

    length_squared = dx * dx + dy * dy
    if length_squared == 0:
        # Degenerate segment: fall back to point-to-point distance
        return px * px + py * py

    cross = dx * py - dy * px
    return cross * cross / length_squared


def perpendicular_distance(point: Point, start: Point, end: Point) -> float:
    """
    Distance from point to the infinite line through start and end, in degrees.

    When start and end coincide the distance to start is returned instead.
    """
    return math.sqrt(_distance_squared(point, start, end))


def simplify_mask(points: Sequence[Point], epsilon: float) -> List[bool]:
    """
    Compute which points survive simplification

    Args:
        points: Trajectory sorted by timestamp
        epsilon: Maximum allowed deviation in degrees, must be >= 0

    Returns:
        One flag per input point; True means the point is kept

    Raises:
        InvalidArgument: epsilon is negative or NaN
    """
    _check_epsilon(epsilon)

    if len(points) <= 2:
        return [True] * len(points)

    keep = [False] * len(points)
    keep[0] = True
    keep[-1] = True

    epsilon_squared = epsilon * epsilon
    stack = [(0, len(points) - 1)]

    while stack:
        start, end = stack.pop()
        if end - start <= 1:
            continue

        first, last = points[start], points[end]
        max_distance = 0.0
        max_index = start

        for i in range(start + 1, end):
            d = _distance_squared(points[i], first, last)
            # Strict comparison keeps the first of several equal maxima
            if d > max_distance:
                max_distance = d
                max_index = i

        if max_distance > epsilon_squared:
            keep[max_index] = True
            stack.append((start, max_index))
            stack.append((max_index, end))

    return keep


def simplify(points: Sequence[Point], epsilon: float) -> List[Point]:
    """
    Simplify a trajectory with the Douglas-Peucker algorithm

    The first and last points are always kept; kept points stay in their
    original order and no new points are created. The input is not modified.

    Args:
        points: Trajectory sorted by timestamp
        epsilon: Maximum allowed deviation in degrees, must be >= 0

    Returns:
        New list with the retained points

    Raises:
        InvalidArgument: epsilon is negative or NaN

    Example:
        >>> a, b, c = Point(0, 0, 0, 0), Point(1, 0, 5, 0), Point(2, 0, 10, 0)
        >>> simplify([a, b, c], 0.01) == [a, c]
        True
    """
    keep = simplify_mask(points, epsilon)
    return [point for point, kept in zip(points, keep) if kept]


class DouglasPeuckerSimplifier(SimplifierProtocol):
    """Douglas-Peucker simplifier bound to one tolerance"""

    def __init__(self, epsilon: float):
        _check_epsilon(epsilon)
        self.epsilon = epsilon

    def simplify(self, points: Sequence[Point]) -> List[Point]:
        return simplify(points, self.epsilon)

    def __repr__(self):
        return f"DouglasPeuckerSimplifier(epsilon={self.epsilon})"
