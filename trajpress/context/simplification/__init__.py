"""
Simplification context for trajectory point reduction.
"""

from trajpress.context.simplification.douglas_peucker import (
    DouglasPeuckerSimplifier,
    perpendicular_distance,
    simplify,
    simplify_mask,
)

__all__ = [
    'DouglasPeuckerSimplifier',
    'perpendicular_distance',
    'simplify',
    'simplify_mask',
]
