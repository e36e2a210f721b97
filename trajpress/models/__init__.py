"""
Data models and schemas for trajpress.

This module contains pure data structures with no business logic.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List

__all__ = [
    'Point',
    'Trajectory',
    'Variant',
    'CompressionStats',
    'CompressedTrajectory',
    'COORDINATE_SCALE',
    'ALTITUDE_SCALE',
    'FORMAT_VERSION',
]

# Fixed-point grid used by the codec: micro-degrees (~11 cm at the equator)
COORDINATE_SCALE = 10**6
# Altitude is kept in thousandths of the source unit
ALTITUDE_SCALE = 10**3

FORMAT_VERSION = "1.0"


@dataclass(frozen=True, slots=True)
class Point:
    """A single GPS fix.

    Attributes:
        timestamp: Unix epoch milliseconds.
        latitude: Latitude in decimal degrees.
        longitude: Longitude in decimal degrees.
        altitude: Altitude as recorded by the source. Geolife uses feet and
            -777 for "unknown"; the value is carried through untouched.
    """

    timestamp: int
    latitude: float
    longitude: float
    altitude: float


Trajectory = List[Point]


class Variant(Enum):
    """Encoding variant; the value is the tag byte written to the header."""
    ABSOLUTE = 1
    DELTA = 2


@dataclass
class CompressionStats:
    """Statistics about one simplify + encode run"""
    original_points: int
    simplified_points: int
    absolute_size: int
    delta_size: int
    compression_time: float
    source_size: int = 0
    archive_size: int = 0

    @property
    def point_ratio(self) -> float:
        """Share of points kept by simplification, in percent."""
        if self.original_points == 0:
            return 0.0
        return self.simplified_points / self.original_points * 100.0

    @property
    def delta_vs_absolute(self) -> float:
        """Delta buffer size relative to the absolute buffer, in percent."""
        if self.absolute_size == 0:
            return 0.0
        return self.delta_size / self.absolute_size * 100.0

    @property
    def delta_vs_source(self) -> float:
        """Delta buffer size relative to the raw source files, in percent."""
        if self.source_size == 0:
            return 0.0
        return self.delta_size / self.source_size * 100.0

    def __repr__(self):
        return (f"CompressionStats(points={self.simplified_points}/{self.original_points}, "
                f"delta={self.delta_size}B, absolute={self.absolute_size}B, "
                f"time={self.compression_time:.2f}s)")


@dataclass
class CompressedTrajectory:
    """Container for encoded trajectory buffers with metadata."""
    version: str = FORMAT_VERSION
    epsilon: float = 0.0
    original_count: int = 0
    simplified_count: int = 0

    # Independently decodable buffers; an archive loaded from disk only
    # carries the variant it was saved with.
    absolute: bytes = b''
    delta: bytes = b''
