"""
Compressor: trajectory simplification plus compact binary encoding

Pipeline:
- Douglas-Peucker simplification bounded by epsilon (degrees)
- Absolute encoding: fixed-width records, kept for size comparison
- Delta encoding: baseline record + zigzag varint deltas
- Archive: MessagePack container compressed with Zstandard
"""

import time
from pathlib import Path
from typing import Optional, Sequence, Tuple

import msgpack
import zstandard as zstd
from rich.console import Console

from trajpress.context.encoding.point_codec import PointCodec
from trajpress.context.simplification.douglas_peucker import DouglasPeuckerSimplifier
from trajpress.errors import DecodingCorrupt
from trajpress.models import (
    FORMAT_VERSION,
    CompressedTrajectory,
    CompressionStats,
    Point,
    Trajectory,
    Variant,
)

# 1000 micro-degrees, roughly 100 m
DEFAULT_EPSILON = 0.001
DEFAULT_ZSTD_LEVEL = 15

SUPPORTED_VERSIONS = (FORMAT_VERSION,)


class TrajectoryCompressor:
    """
    Simplify-then-encode trajectory compressor

    Usage:
        compressor = TrajectoryCompressor(epsilon=0.001)
        compressed, stats = compressor.compress(points)
        compressor.save(Path("track.tpz"))
    """

    def __init__(self, epsilon: float = DEFAULT_EPSILON, zstd_level: int = DEFAULT_ZSTD_LEVEL,
                 console: Optional[Console] = None):
        self.simplifier = DouglasPeuckerSimplifier(epsilon)
        self.encoders = {variant: PointCodec(variant) for variant in Variant}
        self.zstd_level = zstd_level
        self.console = console or Console()
        self.compressed_data: Optional[CompressedTrajectory] = None

    @property
    def epsilon(self) -> float:
        return self.simplifier.epsilon

    def compress(self, points: Sequence[Point], source_size: int = 0,
                 verbose: bool = False) -> Tuple[CompressedTrajectory, CompressionStats]:
        """
        Simplify a trajectory and encode it with both variants

        Args:
            points: Trajectory sorted by timestamp
            source_size: Size of the raw input in bytes, for reporting
            verbose: Print progress information

        Returns:
            Tuple of (compressed_data, compression_stats)
        """
        start_time = time.perf_counter()

        if verbose:
            self.console.print(f"Simplifying {len(points):,} points (epsilon={self.epsilon})...")
        simplified = self.simplifier.simplify(points)
        if verbose:
            self.console.print(f"  kept {len(simplified):,} points")

        absolute = self.encoders[Variant.ABSOLUTE].encode(simplified)
        delta = self.encoders[Variant.DELTA].encode(simplified)
        if verbose:
            self.console.print(f"  absolute: {len(absolute):,} bytes, delta: {len(delta):,} bytes")

        self.compressed_data = CompressedTrajectory(
            epsilon=self.epsilon,
            original_count=len(points),
            simplified_count=len(simplified),
            absolute=absolute,
            delta=delta,
        )

        stats = CompressionStats(
            original_points=len(points),
            simplified_points=len(simplified),
            absolute_size=len(absolute),
            delta_size=len(delta),
            compression_time=time.perf_counter() - start_time,
            source_size=source_size,
        )
        return self.compressed_data, stats

    def save(self, filepath: Path, variant: Variant = Variant.DELTA, verbose: bool = False) -> int:
        """Save one encoded buffer as a MessagePack + Zstandard archive

        Args:
            filepath: Output file path
            variant: Which buffer to store
            verbose: Print archive size

        Returns:
            Archive size in bytes
        """
        if not self.compressed_data:
            raise ValueError("No compressed data to save")

        cd = self.compressed_data
        payload = cd.delta if variant is Variant.DELTA else cd.absolute

        output = {
            'version': cd.version,
            'variant': variant.name.lower(),
            'epsilon': cd.epsilon,
            'original_count': cd.original_count,
            'simplified_count': cd.simplified_count,
            'payload': payload,
        }

        msgpack_data = msgpack.packb(output, use_bin_type=True)
        compressed = zstd.ZstdCompressor(level=self.zstd_level).compress(msgpack_data)

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, 'wb') as f:
            f.write(compressed)

        if verbose:
            self.console.print(f"Saved {variant.name.lower()} archive to {filepath}")
            self.console.print(f"   MessagePack size: {len(msgpack_data):,} bytes")
            self.console.print(f"   Final size: {len(compressed):,} bytes")
        return len(compressed)

    @staticmethod
    def load(filepath: Path) -> CompressedTrajectory:
        """Load an archive written by save() (zstd -> MessagePack)"""
        with open(filepath, 'rb') as f:
            compressed_bytes = f.read()

        try:
            data = msgpack.unpackb(zstd.ZstdDecompressor().decompress(compressed_bytes), raw=False)
        except (zstd.ZstdError, msgpack.UnpackException, ValueError, TypeError) as exc:
            raise DecodingCorrupt(f"{Path(filepath).name} is not a trajpress archive: {exc}") from exc
        if not isinstance(data, dict):
            raise DecodingCorrupt(f"{Path(filepath).name} is not a trajpress archive")

        version = data.get('version')
        if version not in SUPPORTED_VERSIONS:
            raise ValueError(f"Unsupported format version {version}. Please re-compress with this version.")

        try:
            compressed = CompressedTrajectory(
                version=version,
                epsilon=data['epsilon'],
                original_count=data['original_count'],
                simplified_count=data['simplified_count'],
            )
            variant, payload = data['variant'], data['payload']
        except KeyError as exc:
            raise DecodingCorrupt(f"Archive is missing field {exc}") from exc

        if variant == 'absolute':
            compressed.absolute = payload
        elif variant == 'delta':
            compressed.delta = payload
        else:
            raise DecodingCorrupt(f"Unknown archive variant: {variant!r}")
        return compressed

    def decompress(self, compressed: Optional[CompressedTrajectory] = None) -> Trajectory:
        """
        Decode the simplified trajectory

        Args:
            compressed: CompressedTrajectory (uses self.compressed_data if None)

        Returns:
            Simplified points
        """
        if compressed is None:
            compressed = self.compressed_data
        if compressed is None:
            raise ValueError("No compressed data available")

        if compressed.delta:
            return self.encoders[Variant.DELTA].decode(compressed.delta)
        return self.encoders[Variant.ABSOLUTE].decode(compressed.absolute)
