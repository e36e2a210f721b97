"""
trajpress - GPS trajectory simplification and compact encoding

Reduces GPS trajectories with the Douglas-Peucker algorithm and serializes
them into absolute or delta-coded binary buffers.

Architecture:
- Models: Pure data structures (Point, CompressionStats, CompressedTrajectory)
- Protocols: Interface contracts (SimplifierProtocol, EncoderProtocol)
- Context: Domain implementations (Simplification, Encoding, Geolife input)
- Services: Application orchestration (TrajectoryCompressor, report)
- CLI: User interface (compress, dump commands)
"""

__version__ = "1.0.0"
__license__ = "MIT"

from trajpress import errors, models, protocols
from trajpress.models import Point, Variant
from trajpress.errors import DecodingCorrupt, EncodingOverflow, InvalidArgument
from trajpress.context import (
    DouglasPeuckerSimplifier,
    PointCodec,
    decode,
    encode_absolute,
    encode_delta,
    simplify,
)
from trajpress.services import TrajectoryCompressor, Compressor

__all__ = [
    'errors',
    'models',
    'protocols',
    'Point',
    'Variant',
    'InvalidArgument',
    'EncodingOverflow',
    'DecodingCorrupt',
    'DouglasPeuckerSimplifier',
    'PointCodec',
    'simplify',
    'encode_absolute',
    'encode_delta',
    'decode',
    'TrajectoryCompressor',
    'Compressor',
]
