"""
Context layer - domain-specific implementations.
"""

from trajpress.context.simplification import DouglasPeuckerSimplifier, simplify
from trajpress.context.encoding import PointCodec, decode, encode_absolute, encode_delta
from trajpress.context.io import load_plt_directory, parse_plt

__all__ = [
    'DouglasPeuckerSimplifier',
    'simplify',
    'PointCodec',
    'decode',
    'encode_absolute',
    'encode_delta',
    'load_plt_directory',
    'parse_plt',
]
