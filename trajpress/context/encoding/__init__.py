"""
Encoding context for trajectory serialization.
"""

from trajpress.context.encoding.varint import (
    decode_varint,
    decode_varint_list,
    encode_varint,
    encode_varint_list,
    estimate_varint_size,
    zigzag_decode,
    zigzag_encode,
)
from trajpress.context.encoding.point_codec import (
    PointCodec,
    decode,
    encode,
    encode_absolute,
    encode_delta,
    peek_header,
    snap_to_grid,
)

__all__ = [
    'encode_varint',
    'decode_varint',
    'encode_varint_list',
    'decode_varint_list',
    'estimate_varint_size',
    'zigzag_encode',
    'zigzag_decode',
    'PointCodec',
    'decode',
    'encode',
    'encode_absolute',
    'encode_delta',
    'peek_header',
    'snap_to_grid',
]
