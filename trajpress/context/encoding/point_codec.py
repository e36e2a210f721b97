"""
Point codec: compact binary serialization of GPS trajectories

Two layouts share one header and one record format:
- ABSOLUTE: every point stored as a fixed-width record
- DELTA: first point stored as an absolute baseline, every following point
  stored as the zigzag-varint difference from the point right before it

Format (little-endian):
    [variant: 1 byte][count: 4 bytes]
    ABSOLUTE: count x [timestamp_ms: i64][lat_e6: i32][lon_e6: i32][alt_e3: i32]
    DELTA:    [baseline record] + (count - 1) x [dt][dlat][dlon][dalt] (zigzag varints)

Coordinates are fixed-point micro-degrees and altitude is in thousandths of its
unit, so both variants hold exactly the same values: delta coding adds no loss
on top of the grid quantization. Deltas are limited to signed 64-bit.
"""

import math
import struct
from typing import List, Sequence, Tuple

from trajpress.errors import DecodingCorrupt, EncodingOverflow
from trajpress.models import ALTITUDE_SCALE, COORDINATE_SCALE, Point, Variant
from trajpress.protocols import EncoderProtocol
from trajpress.context.encoding.varint import decode_signed_list, encode_signed_list

HEADER = struct.Struct('<BI')
RECORD = struct.Struct('<qiii')

FIELDS = ('timestamp', 'latitude', 'longitude', 'altitude')

_I32 = (-(1 << 31), (1 << 31) - 1)
_I64 = (-(1 << 63), (1 << 63) - 1)
_U32_MAX = (1 << 32) - 1
_RECORD_LIMITS = (_I64, _I32, _I32, _I32)


def to_fixed(value: float, scale: int) -> int:
    """Round a real value onto the fixed-point grid"""
    if not math.isfinite(value):
        raise EncodingOverflow(f"Cannot encode non-finite value: {value}")
    return round(value * scale)


def from_fixed(value: int, scale: int) -> float:
    return value / scale


def to_timestamp(value: float) -> int:
    """Accept a whole number of milliseconds; anything else is rejected"""
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    raise EncodingOverflow(f"timestamp {value!r} is not a whole number of milliseconds")


def snap_to_grid(point: Point) -> Point:
    """Return the point the codec would reproduce after a round trip."""
    return Point(
        timestamp=to_timestamp(point.timestamp),
        latitude=from_fixed(to_fixed(point.latitude, COORDINATE_SCALE), COORDINATE_SCALE),
        longitude=from_fixed(to_fixed(point.longitude, COORDINATE_SCALE), COORDINATE_SCALE),
        altitude=from_fixed(to_fixed(point.altitude, ALTITUDE_SCALE), ALTITUDE_SCALE),
    )


def _fields(point: Point, index: int) -> Tuple[int, int, int, int]:
    try:
        timestamp = to_timestamp(point.timestamp)
    except EncodingOverflow as exc:
        raise EncodingOverflow(f"Point {index}: {exc}") from exc

    values = (
        timestamp,
        to_fixed(point.latitude, COORDINATE_SCALE),
        to_fixed(point.longitude, COORDINATE_SCALE),
        to_fixed(point.altitude, ALTITUDE_SCALE),
    )
    for name, value, (low, high) in zip(FIELDS, values, _RECORD_LIMITS):
        if not low <= value <= high:
            raise EncodingOverflow(
                f"Point {index}: {name} {value} does not fit [{low}, {high}]"
            )
    return values


def _point(values: Sequence[int]) -> Point:
    timestamp, lat, lon, alt = values
    return Point(
        timestamp=timestamp,
        latitude=from_fixed(lat, COORDINATE_SCALE),
        longitude=from_fixed(lon, COORDINATE_SCALE),
        altitude=from_fixed(alt, ALTITUDE_SCALE),
    )


def encode(points: Sequence[Point], variant: Variant) -> bytes:
    """
    Serialize a point sequence with the given layout

    Args:
        points: Points to encode (may be empty)
        variant: Variant.ABSOLUTE or Variant.DELTA

    Returns:
        Encoded bytes, header included

    Raises:
        EncodingOverflow: A field or delta does not fit its binary width
    """
    if len(points) > _U32_MAX:
        raise EncodingOverflow(f"Too many points for a u32 count: {len(points)}")

    result = bytearray(HEADER.pack(variant.value, len(points)))
    previous = None

    for index, point in enumerate(points):
        current = _fields(point, index)

        if previous is None or variant is Variant.ABSOLUTE:
            result.extend(RECORD.pack(*current))
        else:
            deltas = [c - p for c, p in zip(current, previous)]
            for name, delta in zip(FIELDS, deltas):
                if not _I64[0] <= delta <= _I64[1]:
                    raise EncodingOverflow(
                        f"Point {index}: {name} delta {delta} does not fit a signed 64-bit integer"
                    )
            result.extend(encode_signed_list(deltas))

        previous = current

    return bytes(result)


def encode_absolute(points: Sequence[Point]) -> bytes:
    return encode(points, Variant.ABSOLUTE)


def encode_delta(points: Sequence[Point]) -> bytes:
    return encode(points, Variant.DELTA)


def peek_header(data: bytes) -> Tuple[Variant, int]:
    """
    Read the variant tag and point count without decoding records

    Raises:
        DecodingCorrupt: Buffer shorter than the header or unknown tag
    """
    if len(data) < HEADER.size:
        raise DecodingCorrupt(f"Buffer of {len(data)} bytes is shorter than the {HEADER.size}-byte header")

    tag, count = HEADER.unpack_from(data, 0)
    try:
        variant = Variant(tag)
    except ValueError as exc:
        raise DecodingCorrupt(f"Unknown variant tag {tag}") from exc
    return variant, count


def decode(data: bytes) -> List[Point]:
    """
    Decode a buffer produced by encode_absolute or encode_delta

    Args:
        data: Encoded bytes

    Returns:
        Decoded points

    Raises:
        DecodingCorrupt: Truncated buffer, unknown tag or count mismatch
    """
    variant, count = peek_header(data)
    offset = HEADER.size

    if variant is Variant.ABSOLUTE:
        expected = HEADER.size + count * RECORD.size
        if len(data) != expected:
            raise DecodingCorrupt(
                f"Header declares {count} records ({expected} bytes), buffer has {len(data)} bytes"
            )
        return [_point(values) for values in RECORD.iter_unpack(data[offset:])]

    points: List[Point] = []
    if count == 0:
        if len(data) != offset:
            raise DecodingCorrupt(f"{len(data) - offset} trailing bytes after empty trajectory")
        return points

    if len(data) < offset + RECORD.size:
        raise DecodingCorrupt("Buffer truncated inside the baseline record")
    current = list(RECORD.unpack_from(data, offset))
    offset += RECORD.size
    points.append(_point(current))

    for index in range(1, count):
        try:
            deltas, offset = decode_signed_list(data, len(FIELDS), offset)
        except ValueError as exc:
            raise DecodingCorrupt(f"Record {index} of {count} is truncated or malformed") from exc
        current = [value + delta for value, delta in zip(current, deltas)]
        points.append(_point(current))

    if offset != len(data):
        raise DecodingCorrupt(f"{len(data) - offset} trailing bytes after {count} records")

    return points


class PointCodec(EncoderProtocol):
    """EncoderProtocol adapter around encode()/decode() for one variant"""

    def __init__(self, variant: Variant = Variant.DELTA):
        self.variant = variant

    def encode(self, points: Sequence[Point]) -> bytes:
        return encode(points, self.variant)

    def decode(self, data: bytes) -> List[Point]:
        variant, _ = peek_header(data)
        if variant is not self.variant:
            raise DecodingCorrupt(f"Expected a {self.name} buffer, got {variant.name.lower()}")
        return decode(data)

    @property
    def name(self) -> str:
        return self.variant.name.lower()
