"""
Variable-length integer encoding (varint)

Protocol Buffer style varint encoding for efficient small integer storage:
- Values 0-127: 1 byte
- Values 128-16,383: 2 bytes
- Values 16,384-2,097,151: 3 bytes
- etc.

Signed values (coordinate and time deltas) go through zigzag first so that
small negative numbers stay small:  0 -> 0, -1 -> 1, 1 -> 2, -2 -> 3, ...
"""

from typing import List, Tuple


def zigzag_encode(n: int) -> int:
    """Zigzag encoding for signed integers: maps negatives to positive odds

    Examples:
        >>> [zigzag_encode(v) for v in (0, -1, 1, -2, 2)]
        [0, 1, 2, 3, 4]
    """
    if n >= 0:
        return n << 1
    else:
        return ((-n) << 1) - 1


def zigzag_decode(n: int) -> int:
    """Decode zigzag encoded integer

    Examples:
        >>> [zigzag_decode(v) for v in (0, 1, 2, 3, 4)]
        [0, -1, 1, -2, 2]
    """
    return (n >> 1) ^ (-(n & 1))


def encode_varint(value: int) -> bytes:
    """
    Encode integer as variable-length bytes using Protocol Buffer encoding

    Args:
        value: Non-negative integer to encode

    Returns:
        Bytes representing the varint (1-10 bytes for 64-bit values)

    Examples:
        >>> encode_varint(0)
        b'\\x00'
        >>> encode_varint(127)
        b'\\x7f'
        >>> encode_varint(128)
        b'\\x80\\x01'
        >>> encode_varint(300)
        b'\\xac\\x02'
    """
    if value < 0:
        raise ValueError(f"Cannot encode negative value: {value}")

    result = bytearray()

    while value > 0x7F:
        # Set high bit (0x80) to indicate more bytes follow
        result.append((value & 0x7F) | 0x80)
        value >>= 7

    # Last byte: no high bit set
    result.append(value & 0x7F)

    return bytes(result)


def decode_varint(data: bytes, offset: int = 0) -> Tuple[int, int]:
    """
    Decode varint from bytes starting at offset

    Args:
        data: Bytes containing varint
        offset: Starting position in bytes

    Returns:
        Tuple of (decoded_value, bytes_consumed)

    Examples:
        >>> decode_varint(b'\\x00')
        (0, 1)
        >>> decode_varint(b'\\x80\\x01')
        (128, 2)
        >>> decode_varint(b'\\x00\\xac\\x02', 1)
        (300, 2)
    """
    result = 0
    shift = 0
    bytes_read = 0

    while True:
        if offset + bytes_read >= len(data):
            raise ValueError(f"Incomplete varint at offset {offset}")

        byte = data[offset + bytes_read]
        bytes_read += 1

        # Add 7 bits to result
        result |= (byte & 0x7F) << shift
        shift += 7

        # If high bit not set, we're done
        if (byte & 0x80) == 0:
            break

        if shift >= 70:
            raise ValueError(f"Varint too large at offset {offset}")

    return result, bytes_read


def encode_varint_list(values: List[int]) -> bytes:
    """
    Encode list of non-negative integers as varint sequence

    Example:
        >>> encode_varint_list([0, 127, 128, 300])
        b'\\x00\\x7f\\x80\\x01\\xac\\x02'
    """
    result = bytearray()
    for value in values:
        result.extend(encode_varint(value))
    return bytes(result)


def decode_varint_list(data: bytes, count: int, offset: int = 0) -> Tuple[List[int], int]:
    """
    Decode a sequence of varints

    Args:
        data: Bytes containing varint sequence
        count: Number of varints to decode
        offset: Starting position in bytes

    Returns:
        Tuple of (decoded values, offset just past the last varint)

    Example:
        >>> decode_varint_list(b'\\x00\\x7f\\x80\\x01\\xac\\x02', 4)
        ([0, 127, 128, 300], 6)
    """
    result = []

    for _ in range(count):
        value, bytes_read = decode_varint(data, offset)
        result.append(value)
        offset += bytes_read

    return result, offset


def estimate_varint_size(value: int) -> int:
    """
    Bytes encode_varint() would produce for a non-negative value

    Examples:
        >>> [estimate_varint_size(v) for v in (0, 127, 128, 16383, 16384)]
        [1, 1, 2, 2, 3]
    """
    if value < 0:
        raise ValueError(f"Cannot encode negative value: {value}")
    if value == 0:
        return 1
    return (value.bit_length() + 6) // 7


def encode_signed_list(values: List[int]) -> bytes:
    """
    Encode list of signed integers as a zigzag varint sequence

    Example:
        >>> encode_signed_list([0, -1, 1, 150])
        b'\\x00\\x01\\x02\\xac\\x02'
    """
    return encode_varint_list([zigzag_encode(value) for value in values])


def decode_signed_list(data: bytes, count: int, offset: int = 0) -> Tuple[List[int], int]:
    """
    Decode a sequence of zigzag varints

    Args:
        data: Bytes containing varint sequence
        count: Number of varints to decode
        offset: Starting position in bytes

    Returns:
        Tuple of (decoded values, offset just past the last varint)

    Example:
        >>> decode_signed_list(b'\\x00\\x01\\x02\\xac\\x02', 4)
        ([0, -1, 1, 150], 5)
    """
    values, offset = decode_varint_list(data, count, offset)
    return [zigzag_decode(value) for value in values], offset
