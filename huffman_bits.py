# filename: huffman_bits.py

from huffman_errors import PayloadFormatError

# 7-bit groups keep every value below 128, which leaves the upper half free
# for escaping the values line-based text tools treat specially
GROUP_BITS = 7
RESERVED_VALUES = frozenset({0, 8, 9, 10, 13})
ESCAPE_OFFSET = 128


def pack_bits(bits):
    """Pack a '0'/'1' string into bytes, 7 bits per byte.

    Returns ``(payload, remainder)`` where ``remainder`` is the number of
    meaningful bits in the last byte, or 0 when it holds a full group.
    """
    if bits.strip("01"):
        raise ValueError("bit string may only contain '0' and '1'")

    b = bytearray()
    for i in range(0, len(bits), GROUP_BITS):
        value = int(bits[i:i + GROUP_BITS], 2)
        if value in RESERVED_VALUES:
            value += ESCAPE_OFFSET
        b.append(value)
    return bytes(b), len(bits) % GROUP_BITS


def _group_value(byte):
    if byte >= ESCAPE_OFFSET:
        value = byte - ESCAPE_OFFSET
        if value not in RESERVED_VALUES:
            raise PayloadFormatError(f"byte {byte} is not a valid escaped group")
        return value
    if byte in RESERVED_VALUES:
        raise PayloadFormatError(f"byte {byte} should have been escaped")
    return byte


def unpack_bits(payload, remainder):
    if not 0 <= remainder < GROUP_BITS:
        raise PayloadFormatError(f"remainder {remainder} out of range 0-{GROUP_BITS - 1}")
    if not payload:
        if remainder:
            raise PayloadFormatError("non-zero remainder with an empty payload")
        return ""

    groups = [format(_group_value(byte), "07b") for byte in payload[:-1]]

    last = _group_value(payload[-1])
    width = remainder or GROUP_BITS
    if last >= 1 << width:
        raise PayloadFormatError(f"final byte {payload[-1]} does not fit in {width} bits")
    groups.append(format(last, f"0{width}b"))
    return "".join(groups)
