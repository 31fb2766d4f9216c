# filename: huffman_format.py

"""On-disk layout of a compressed file.

Three CRLF-terminated header lines (source path, serialized tree, remainder)
followed by the packed payload bytes.
"""

from huffman_bits import GROUP_BITS
from huffman_errors import HeaderFormatError, InvalidSourcePathError

HEADER_SEPARATOR = b"\r\n"
HEADER_ENCODING = "utf-8"


class CompressedFile:
    def __init__(self, source_path, serialized_tree, remainder, payload):
        self.source_path = source_path
        self.serialized_tree = serialized_tree
        self.remainder = remainder
        self.payload = payload

    def __eq__(self, other):
        if not isinstance(other, CompressedFile):
            return NotImplemented
        return (self.source_path, self.serialized_tree, self.remainder, self.payload) == (
            other.source_path, other.serialized_tree, other.remainder, other.payload)

    def __repr__(self):
        return (f"CompressedFile(source_path={self.source_path!r}, remainder={self.remainder}, "
                f"payload={len(self.payload)} bytes)")

    def _encoded_source_path(self):
        # A line break would shift every following header line
        if "\r" in self.source_path or "\n" in self.source_path:
            raise InvalidSourcePathError(f"source path {self.source_path!r} contains a line break")
        try:
            return self.source_path.encode(HEADER_ENCODING)
        except UnicodeEncodeError as exc:
            raise InvalidSourcePathError(f"source path {self.source_path!r} is not valid {HEADER_ENCODING}") from exc

    def to_bytes(self):
        header = [self._encoded_source_path(), self.serialized_tree.encode(HEADER_ENCODING),
                  str(self.remainder).encode(HEADER_ENCODING)]
        b = bytearray()
        for line in header:
            b += line
            b += HEADER_SEPARATOR
        b += self.payload
        return bytes(b)

    @classmethod
    def from_bytes(cls, data):
        parts = data.split(HEADER_SEPARATOR, 3)
        if len(parts) < 4:
            raise HeaderFormatError(f"expected 3 header lines, found {len(parts) - 1}")
        try:
            source_path, serialized_tree, remainder = (p.decode(HEADER_ENCODING) for p in parts[:3])
        except UnicodeDecodeError as exc:
            raise HeaderFormatError(f"header is not valid {HEADER_ENCODING}: {exc}") from exc

        if not remainder.isdecimal() or not remainder.isascii():
            raise HeaderFormatError(f"remainder {remainder!r} is not a decimal number")
        if int(remainder) >= GROUP_BITS:
            raise HeaderFormatError(f"remainder {remainder} out of range 0-{GROUP_BITS - 1}")
        return cls(source_path, serialized_tree, int(remainder), parts[3])
