# filename: huffman_service.py

import logging
import os

from huffman_bits import pack_bits, unpack_bits
from huffman_core import HuffmanLogic
from huffman_errors import InvalidInputFileError
from huffman_format import CompressedFile
from huffman_tree_codec import deserialize_tree, serialize_tree

logger = logging.getLogger(__name__)


def _check_input_file(path):
    if not os.path.isfile(path):
        raise InvalidInputFileError(path)


class HuffmanService:
    def __init__(self, encoding="utf-8"):
        self.logic = HuffmanLogic()
        self.encoding = encoding

    def encode_text(self, text, source_path=""):
        """Run the compression pipeline on ``text`` and return a CompressedFile."""
        content = self.logic.content_from_lines(self.logic.split_lines(text))
        if not content:
            return CompressedFile(str(source_path), serialize_tree(None), 0, b"")

        freqs = self.logic.count_frequencies(content)
        tree = self.logic.build_tree(freqs)
        codes = self.logic.generate_codes(tree)
        serialized_tree = serialize_tree(tree)
        logger.debug(f"Code table: {codes}")
        logger.debug(f"Serialized tree: {serialized_tree}")

        bits = self.logic.encode(content, codes)
        payload, remainder = pack_bits(bits)
        logger.debug(f"Encoded {len(content)} symbols into {len(bits)} bits "
                     f"({len(payload)} bytes, remainder {remainder})")
        return CompressedFile(str(source_path), serialized_tree, remainder, payload)

    def decode_file(self, compressed):
        logger.debug(f"Compressed file source: {compressed.source_path}")
        logger.debug(f"Serialized tree: {compressed.serialized_tree}")
        tree = deserialize_tree(compressed.serialized_tree)
        bits = unpack_bits(compressed.payload, compressed.remainder)
        return self.logic.decode(tree, bits)

    def compress_text(self, text, source_path=""):
        return self.encode_text(text, source_path).to_bytes()

    def decompress_bytes(self, data):
        return self.decode_file(CompressedFile.from_bytes(data))

    def compress(self, input_path, output_path):
        _check_input_file(input_path)
        # newline="" keeps \r so that split_lines sees every original boundary
        with open(input_path, "r", encoding=self.encoding, newline="") as f:
            text = f.read()

        compressed = self.encode_text(text, input_path)
        data = compressed.to_bytes()
        with open(output_path, "wb") as f:
            f.write(data)

        logger.info(f"Compressed {input_path} ({os.path.getsize(input_path)} bytes) "
                    f"to {output_path} ({len(data)} bytes)")
        return compressed

    def decompress(self, compressed_path, output_path):
        _check_input_file(compressed_path)
        with open(compressed_path, "rb") as f:
            data = f.read()

        text = self.decompress_bytes(data)
        with open(output_path, "w", encoding=self.encoding, newline="") as f:
            f.write(text)

        logger.info(f"Decompressed {compressed_path} ({len(data)} bytes) to {output_path}")
        return text
