# filename: huffman_core.py

import heapq
import itertools
import re
from collections import Counter

from huffman_errors import EmptyFrequencyTableError, PayloadFormatError, UnknownSymbolError

LINE_BREAK = "\r\n"
_LINE_BOUNDARY = re.compile(r"\r\n|\r|\n")


class HuffmanNode:
    __slots__ = ("freq",)

    is_leaf = False

    def __eq__(self, other):
        if not isinstance(other, HuffmanNode):
            return NotImplemented
        # Iterative so that deep, unbalanced trees compare without recursion
        stack = [(self, other)]
        while stack:
            a, b = stack.pop()
            if a.is_leaf != b.is_leaf or a.freq != b.freq:
                return False
            if a.is_leaf:
                if a.symbol != b.symbol:
                    return False
            else:
                stack.append((a.left, b.left))
                stack.append((a.right, b.right))
        return True


class HuffmanLeaf(HuffmanNode):
    __slots__ = ("symbol",)

    is_leaf = True

    def __init__(self, symbol, freq):
        self.symbol = symbol
        self.freq = freq

    def __repr__(self):
        return f"HuffmanLeaf({self.symbol!r}, {self.freq})"


class HuffmanInternal(HuffmanNode):
    __slots__ = ("left", "right")

    def __init__(self, freq, left, right):
        self.freq = freq
        self.left = left
        self.right = right

    def __repr__(self):
        return f"HuffmanInternal({self.freq}, {self.left!r}, {self.right!r})"


class HuffmanLogic:
    """Stateless stages of the Huffman pipeline.

    Each method is a pure function of its arguments; the service threads the
    results from one stage into the next.
    """

    def split_lines(self, text):
        # Same boundaries as universal newlines; a final terminator does not
        # open another line
        lines = _LINE_BOUNDARY.split(text)
        if lines[-1] == "":
            lines.pop()
        return lines

    def content_from_lines(self, lines):
        # Every line, the last one included, is terminated with CRLF
        return "".join(line + LINE_BREAK for line in lines)

    def count_frequencies(self, content):
        # Counted from the exact content that gets encoded, so the line
        # terminators are credited once per line
        return Counter(content)

    def build_tree(self, freqs):
        if not freqs:
            raise EmptyFrequencyTableError("cannot build a Huffman tree from an empty frequency table")

        # The sequence number makes ties FIFO, which pins the tree shape
        sequence = itertools.count()
        priority_queue = [(freq, next(sequence), HuffmanLeaf(char, freq)) for char, freq in freqs.items()]
        heapq.heapify(priority_queue)

        while len(priority_queue) > 1:
            left_freq, _, left = heapq.heappop(priority_queue)
            right_freq, _, right = heapq.heappop(priority_queue)
            merged = HuffmanInternal(left_freq + right_freq, left, right)
            heapq.heappush(priority_queue, (merged.freq, next(sequence), merged))

        return priority_queue[0][2]

    def generate_codes(self, root):
        codes = {}
        if root is None:
            return codes
        if root.is_leaf:
            codes[root.symbol] = "0"
            return codes

        stack = [(root, "")]
        while stack:
            node, current_code = stack.pop()
            if node.is_leaf:
                codes[node.symbol] = current_code
                continue
            stack.append((node.right, current_code + "1"))
            stack.append((node.left, current_code + "0"))
        return codes

    def encode(self, content, codes):
        try:
            return "".join([codes[char] for char in content])
        except KeyError as exc:
            raise UnknownSymbolError(exc.args[0]) from None

    def decode(self, root, bits):
        if root is None:
            if bits:
                raise PayloadFormatError("payload present but the tree is empty")
            return ""

        if root.is_leaf:
            # A lone symbol is coded as a single "0"
            if "1" in bits:
                raise PayloadFormatError("unexpected '1' bit for a single-symbol tree")
            return root.symbol * len(bits)

        output = []
        node = root
        for bit in bits:
            node = node.left if bit == "0" else node.right
            if node.is_leaf:
                output.append(node.symbol)
                node = root
        if node is not root:
            raise PayloadFormatError("bit stream ends in the middle of a code")
        return "".join(output)
