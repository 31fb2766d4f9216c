# filename: huffman_tree_codec.py

"""Level-order text form of a Huffman tree, stored in the compressed header.

Leaves are written as ``<codepoint>=<freq>``, internal nodes as ``=<freq>``
and empty child slots as ``null``; tokens are joined with ``_,_``.
"""

from collections import deque

from huffman_core import HuffmanInternal, HuffmanLeaf
from huffman_errors import TreeFormatError

TREE_DELIMITER = "_,_"
NULL_TOKEN = "null"
MAX_CODEPOINT = 0x10FFFF
SURROGATES_START, SURROGATES_END = 0xD800, 0xDFFF


def _node_token(node):
    if node.is_leaf:
        return f"{ord(node.symbol)}={node.freq}"
    return f"={node.freq}"


def serialize_tree(root):
    if root is None:
        return NULL_TOKEN

    tokens = []
    queue = deque([root])
    # Stop after a level in which no node has children
    all_leaves = False
    while queue and not all_leaves:
        all_leaves = True
        for _ in range(len(queue)):
            node = queue.popleft()
            if node is None:
                tokens.append(NULL_TOKEN)
                continue
            tokens.append(_node_token(node))
            if node.is_leaf:
                queue.append(None)
                queue.append(None)
            else:
                all_leaves = False
                queue.append(node.left)
                queue.append(node.right)
    return TREE_DELIMITER.join(tokens)


def _parse_token(token):
    """Return ``(symbol, freq)`` for a node token; ``symbol`` is None for internal nodes."""
    codepoint, sep, freq = token.partition("=")
    if not sep:
        raise TreeFormatError(f"malformed tree token {token!r}")
    if not freq.isdecimal() or (codepoint and not codepoint.isdecimal()):
        raise TreeFormatError(f"non-numeric field in tree token {token!r}")
    if not codepoint:
        return None, int(freq)
    value = int(codepoint)
    if value > MAX_CODEPOINT or SURROGATES_START <= value <= SURROGATES_END:
        raise TreeFormatError(f"codepoint out of range in tree token {token!r}")
    return chr(value), int(freq)


def deserialize_tree(serialized):
    if serialized is None or serialized == NULL_TOKEN:
        return None
    if not serialized:
        raise TreeFormatError("empty tree header")

    tokens = serialized.split(TREE_DELIMITER)
    if tokens[0] == NULL_TOKEN:
        raise TreeFormatError("tree root cannot be null")

    # records[i] = [symbol, freq, left index, right index]
    records = [[*_parse_token(tokens[0]), None, None]]
    queue = deque([0])
    index = 1
    while queue and index < len(tokens):
        current = queue.popleft()
        for slot in (2, 3):
            token = tokens[index] if index < len(tokens) else NULL_TOKEN
            index += 1
            if token == NULL_TOKEN:
                continue
            records.append([*_parse_token(token), None, None])
            records[current][slot] = len(records) - 1
            queue.append(len(records) - 1)
    if index < len(tokens):
        raise TreeFormatError(f"{len(tokens) - index} unexpected trailing tree tokens")

    return _build_nodes(records)


def _build_nodes(records):
    # Children always come after their parent, so build back to front
    nodes = [None] * len(records)
    seen_symbols = set()
    for i in range(len(records) - 1, -1, -1):
        symbol, freq, left, right = records[i]
        if left is None and right is None:
            if symbol is None:
                raise TreeFormatError(f"leaf node {i} has no symbol")
            if symbol in seen_symbols:
                raise TreeFormatError(f"duplicate leaf symbol {symbol!r}")
            seen_symbols.add(symbol)
            nodes[i] = HuffmanLeaf(symbol, freq)
        elif left is None or right is None:
            raise TreeFormatError(f"node {i} has exactly one child")
        else:
            if nodes[left].freq + nodes[right].freq != freq:
                raise TreeFormatError(f"node {i} frequency {freq} is not the sum of its children")
            nodes[i] = HuffmanInternal(freq, nodes[left], nodes[right])
    return nodes[0]
