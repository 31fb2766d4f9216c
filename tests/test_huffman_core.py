import random
from collections import Counter

import pytest

from huffman_core import HuffmanInternal, HuffmanLeaf
from huffman_errors import EmptyFrequencyTableError, PayloadFormatError, UnknownSymbolError

ABRACADABRA_CODES = {
	"a": "0",
	"b": "100",
	"r": "101",
	"c": "1100",
	"d": "1101",
	"\r": "1110",
	"\n": "1111",
}


def _abracadabra_tree(logic):
	content = logic.content_from_lines(logic.split_lines("abracadabra"))
	return logic.build_tree(logic.count_frequencies(content))


def test_split_lines_universal_boundaries(logic):
	assert logic.split_lines("") == []
	assert logic.split_lines("abc") == ["abc"]
	assert logic.split_lines("abc\n") == ["abc"]
	assert logic.split_lines("a\r\nb\rc\nd") == ["a", "b", "c", "d"]
	assert logic.split_lines("a\n\n") == ["a", ""]


def test_content_terminates_every_line(logic):
	assert logic.content_from_lines(["a", "", "b"]) == "a\r\n\r\nb\r\n"
	assert logic.content_from_lines([]) == ""


def test_abracadabra_frequencies(logic):
	content = logic.content_from_lines(logic.split_lines("abracadabra"))
	freqs = logic.count_frequencies(content)
	assert freqs == {"a": 5, "b": 2, "r": 2, "c": 1, "d": 1, "\r": 1, "\n": 1}


def test_line_terminator_counts_match_content(logic):
	# Regression: CR/LF used to be credited (lines - 1) times
	for text in ("hello", "one\ntwo", "one\ntwo\nthree\n", "x\r\ny\rz"):
		content = logic.content_from_lines(logic.split_lines(text))
		freqs = logic.count_frequencies(content)
		for char in set(content):
			assert freqs[char] == content.count(char)
		assert freqs["\r"] == freqs["\n"] == len(logic.split_lines(text))


def test_build_tree_rejects_empty_table(logic):
	with pytest.raises(EmptyFrequencyTableError):
		logic.build_tree(Counter())


def test_build_tree_single_symbol_is_leaf(logic):
	root = logic.build_tree(Counter("aaaa"))
	assert root == HuffmanLeaf("a", 4)


def test_internal_frequencies_are_sums(logic):
	root = _abracadabra_tree(logic)
	assert root.freq == 13
	stack = [root]
	while stack:
		node = stack.pop()
		if not node.is_leaf:
			assert node.freq == node.left.freq + node.right.freq
			stack.extend([node.left, node.right])


def test_tie_break_is_fifo(logic):
	assert logic.generate_codes(_abracadabra_tree(logic)) == ABRACADABRA_CODES


def test_frequent_symbol_gets_shorter_code(logic):
	codes = logic.generate_codes(_abracadabra_tree(logic))
	assert len(codes["a"]) < len(codes["c"])
	assert len(codes["a"]) < len(codes["d"])


def test_codes_are_prefix_free(logic):
	rng = random.Random(7)
	text = "".join(rng.choice("abcdefghij \t\x00é") for _ in range(500))
	codes = logic.generate_codes(logic.build_tree(logic.count_frequencies(text)))
	assert set(codes) == set(text)
	values = list(codes.values())
	for i, code in enumerate(values):
		assert code
		for j, other in enumerate(values):
			if i != j:
				assert not other.startswith(code)


def test_single_symbol_code_is_one_bit(logic):
	assert logic.generate_codes(HuffmanLeaf("z", 3)) == {"z": "0"}
	assert logic.generate_codes(None) == {}


def test_deep_tree_codes_without_recursion(logic):
	freqs = {chr(0x4E00 + i): 2 ** i for i in range(1500)}
	codes = logic.generate_codes(logic.build_tree(freqs))
	assert len(codes) == 1500
	assert max(len(code) for code in codes.values()) == 1499


def test_nul_is_an_ordinary_symbol(logic):
	content = "\x00\x00a\r\n"
	root = logic.build_tree(logic.count_frequencies(content))
	codes = logic.generate_codes(root)
	assert "\x00" in codes
	assert logic.decode(root, logic.encode(content, codes)) == content


def test_encode_unknown_symbol(logic):
	with pytest.raises(UnknownSymbolError) as excinfo:
		logic.encode("abz", {"a": "0", "b": "1"})
	assert excinfo.value.symbol == "z"


def test_decode_roundtrip(logic):
	root = _abracadabra_tree(logic)
	codes = logic.generate_codes(root)
	bits = logic.encode("abracadabra\r\n", codes)
	assert len(bits) == 33
	assert logic.decode(root, bits) == "abracadabra\r\n"


def test_decode_single_symbol_tree(logic):
	root = HuffmanLeaf("a", 4)
	bits = logic.encode("aaaa", logic.generate_codes(root))
	assert bits == "0000"
	assert logic.decode(root, bits) == "aaaa"
	with pytest.raises(PayloadFormatError):
		logic.decode(root, "0010")


def test_decode_stops_mid_code(logic):
	with pytest.raises(PayloadFormatError):
		logic.decode(_abracadabra_tree(logic), "011")


def test_decode_empty_tree(logic):
	assert logic.decode(None, "") == ""
	with pytest.raises(PayloadFormatError):
		logic.decode(None, "0")


def test_node_equality_is_structural():
	a = HuffmanInternal(3, HuffmanLeaf("x", 1), HuffmanLeaf("y", 2))
	b = HuffmanInternal(3, HuffmanLeaf("x", 1), HuffmanLeaf("y", 2))
	swapped = HuffmanInternal(3, HuffmanLeaf("y", 2), HuffmanLeaf("x", 1))
	assert a == b
	assert a != swapped
	assert HuffmanLeaf("x", 1) != HuffmanLeaf("x", 2)
	assert HuffmanLeaf("x", 1) != "x"
