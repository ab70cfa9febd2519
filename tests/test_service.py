import logging
import random

import pytest

import huffman_config as config
import huffman_service as hs
from huffman_errors import (
	EmptyInputError,
	HuffmanError,
	MalformedBitstreamError,
	MalformedCountError,
	MalformedTreeError,
	SymbolRangeError,
	TruncatedStreamError,
)

# tree "0" + leaf b + leaf a, count 3, codes a=1 b=0
AAB = "0101100010101100001 3 110"


def _get_service():
	return hs.HuffmanService()


def _split(transportable):
	tree, count, bits = transportable.split(" ")
	return tree, int(count), bits


def test_roundtrip_random_10kb():
	svc = _get_service()

	data = bytes(random.getrandbits(8) for _ in range(10 * 1024))
	compressed = svc.compress(data)
	out = svc.decompress(compressed)
	assert out == data


def test_roundtrip_all_bytes_once():
	svc = _get_service()

	data = bytes(range(256))
	compressed = svc.compress(data)
	out = svc.decompress(compressed)
	assert out == data


def test_small_inputs():
	svc = _get_service()

	for n in (1, 2, 3):
		data = bytes(random.getrandbits(8) for _ in range(n))
		compressed = svc.compress(data)
		out = svc.decompress(compressed)
		assert out == data


def test_roundtrip_text_input():
	svc = _get_service()

	text = "Huffman coding, caf\xe9 au lait \x00\xff"
	assert svc.decompress_text(svc.compress(text)) == text
	assert hs.decode(hs.encode(text)) == text.encode("latin-1")


def test_wire_format_known_vector():
	assert hs.encode(b"aab") == AAB
	assert hs.encode("aab") == AAB
	assert hs.decode(AAB) == b"aab"


def test_output_is_plain_ascii_bits():
	tree, count, bits = _split(hs.encode(b"mississippi river"))
	assert set(tree) <= {"0", "1"}
	assert set(bits) <= {"0", "1"}
	assert count == len(b"mississippi river")


def test_single_symbol_uses_count_only():
	compressed = hs.encode("aaaa")
	tree, count, bits = _split(compressed)
	assert compressed == "101100001 4 "
	assert tree == "1" + format(ord("a"), "08b")
	assert count == 4
	assert bits == ""
	assert hs.decode(compressed) == b"aaaa"


def test_single_byte_repeated_large():
	svc = _get_service()

	data = b"A" * (1024 * 10)
	compressed = svc.compress(data)
	assert compressed.endswith(" ")
	assert svc.decompress(compressed) == data


def test_two_symbols_get_one_bit_codes():
	data = b"xyyxyxxxy"
	tree, count, bits = _split(hs.encode(data))
	# one internal marker plus two 9-character leaves
	assert len(tree) == 19
	assert (tree[0], tree[1], tree[10]) == ("0", "1", "1")
	assert count == len(data)
	assert len(bits) == len(data)


def test_same_input_twice_gives_same_output():
	data = b"the same text, encoded twice in one run"
	first = hs.encode(data)
	second = hs.encode(data)
	assert first == second
	assert hs.decode(first) == hs.decode(second) == data


@pytest.mark.parametrize("data", ["", b"", bytearray(), memoryview(b"")])
def test_empty_input(data):
	svc = _get_service()
	with pytest.raises(EmptyInputError):
		svc.compress(data)


def test_empty_input_checked_by_length():
	# slicing builds a new empty string rather than reusing the literal
	empty = "abc"[1:1]
	with pytest.raises(EmptyInputError):
		hs.encode(empty)


def test_characters_outside_one_byte_rejected():
	with pytest.raises(SymbolRangeError):
		hs.encode("price: €5")


def test_unsupported_input_type():
	with pytest.raises(TypeError):
		hs.encode(12345)


def test_separator_removed():
	with pytest.raises(MalformedCountError):
		hs.decode(AAB.replace(" ", "", 1))
	with pytest.raises(MalformedCountError):
		hs.decode("0101100010101100001 3110")


def test_missing_count_digits():
	with pytest.raises(MalformedCountError):
		hs.decode("0101100010101100001  110")
	with pytest.raises(MalformedCountError):
		hs.decode("0101100010101100001 ")


def test_truncated_mid_tree():
	compressed = hs.encode(b"Hello World" * 50)
	with pytest.raises(MalformedTreeError):
		hs.decode(compressed[:12])
	with pytest.raises(MalformedTreeError):
		hs.decode("")


def test_truncated_stream_behavior():
	compressed = hs.encode(b"This is a test" * 100)
	with pytest.raises(TruncatedStreamError):
		hs.decode(compressed[:-3])
	with pytest.raises(TruncatedStreamError):
		hs.decode("0101100010101100001 3 11")


def test_bad_bit_character():
	with pytest.raises(MalformedBitstreamError):
		hs.decode("0101100010101100001 3 1x0")


def test_trailing_bits_rejected():
	with pytest.raises(MalformedBitstreamError):
		hs.decode(AAB + "0")
	with pytest.raises(MalformedBitstreamError):
		hs.decode("101100001 4 1")


def test_corrupted_header_behavior():
	compressed = hs.encode(b"Hello World" * 50)
	corrupted = "2" + compressed[1:]
	with pytest.raises(MalformedTreeError):
		hs.decode(corrupted)


def test_decode_accepts_ascii_bytes():
	assert hs.decode(AAB.encode("ascii")) == b"aab"
	with pytest.raises(MalformedTreeError):
		hs.decode(b"\xff\xfe")


def test_all_decode_errors_share_base():
	for bad in ("", AAB.replace(" ", "", 1), AAB[:-1], AAB + "2"):
		with pytest.raises(HuffmanError):
			hs.decode(bad)


def test_service_initializes_logic_attribute():
	svc = _get_service()
	assert hasattr(svc, "logic")
	assert svc.logic is not None


def test_debug_dump_goes_to_log(monkeypatch, caplog):
	monkeypatch.setattr(config, "DEBUG", 1)
	caplog.set_level(logging.DEBUG, logger="huffman_service")
	assert hs.encode(b"aab") == AAB
	assert "tree 0101100010101100001" in caplog.text
	assert " 97 -> 1" in caplog.text


def test_no_tree_dump_without_debug(monkeypatch, caplog):
	monkeypatch.setattr(config, "DEBUG", 0)
	caplog.set_level(logging.DEBUG, logger="huffman_service")
	hs.encode(b"aab")
	assert "tree 0101100010101100001" not in caplog.text


def test_parallel_counting_gives_identical_output():
	data = bytes(random.getrandbits(8) for _ in range(4096))
	svc = hs.HuffmanService(workers=2)
	svc.logic.parallel_threshold = 1
	assert svc.compress(data) == hs.encode(data)


@pytest.mark.timeout(120)
def test_roundtrip_large_input():
	data = bytes(random.getrandbits(8) for _ in range(256 * 1024))
	assert hs.decode(hs.encode(data)) == data
