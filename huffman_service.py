# filename: huffman_service.py

import logging

import huffman_config as config
from huffman_core import HuffmanLogic
from huffman_errors import (
    EmptyInputError,
    MalformedBitstreamError,
    MalformedCountError,
    MalformedTreeError,
    SymbolRangeError,
    TruncatedStreamError,
)
from huffman_tree_codec import BitCursor, deserialize_tree, serialize_tree

logger = logging.getLogger(__name__)

DIGITS = frozenset("0123456789")


def _as_bytes(data):
    if isinstance(data, str):
        try:
            return data.encode("latin-1")
        except UnicodeEncodeError as e:
            raise SymbolRangeError(
                f"character {data[e.start]!r} at index {e.start} does not fit in one byte") from e
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"expected bytes or str, got {type(data).__name__}")


class HuffmanService:
    def __init__(self, workers=None):
        self.logic = HuffmanLogic(workers=workers)

    def compress(self, data):
        """Encode `data` into a transportable string.

        Layout: serialized tree, a space, the symbol count, a space,
        then the code of every input byte in order.
        """
        data = _as_bytes(data)
        if len(data) == 0:
            raise EmptyInputError("cannot encode an empty input")

        tree = self.logic.build_tree(self.logic.count_frequencies(data))
        codes = self.logic.generate_codes(tree)
        header = serialize_tree(tree)
        if config.DEBUG:
            logger.debug("tree %s", header)
            for char, code in sorted(codes.items()):
                logger.debug("  %3d -> %s", char, code or "(empty)")

        encoded_str = "".join([codes[char] for char in data])
        logger.debug("encoded %d bytes into %d tree chars and %d code bits",
                     len(data), len(header), len(encoded_str))
        return config.SEPARATOR.join((header, str(len(data)), encoded_str))

    def decompress(self, transportable):
        if isinstance(transportable, (bytes, bytearray)):
            try:
                transportable = transportable.decode("ascii")
            except UnicodeDecodeError as e:
                raise MalformedTreeError("transportable data is not ASCII") from e

        cursor = BitCursor(transportable)
        root = deserialize_tree(cursor)
        count = self._read_count(cursor)

        if root.is_leaf():
            # Single symbol tree: the count alone carries the data
            out = bytearray([root.char]) * count
        else:
            out = bytearray()
            for i in range(count):
                node = root
                while not node.is_leaf():
                    if cursor.at_end():
                        raise TruncatedStreamError(
                            f"bit stream ends after {i} of {count} symbols")
                    direction = cursor.read()
                    if direction == "0":
                        node = node.left
                    elif direction == "1":
                        node = node.right
                    else:
                        raise MalformedBitstreamError(
                            f"unexpected bit {direction!r} at offset {cursor.tell() - 1}")
                out.append(node.char)

        if not cursor.at_end():
            raise MalformedBitstreamError(
                f"{cursor.remaining()} trailing characters after {count} symbols")
        logger.debug("decoded %d symbols from %d characters", count, len(transportable))
        return bytes(out)

    def decompress_text(self, transportable):
        return self.decompress(transportable).decode("latin-1")

    def _read_count(self, cursor):
        if cursor.peek() != config.SEPARATOR:
            raise MalformedCountError(f"missing separator after tree at offset {cursor.tell()}")
        cursor.read()
        digits = cursor.read_while(DIGITS.__contains__)
        if not digits:
            raise MalformedCountError(f"missing symbol count at offset {cursor.tell()}")
        if cursor.peek() != config.SEPARATOR:
            raise MalformedCountError(f"missing separator after symbol count at offset {cursor.tell()}")
        cursor.read()
        return int(digits)


def encode(data, workers=None):
    return HuffmanService(workers=workers).compress(data)


def decode(transportable):
    return HuffmanService().decompress(transportable)
