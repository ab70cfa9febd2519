# filename: huffman_tree_codec.py

import huffman_config as config
from huffman_core import HuffmanNode
from huffman_errors import MalformedTreeError, SymbolRangeError, TruncatedStreamError

BITS = frozenset("01")


class BitCursor:
    """Read position over a transportable string.

    One cursor is shared by the whole recursive tree descent, so a call
    always resumes where the previous one stopped.
    """

    def __init__(self, text, pos=0):
        self.text = text
        self.pos = pos

    def read(self, n=1):
        """Return the next `n` characters and advance past them."""
        end = self.pos + n
        if end > len(self.text):
            raise TruncatedStreamError(
                f"wanted {n} characters at offset {self.pos}, {self.remaining()} left")
        chunk = self.text[self.pos:end]
        self.pos = end
        return chunk

    def peek(self, n=1):
        """Return up to `n` characters without advancing."""
        return self.text[self.pos:self.pos + n]

    def read_while(self, predicate):
        start = self.pos
        while self.pos < len(self.text) and predicate(self.text[self.pos]):
            self.pos += 1
        return self.text[start:self.pos]

    def tell(self):
        return self.pos

    def remaining(self):
        return len(self.text) - self.pos

    def at_end(self):
        return self.pos >= len(self.text)


def symbol_to_bits(symbol):
    """Zero padded, MSB first binary form of a byte value."""
    if not 0 <= symbol <= config.MAX_SYMBOL:
        raise SymbolRangeError(f"symbol {symbol!r} does not fit in {config.SYMBOL_BITS} bits")
    return format(symbol, f"0{config.SYMBOL_BITS}b")


def serialize_tree(node):
    if node.is_leaf():
        return config.LEAF_MARKER + symbol_to_bits(node.char)
    return config.INTERNAL_MARKER + serialize_tree(node.left) + serialize_tree(node.right)


def deserialize_tree(cursor, depth=0):
    start = cursor.tell()
    if depth > config.MAX_SYMBOL:
        # 256 distinct symbols never need a deeper tree
        raise MalformedTreeError(f"tree nested deeper than {config.MAX_SYMBOL} levels at offset {start}")
    try:
        marker = cursor.read()
        if marker == config.LEAF_MARKER:
            payload = cursor.read(config.SYMBOL_BITS)
            if not BITS.issuperset(payload):
                raise MalformedTreeError(f"bad leaf payload {payload!r} at offset {start + 1}")
            return HuffmanNode(int(payload, 2), config.DECODED_WEIGHT)
        if marker == config.INTERNAL_MARKER:
            left = deserialize_tree(cursor, depth + 1)
            right = deserialize_tree(cursor, depth + 1)
            return HuffmanNode(None, config.DECODED_WEIGHT, left, right)
    except TruncatedStreamError as e:
        raise MalformedTreeError(f"tree ends early (node at offset {start})") from e
    raise MalformedTreeError(f"unexpected tree marker {marker!r} at offset {start}")
