# filename: huffman_errors.py


class HuffmanError(Exception):
    pass


class EmptyInputError(HuffmanError, ValueError):
    pass


class SymbolRangeError(HuffmanError, ValueError):
    pass


# Decode side: structural problems in a transportable string

class MalformedTreeError(HuffmanError):
    pass


class MalformedCountError(HuffmanError):
    pass


class MalformedBitstreamError(HuffmanError):
    pass


class TruncatedStreamError(HuffmanError):
    pass
