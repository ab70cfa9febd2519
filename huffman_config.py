# filename: huffman_config.py

import os

# Wire format
LEAF_MARKER = "1"
INTERNAL_MARKER = "0"
SEPARATOR = " "
SYMBOL_BITS = 8
MAX_SYMBOL = (1 << SYMBOL_BITS) - 1

# Weight given to leaves rebuilt by the decoder, never read afterwards
DECODED_WEIGHT = -1


def _env_int(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


DEBUG = _env_int("HUFFMAN_DEBUG", 0)

# Inputs at least this long are counted in a process pool when workers > 1
PARALLEL_THRESHOLD = _env_int("HUFFMAN_PARALLEL_THRESHOLD", 1 << 20)
DEFAULT_WORKERS = _env_int("HUFFMAN_WORKERS", 1)
