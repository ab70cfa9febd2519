# filename: huffman_core.py

import heapq
import itertools
import logging
from collections import Counter
from multiprocessing import Pool

import huffman_config as config
from huffman_errors import EmptyInputError

logger = logging.getLogger(__name__)


class HuffmanNode:
    def __init__(self, char, freq, left=None, right=None, order=0):
        self.char = char
        self.freq = freq
        self.left = left
        self.right = right
        # Tie-break among equal weights: leaves use their symbol,
        # merged nodes follow all leaves in creation order.
        self.order = order

    def __lt__(self, other):
        return (self.freq, self.order) < (other.freq, other.order)

    def __repr__(self):
        if self.is_leaf():
            return f"HuffmanNode(char={self.char!r}, freq={self.freq})"
        return f"HuffmanNode(freq={self.freq}, left={self.left!r}, right={self.right!r})"

    def is_leaf(self):
        return self.left is None and self.right is None


class HuffmanLogic:
    def __init__(self, workers=None, parallel_threshold=None):
        self.workers = config.DEFAULT_WORKERS if workers is None else workers
        if parallel_threshold is None:
            parallel_threshold = config.PARALLEL_THRESHOLD
        self.parallel_threshold = parallel_threshold

    def count_frequencies(self, data):
        """Return one leaf per distinct byte value, weighted by its count."""
        if len(data) == 0:
            raise EmptyInputError("cannot count frequencies of an empty input")

        if self.workers > 1 and len(data) >= self.parallel_threshold:
            freqs = self._count_parallel(data)
        else:
            freqs = Counter(data)
        return [HuffmanNode(char, freq, order=char) for char, freq in freqs.items()]

    def _count_parallel(self, data):
        shard_size = -(-len(data) // self.workers)
        shards = [data[i:i + shard_size] for i in range(0, len(data), shard_size)]
        logger.debug("counting %d bytes in %d shards", len(data), len(shards))
        with Pool(self.workers) as pool:
            counts = pool.map(Counter, shards)
        return sum(counts, Counter())

    def build_tree(self, leaves):
        priority_queue = list(leaves)
        if not priority_queue:
            raise EmptyInputError("cannot build a tree without leaves")
        heapq.heapify(priority_queue)

        # Iteratively merge the two lightest nodes, first popped goes left
        merge_order = itertools.count(config.MAX_SYMBOL + 1)
        while len(priority_queue) > 1:
            left = heapq.heappop(priority_queue)
            right = heapq.heappop(priority_queue)
            merged = HuffmanNode(None, left.freq + right.freq, left, right, next(merge_order))
            heapq.heappush(priority_queue, merged)

        return priority_queue[0]

    def generate_codes(self, node, current_code="", codes=None):
        if codes is None:
            codes = {}
        if node.is_leaf():
            # A lone leaf root gets the empty code
            codes[node.char] = current_code
        else:
            self.generate_codes(node.left, current_code + "0", codes)
            self.generate_codes(node.right, current_code + "1", codes)
        return codes
