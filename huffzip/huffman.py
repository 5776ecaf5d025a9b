import heapq
import logging
from itertools import count
from typing import BinaryIO, Dict, Mapping, Optional

from bitarray import bitarray

from .bitio import BIT_ORDER, BitReader, BitWriter
from .errors import MissingSentinel, TruncatedStream
from .frequency import DEFAULT_CHUNK_SIZE, END_OF_STREAM

logger = logging.getLogger(__name__)


class HuffmanNode:
    """
    A node of the prefix-code tree.

    Leaves carry a symbol and no children. Internal nodes carry both a
    zero and a one child and no symbol. Every node has a weight; for an
    internal node it is the sum of its children's weights.
    """

    __slots__ = ("symbol", "weight", "zero", "one")

    def __init__(self, symbol: Optional[int], weight: int,
                 zero: "HuffmanNode" = None, one: "HuffmanNode" = None) -> None:
        self.symbol = symbol
        self.weight = weight
        self.zero = zero
        self.one = one

    @classmethod
    def leaf(cls, symbol: int, weight: int) -> "HuffmanNode":
        return cls(symbol, weight)

    @classmethod
    def internal(cls, zero: "HuffmanNode", one: "HuffmanNode") -> "HuffmanNode":
        return cls(None, zero.weight + one.weight, zero, one)

    @property
    def is_leaf(self) -> bool:
        return self.symbol is not None

    def __repr__(self) -> str:
        if self.is_leaf:
            return f"HuffmanNode(symbol={self.symbol}, weight={self.weight})"
        return f"HuffmanNode(weight={self.weight}, zero={self.zero!r}, one={self.one!r})"


def build_tree(frequencies: Mapping[int, int]) -> HuffmanNode:
    """
    Builds the Huffman tree by greedy merging of the two lightest trees.

    Ties on weight are broken by insertion order: leaves enter the queue
    in the map's iteration order, and each merged node is numbered after
    everything already queued. The first of the two dequeued items becomes
    the zero branch. A map with a single entry yields that lone leaf.

    Parameters:
    frequencies (Mapping[int, int]): symbol -> positive count, non-empty.

    Returns:
    HuffmanNode: The root of the tree.
    """
    if not frequencies:
        raise ValueError("Cannot build a tree from an empty frequency map")

    sequence = count()
    heap = [(weight, next(sequence), HuffmanNode.leaf(symbol, weight))
            for symbol, weight in frequencies.items()]
    heapq.heapify(heap)

    while len(heap) > 1:
        _, _, zero = heapq.heappop(heap)
        _, _, one = heapq.heappop(heap)
        merged = HuffmanNode.internal(zero, one)
        heapq.heappush(heap, (merged.weight, next(sequence), merged))

    root = heap[0][2]
    logger.debug("Built tree over %d symbols, total weight %d", len(frequencies), root.weight)
    return root


def free_tree(root: HuffmanNode) -> None:
    """Detaches every node from its children, bottom-up."""
    if root.is_leaf:
        return
    free_tree(root.zero)
    free_tree(root.one)
    root.zero = root.one = None


def build_code_table(root: HuffmanNode) -> Dict[int, bitarray]:
    """
    Derives every symbol's code with one depth-first walk.

    A lone-leaf tree gives its symbol an empty code.

    Parameters:
    root (HuffmanNode): Root of the tree.

    Returns:
    Dict[int, bitarray]: symbol -> root-to-leaf path (0 = zero branch).
    """
    codes = {}

    def walk(node, path):
        if node.is_leaf:
            codes[node.symbol] = path
            return
        walk(node.zero, path + bitarray("0", endian=BIT_ORDER))
        walk(node.one, path + bitarray("1", endian=BIT_ORDER))

    walk(root, bitarray(endian=BIT_ORDER))
    return codes


def encode_stream(source: BinaryIO, codes: Mapping[int, bitarray], writer: BitWriter,
                  chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
    """
    Writes the code of every source byte, then the END_OF_STREAM code.

    The writer is not flushed; the caller owns the final byte padding.
    """
    chunk = source.read(chunk_size)
    while chunk:
        for byte in chunk:
            try:
                code = codes[byte]
            except KeyError:
                raise ValueError(f"No code for byte {byte}; the input changed after counting") from None
            writer.write_code(code)
        chunk = source.read(chunk_size)

    if END_OF_STREAM not in codes:
        raise MissingSentinel("No END_OF_STREAM code in the code table")
    writer.write_code(codes[END_OF_STREAM])
    logger.debug("Encoded body: %d bits", writer.bits_written)


def decode_stream(reader: BitReader, root: HuffmanNode, sink: BinaryIO,
                  chunk_size: int = DEFAULT_CHUNK_SIZE) -> int:
    """
    Walks the tree one bit at a time until the END_OF_STREAM leaf.

    Parameters:
    reader (BitReader): Bits of the encoded body.
    root (HuffmanNode): Tree rebuilt from the header.
    sink (BinaryIO): Receives the decoded bytes.
    chunk_size (int): Decoded bytes are handed to the sink in runs of this size.

    Returns:
    int: Number of bytes written to the sink.
    """
    if root.is_leaf:
        # Lone leaf: its code is empty, so there are no bits to read.
        if root.symbol != END_OF_STREAM:
            raise MissingSentinel("Single-symbol tree has no END_OF_STREAM leaf")
        return 0

    output = bytearray()
    written = 0
    node = root
    while True:
        try:
            bit = reader.read_bit()
        except EOFError:
            raise TruncatedStream(
                f"Bit stream ended after {reader.bits_read} bits without END_OF_STREAM") from None
        node = node.one if bit else node.zero
        if not node.is_leaf:
            continue
        if node.symbol == END_OF_STREAM:
            break
        output.append(node.symbol)
        node = root
        if len(output) >= chunk_size:
            sink.write(output)
            written += len(output)
            output = bytearray()

    sink.write(output)
    written += len(output)
    logger.debug("Decoded %d bytes from %d bits", written, reader.bits_read)
    return written
