import io
import logging
from typing import BinaryIO

from .bitio import BitReader, BitWriter
from .frequency import DEFAULT_CHUNK_SIZE, count_frequencies
from .header import read_header, write_header
from .huffman import build_code_table, build_tree, decode_stream, encode_stream, free_tree

logger = logging.getLogger(__name__)


def check_chunk_size(chunk_size: int) -> int:
    # read(0) returns b"", which would look like an empty input.
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int):
        raise TypeError(f"chunk_size must be an int, got {type(chunk_size).__name__}")
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    return chunk_size


def compress(source: BinaryIO, sink: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
    """
    Compresses a seekable binary source into the sink.

    The source is read twice: once to count frequencies, then again
    (after seeking back to where it started) to encode.
    """
    check_chunk_size(chunk_size)
    start = source.tell()
    frequencies = count_frequencies(source, chunk_size)
    write_header(sink, frequencies)
    root = build_tree(frequencies)
    codes = build_code_table(root)
    source.seek(start)
    writer = BitWriter(sink, chunk_size)
    try:
        encode_stream(source, codes, writer, chunk_size)
        writer.flush()
    finally:
        free_tree(root)


def decompress(source: BinaryIO, sink: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
    """Reverses compress(): reads the header, rebuilds the tree, decodes the body."""
    check_chunk_size(chunk_size)
    frequencies = read_header(source)
    root = build_tree(frequencies)
    try:
        decode_stream(BitReader(source, chunk_size), root, sink, chunk_size)
    finally:
        free_tree(root)


class Compressor:
        # In-memory front end: bytes in, bytes out, over compress()/decompress().
        def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
            """
            Initializes the Compressor.

            Parameters:
            chunk_size (int): Bytes read per call on the underlying streams.
            """
            self.chunk_size = check_chunk_size(chunk_size)

        def compress(self, data: bytes) -> bytes:
            """
            Compresses the given data.

            Parameters:
            data (bytes): The raw bytes to compress.

            Returns:
            bytes: Header followed by the packed bit stream.
            """
            if not isinstance(data, (bytes, bytearray, memoryview)):
                raise TypeError("Input data must be bytes-like.")
            sink = io.BytesIO()
            compress(io.BytesIO(data), sink, self.chunk_size)
            logger.debug("Compressed %d bytes to %d", len(data), sink.tell())
            return sink.getvalue()

        def decompress(self, compressed: bytes) -> bytes:
            """
            Decompresses data produced by compress().

            Parameters:
            compressed (bytes): Compressed data.

            Returns:
            bytes: The original bytes.
            """
            if not isinstance(compressed, (bytes, bytearray, memoryview)):
                raise TypeError("Input compressed data must be bytes-like.")
            sink = io.BytesIO()
            decompress(io.BytesIO(compressed), sink, self.chunk_size)
            return sink.getvalue()
