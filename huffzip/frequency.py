import logging
from collections import Counter
from typing import BinaryIO, Dict

logger = logging.getLogger(__name__)

# Symbols are byte values 0-255 plus one sentinel just outside that range.
BYTE_RANGE = 256
END_OF_STREAM = BYTE_RANGE

DEFAULT_CHUNK_SIZE = 64 * 1024


def count_frequencies(source: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Dict[int, int]:
    """
    Counts how often each byte value occurs in the source.

    The source is read until exhaustion. END_OF_STREAM is added afterwards
    with a count of exactly 1, so the result is never empty.

    Parameters:
    source (BinaryIO): Readable binary stream, positioned at its start.
    chunk_size (int): Number of bytes requested per read() call.

    Returns:
    Dict[int, int]: symbol -> count, in first-occurrence order with the
    sentinel last.
    """
    frequencies = Counter()
    total = 0
    chunk = source.read(chunk_size)
    while chunk:
        frequencies.update(chunk)
        total += len(chunk)
        chunk = source.read(chunk_size)

    frequencies[END_OF_STREAM] = 1
    logger.debug("Counted %d bytes over %d distinct symbols", total, len(frequencies) - 1)
    return dict(frequencies)
