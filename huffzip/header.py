"""
Textual frequency header written in front of the encoded body.

Layout:

    <N> <c1><f1> <c2><f2> ... <cN><fN>

N is the number of symbols (END_OF_STREAM excluded) in decimal ASCII,
followed by a space. Each entry is one raw byte holding the symbol,
its count in decimal ASCII, then a space. The sentinel's count is
always 1 and is never written; read_header() puts it back.
"""

import logging
from typing import BinaryIO, Dict, Mapping

from .errors import MalformedHeader, MissingSentinel
from .frequency import BYTE_RANGE, END_OF_STREAM

logger = logging.getLogger(__name__)

SEPARATOR = b" "
# Enough for any 64-bit count.
MAX_DIGITS = 20


def write_header(sink: BinaryIO, frequencies: Mapping[int, int]) -> int:
    """
    Serializes a frequency map to the sink.

    The header is assembled in memory first, so nothing reaches the sink
    when the map is rejected.

    Parameters:
    sink (BinaryIO): Writable binary stream.
    frequencies (Mapping[int, int]): symbol -> count, END_OF_STREAM included.

    Returns:
    int: Number of header bytes written.
    """
    if END_OF_STREAM not in frequencies:
        raise MissingSentinel("No END_OF_STREAM entry in the frequency map")

    header = bytearray(b"%d" % (len(frequencies) - 1))
    header += SEPARATOR
    for symbol, count in frequencies.items():
        if symbol == END_OF_STREAM:
            continue
        if not 0 <= symbol < BYTE_RANGE:
            raise ValueError(f"Symbol out of byte range: {symbol}")
        if count <= 0:
            raise ValueError(f"Frequency must be positive, got {count} for symbol {symbol}")
        header.append(symbol)
        header += b"%d" % count
        header += SEPARATOR

    sink.write(header)
    logger.debug("Wrote %d-byte header for %d symbols", len(header), len(frequencies) - 1)
    return len(header)


def read_header(source: BinaryIO) -> Dict[int, int]:
    """
    Parses a header written by write_header().

    The source is consumed one byte at a time and is left positioned on
    the first byte of the encoded body.

    Parameters:
    source (BinaryIO): Readable binary stream positioned at the header.

    Returns:
    Dict[int, int]: symbol -> count, with END_OF_STREAM set to 1.
    """
    count = _read_number(source, "symbol count")
    frequencies = {}
    for index in range(count):
        symbol = _read_byte(source, f"symbol #{index}")
        if symbol in frequencies:
            raise MalformedHeader(f"Symbol {symbol} appears twice in the header")
        frequency = _read_number(source, f"frequency of symbol {symbol}")
        if frequency == 0:
            raise MalformedHeader(f"Symbol {symbol} has a zero frequency")
        frequencies[symbol] = frequency

    frequencies[END_OF_STREAM] = 1
    logger.debug("Read header with %d symbols", count)
    return frequencies


def _read_byte(source: BinaryIO, what: str) -> int:
    byte = source.read(1)
    if not byte:
        raise MalformedHeader(f"Header ended while reading {what}")
    return byte[0]


def _read_number(source: BinaryIO, what: str) -> int:
    """Reads decimal digits up to, and including, one whitespace byte."""
    digits = bytearray()
    while True:
        byte = source.read(1)
        if not byte:
            raise MalformedHeader(f"Header ended while reading {what}")
        if byte.isdigit():
            digits += byte
            if len(digits) > MAX_DIGITS:
                raise MalformedHeader(f"More than {MAX_DIGITS} digits in {what}")
            continue
        if not byte.isspace():
            raise MalformedHeader(f"Unexpected byte {byte!r} in {what}")
        break
    if not digits:
        raise MalformedHeader(f"No digits found for {what}")
    return int(digits)
