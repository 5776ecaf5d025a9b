from typing import BinaryIO

from bitarray import bitarray

from .frequency import DEFAULT_CHUNK_SIZE

# Bits are packed most-significant first inside every byte.
BIT_ORDER = "big"


class BitWriter:
    """
    Bit-oriented sink layered over a binary stream.

    Bits are collected in a bitarray and handed to the stream a whole
    byte at a time. Call flush() once at the end; it pads the last byte
    with zero bits.
    """

    def __init__(self, sink: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        self.sink = sink
        self.chunk_size = chunk_size
        self.bits_written = 0
        self._buffer = bitarray(endian=BIT_ORDER)

    def write_bit(self, bit: int) -> None:
        self._buffer.append(bit)
        self.bits_written += 1
        self._drain()

    def write_code(self, code: bitarray) -> None:
        """
        Appends every bit of a code, in order.

        Parameters:
        code (bitarray): The bits to write; may be empty.
        """
        self._buffer.extend(code)
        self.bits_written += len(code)
        self._drain()

    def flush(self) -> None:
        """Writes all pending bits, zero-padding the final partial byte."""
        if self._buffer:
            self._buffer.fill()
            self.sink.write(self._buffer.tobytes())
            self._buffer = bitarray(endian=BIT_ORDER)
        if hasattr(self.sink, "flush"):
            self.sink.flush()

    def _drain(self) -> None:
        if len(self._buffer) < 8 * self.chunk_size:
            return
        whole = len(self._buffer) - len(self._buffer) % 8
        self.sink.write(self._buffer[:whole].tobytes())
        del self._buffer[:whole]


class BitReader:
    """
    Bit-oriented source layered over a binary stream.

    Reading starts at the stream's current position, so a header parsed
    from the same stream is simply skipped over.
    """

    def __init__(self, source: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        self.source = source
        self.chunk_size = chunk_size
        self.bits_read = 0
        self._buffer = bitarray(endian=BIT_ORDER)
        self._position = 0

    def read_bit(self) -> int:
        """
        Returns the next bit (0 or 1).

        Raises:
        EOFError: The underlying stream has no more bytes.
        """
        if self._position >= len(self._buffer):
            chunk = self.source.read(self.chunk_size)
            if not chunk:
                raise EOFError("Bit source exhausted")
            self._buffer = bitarray(endian=BIT_ORDER)
            self._buffer.frombytes(chunk)
            self._position = 0
        bit = self._buffer[self._position]
        self._position += 1
        self.bits_read += 1
        return bit
