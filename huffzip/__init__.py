from .compression import Compressor, compress, decompress
from .errors import HuffmanError, MalformedHeader, MissingSentinel, TruncatedStream
from .frequency import END_OF_STREAM

__all__ = [
    "Compressor",
    "compress",
    "decompress",
    "END_OF_STREAM",
    "HuffmanError",
    "MalformedHeader",
    "MissingSentinel",
    "TruncatedStream",
]
