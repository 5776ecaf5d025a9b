class HuffmanError(Exception):
    """Base class for every failure raised by the huffzip codec."""


class MissingSentinel(HuffmanError):
    """
    The frequency map (or tree) has no END_OF_STREAM entry.

    Raised before anything is written, since a stream without the
    sentinel could never be decoded.
    """


class MalformedHeader(HuffmanError, ValueError):
    """The compressed header does not follow the `<N> <c><f> ...` layout."""


class TruncatedStream(HuffmanError, ValueError):
    """The encoded body ended before the END_OF_STREAM leaf was reached."""
