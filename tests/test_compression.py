import io
import random

import pytest

from huffzip import (Compressor, END_OF_STREAM, MalformedHeader, TruncatedStream, compress,
                     decompress)
from huffzip.header import read_header


def compress_bytes(data):
    sink = io.BytesIO()
    compress(io.BytesIO(data), sink)
    return sink.getvalue()


def decompress_bytes(blob):
    sink = io.BytesIO()
    decompress(io.BytesIO(blob), sink)
    return sink.getvalue()


rng = random.Random(1234)

ROUND_TRIP_INPUTS = [
    b"",
    b"a",
    b"abracadabra",
    b"\x41" * 1000,
    bytes(range(256)) * 3,
    b"0 1 2 3 44 555 \n\n  ",
    bytes(rng.randrange(256) for _ in range(5000)),
    bytes(rng.choice(b"aaaaabbbc\x00") for _ in range(3000)),
]


@pytest.mark.parametrize("data", ROUND_TRIP_INPUTS)
def test_round_trip(data):
    assert decompress_bytes(compress_bytes(data)) == data


@pytest.mark.parametrize("data", ROUND_TRIP_INPUTS)
def test_header_always_yields_sentinel(data):
    frequencies = read_header(io.BytesIO(compress_bytes(data)))
    assert frequencies[END_OF_STREAM] == 1


def test_empty_input_is_bare_header():
    assert compress_bytes(b"") == b"0 "
    assert decompress_bytes(b"0 ") == b""


def test_single_repeated_byte_layout():
    blob = compress_bytes(b"\x41" * 1000)
    # A -> 1, sentinel -> 0: 1000 one bits, one zero bit, then padding
    assert blob == b"1 A1000 " + b"\xff" * 125 + b"\x00"
    assert decompress_bytes(blob) == b"\x41" * 1000


def test_compress_rewinds_to_initial_position():
    source = io.BytesIO(b"skipHELLO")
    source.seek(4)
    sink = io.BytesIO()
    compress(source, sink)
    assert decompress_bytes(sink.getvalue()) == b"HELLO"


def test_decompress_leaves_trailing_data_unread():
    source = io.BytesIO(compress_bytes(b"hello"))
    sink = io.BytesIO()
    decompress(source, sink)
    assert sink.getvalue() == b"hello"


def test_truncated_body_is_detected():
    blob = compress_bytes(b"hello world")
    with pytest.raises(TruncatedStream):
        decompress_bytes(blob[:-1])


def test_malformed_header_aborts_before_body():
    sink = io.BytesIO()
    with pytest.raises(MalformedHeader):
        decompress(io.BytesIO(b"garbage"), sink)
    assert sink.getvalue() == b""


def test_small_chunk_size_round_trip():
    data = b"the quick brown fox jumps over the lazy dog" * 5
    compressor = Compressor(chunk_size=3)
    blob = compressor.compress(data)
    assert blob == compress_bytes(data)
    assert compressor.decompress(blob) == data


def test_compressor_accepts_bytearray():
    compressor = Compressor()
    assert compressor.decompress(compressor.compress(bytearray(b"xyzzy"))) == b"xyzzy"


def test_compressor_rejects_text():
    with pytest.raises(TypeError):
        Compressor().compress("not bytes")
    with pytest.raises(TypeError):
        Compressor().decompress("not bytes")


def test_compressor_rejects_bad_chunk_size():
    with pytest.raises(ValueError):
        Compressor(chunk_size=0)


@pytest.mark.parametrize("chunk_size", [0, -1])
def test_stream_functions_reject_non_positive_chunk_size(chunk_size):
    sink = io.BytesIO()
    with pytest.raises(ValueError):
        compress(io.BytesIO(b"hello world"), sink, chunk_size)
    with pytest.raises(ValueError):
        decompress(io.BytesIO(compress_bytes(b"hello world")), sink, chunk_size)
    assert sink.getvalue() == b""


@pytest.mark.parametrize("chunk_size", ["64", 1.5, True])
def test_stream_functions_reject_non_int_chunk_size(chunk_size):
    with pytest.raises(TypeError):
        compress(io.BytesIO(b"hello world"), io.BytesIO(), chunk_size)
    with pytest.raises(TypeError):
        Compressor(chunk_size=chunk_size)
