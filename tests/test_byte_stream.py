import pytest

from minnowtcp.byte_stream import ByteStream, read


def make_stream(capacity, *chunks):
    stream = ByteStream(capacity)
    for chunk in chunks:
        stream.push(chunk)
    return stream


def counters(stream):
    return (
        stream.bytes_pushed(),
        stream.bytes_popped(),
        stream.bytes_buffered(),
        stream.available_capacity(),
    )


def flags(stream):
    return (stream.is_closed(), stream.is_finished(), stream.has_error())


def test_new_stream_is_empty_and_open():
    stream = ByteStream(15)
    assert counters(stream) == (0, 0, 0, 15)
    assert flags(stream) == (False, False, False)


@pytest.mark.parametrize(
    "capacity, chunks, expected",
    [
        (64, [b"hello world"], b"hello world"),
        (4, [b"abcdefgh"], b"abcd"),
        (4, [b"abcdefgh", b"abcdefgh"], b"abcd"),
        (0, [b"abc"], b""),
        (100, [b"one", b"two", b"three"], b"onetwothree"),
    ],
)
def test_push_keeps_what_fits_in_order(capacity, chunks, expected):
    stream = make_stream(capacity, *chunks)
    assert counters(stream) == (len(expected), 0, len(expected), capacity - len(expected))
    assert stream.peek() == expected
    assert read(stream, 1000) == expected
    assert counters(stream) == (len(expected), len(expected), 0, capacity)


def test_capacity_is_freed_by_pop():
    data = b"abcdefgh"
    stream = make_stream(4, data)
    stream.pop(2)
    assert stream.available_capacity() == 2
    stream.push(data[4:])
    assert stream.peek() == b"cdef"


def test_peek_does_not_consume():
    stream = make_stream(10, b"xyz")
    assert [stream.peek(), stream.peek()] == [b"xyz", b"xyz"]
    assert stream.bytes_buffered() == 3


def test_peek_on_empty_stream_is_empty():
    assert ByteStream(8).peek() == b""


def test_pop_more_than_buffered_pops_only_buffered():
    stream = make_stream(10, b"abc")
    stream.pop(100)
    assert counters(stream) == (3, 3, 0, 10)


@pytest.mark.parametrize(
    "action, error",
    [
        (lambda: make_stream(10, b"abc").pop(-1), ValueError),
        (lambda: ByteStream(-1), ValueError),
        (lambda: ByteStream(10).push("abc"), TypeError),
    ],
)
def test_invalid_use_raises(action, error):
    with pytest.raises(error):
        action()


def test_accounting_invariant_over_many_operations():
    stream = ByteStream(7)
    for index, chunk in enumerate([b"ab", b"cdefg", b"hij", b"", b"klmnopq", b"r"]):
        stream.push(chunk)
        stream.pop(index)
        assert stream.bytes_pushed() == stream.bytes_popped() + stream.bytes_buffered()
        assert stream.bytes_buffered() + stream.available_capacity() == stream.capacity


def test_read_limited_length():
    stream = make_stream(10, b"abcdef")
    assert [read(stream, 2), read(stream, 10), read(stream, 10)] == [b"ab", b"cdef", b""]


def test_finished_only_after_close_and_drain():
    stream = make_stream(10, b"abc")
    stream.close()
    assert flags(stream) == (True, False, False)
    stream.pop(3)
    assert flags(stream) == (True, True, False)


def test_open_empty_stream_is_not_finished():
    stream = make_stream(10, b"a")
    stream.pop(1)
    assert flags(stream) == (False, False, False)


def test_set_error():
    stream = ByteStream(10)
    stream.set_error()
    assert flags(stream) == (False, False, True)