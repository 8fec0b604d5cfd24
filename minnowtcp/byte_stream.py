"""A bounded, in-memory byte stream with a writing and a reading side."""

from __future__ import annotations


class ByteStream:
    """A byte pipe of fixed capacity: bytes are pushed at one end and popped at the other."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        self._capacity = capacity
        self._buffer = bytearray()
        self._pushed = 0
        self._popped = 0
        self._closed = False
        self._error = False

    @property
    def capacity(self) -> int:
        """Total number of bytes the stream can hold at once."""
        return self._capacity

    # Writing side

    def push(self, data: bytes) -> None:
        """Append as much of ``data`` as the available capacity allows."""
        chunk = bytes(data)[: self.available_capacity()]
        self._buffer += chunk
        self._pushed += len(chunk)

    def close(self) -> None:
        """Signal that nothing more will be written."""
        self._closed = True

    def is_closed(self) -> bool:
        return self._closed

    def available_capacity(self) -> int:
        return self._capacity - len(self._buffer)

    def bytes_pushed(self) -> int:
        """Total number of bytes ever accepted by the stream."""
        return self._pushed

    # Reading side

    def peek(self) -> bytes:
        """Return the bytes currently buffered, without removing them."""
        return bytes(self._buffer)

    def pop(self, length: int) -> None:
        """Remove up to ``length`` bytes from the front of the buffer."""
        if length < 0:
            raise ValueError("length must be non-negative")
        length = min(length, len(self._buffer))
        del self._buffer[:length]
        self._popped += length

    def is_finished(self) -> bool:
        """True once the stream is closed and every byte has been popped."""
        return self._closed and not self._buffer

    def bytes_buffered(self) -> int:
        return len(self._buffer)

    def bytes_popped(self) -> int:
        """Total number of bytes ever popped from the stream."""
        return self._popped

    # Error state

    def set_error(self) -> None:
        """Mark the stream as having suffered an error."""
        self._error = True

    def has_error(self) -> bool:
        return self._error


def read(stream: ByteStream, length: int) -> bytes:
    """Peek and pop up to ``length`` bytes from ``stream`` and return them."""
    out = bytearray()
    while stream.bytes_buffered() and len(out) < length:
        view = stream.peek()
        if not view:
            raise RuntimeError("ByteStream.peek() returned no bytes")
        view = view[: length - len(out)]
        out += view
        stream.pop(len(view))
    return bytes(out)