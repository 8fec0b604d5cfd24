"""Reassembly of indexed, possibly overlapping substrings into a byte stream."""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass

from minnowtcp.byte_stream import ByteStream


@dataclass
class _Segment:
    begin: int
    data: bytes

    @property
    def end(self) -> int:
        return self.begin + len(self.data)


def _merge(a: _Segment, b: _Segment) -> int:
    """Merge ``b`` into ``a`` in place.

    Returns the number of overlapping bytes, or -1 if the two are neither
    overlapping nor adjacent (in which case ``a`` is left unchanged).
    """
    x, y = (b, a) if a.begin > b.begin else (a, b)
    if x.end < y.begin:
        return -1
    if x.end >= y.end:
        overlap = len(y.data)
        a.begin, a.data = x.begin, x.data
        return overlap
    overlap = x.end - y.begin
    a.begin, a.data = x.begin, x.data + y.data[overlap:]
    return overlap


class Reassembler:
    """Puts out-of-order substrings back in order and writes them into a ByteStream."""

    def __init__(self, output: ByteStream) -> None:
        self._output = output
        self._pending = 0
        self._next_index = 0
        self._end_index = 0
        self._end_known = False
        self._segments: list[_Segment] = []

    @property
    def output(self) -> ByteStream:
        """The stream the reassembled bytes are written to."""
        return self._output

    @property
    def next_index(self) -> int:
        """Index of the first byte not yet written to the output."""
        return self._next_index

    def _lower_bound(self, begin: int) -> int:
        return bisect_left([seg.begin for seg in self._segments], begin)

    def insert(self, first_index: int, data: bytes, is_last_substring: bool) -> None:
        """Store ``data`` starting at stream index ``first_index`` and write what is now contiguous."""
        data = bytes(data)
        available = self._output.available_capacity()
        if not available:
            return
        tail = self._next_index + available
        if is_last_substring:
            self._end_known = True
            self._end_index = first_index + len(data)
        if first_index >= tail:
            return
        data = data[: tail - first_index]

        if first_index + len(data) > self._next_index:
            if first_index < self._next_index:
                elm = _Segment(self._next_index, data[self._next_index - first_index :])
            else:
                elm = _Segment(first_index, data)
            self._pending += len(elm.data)
            self._absorb(elm)
            self._flush()

        if self._end_known and not self._segments and self._next_index == self._end_index:
            self._output.close()

    def _absorb(self, elm: _Segment) -> None:
        segments = self._segments
        idx = self._lower_bound(elm.begin)
        while idx < len(segments):
            overlap = _merge(elm, segments[idx])
            if overlap < 0:
                break
            self._pending -= overlap
            del segments[idx]
            idx = self._lower_bound(elm.begin)
        while idx > 0:
            idx -= 1
            overlap = _merge(elm, segments[idx])
            if overlap < 0:
                break
            self._pending -= overlap
            del segments[idx]
            idx = self._lower_bound(elm.begin)
        segments.insert(self._lower_bound(elm.begin), elm)

    def _flush(self) -> None:
        if self._segments and self._segments[0].begin == self._next_index:
            head = self._segments.pop(0)
            self._output.push(head.data)
            self._pending -= len(head.data)
            self._next_index = head.end

    def bytes_pending(self) -> int:
        """Number of bytes stored but not yet written to the output."""
        return self._pending