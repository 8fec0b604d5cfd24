"""The sending half of a TCP endpoint."""

from __future__ import annotations

from collections import deque
from typing import Callable, NamedTuple

from minnowtcp.byte_stream import ByteStream, read
from minnowtcp.messages import TCPReceiverMessage, TCPSenderMessage
from minnowtcp.wrapping import Wrap32

MAX_PAYLOAD_SIZE = 1000

Transmit = Callable[[TCPSenderMessage], None]


class RetransmissionTimer:
    """A millisecond timer with an exponentially backed-off timeout."""

    def __init__(self, initial_rto_ms: int) -> None:
        self._initial = initial_rto_ms
        self._rto = initial_rto_ms
        self._elapsed = 0
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    @property
    def rto_ms(self) -> int:
        """The current retransmission timeout."""
        return self._rto

    @property
    def elapsed_ms(self) -> int:
        """Milliseconds counted since the timer was last reset."""
        return self._elapsed

    def is_expired(self) -> bool:
        return self._active and self._elapsed >= self._rto

    def reset(self) -> None:
        """Restart the count from zero, keeping the current timeout."""
        self._elapsed = 0

    def clear(self) -> None:
        """Restart the count and return the timeout to its initial value."""
        self._elapsed = 0
        self._rto = self._initial

    def exponential_backoff(self) -> None:
        self._rto *= 2

    def start(self) -> None:
        self._active = True
        self.reset()

    def stop(self) -> None:
        self._active = False
        self.reset()

    def tick(self, ms_since_last_tick: int) -> RetransmissionTimer:
        if self._active:
            self._elapsed += ms_since_last_tick
        return self


class _Outstanding(NamedTuple):
    message: TCPSenderMessage
    abs_seqno: int


class TCPSender:
    """Reads an outbound byte stream and turns it into segments, retransmitting as needed."""

    def __init__(self, stream: ByteStream, isn: Wrap32, initial_rto_ms: int) -> None:
        self._stream = stream
        self._isn = isn
        self._initial_rto_ms = initial_rto_ms
        self._timer = RetransmissionTimer(initial_rto_ms)
        self._syn_sent = False
        self._fin_sent = False
        self._acked = 0
        self._next_abs_seqno = 0
        self._in_flight = 0
        self._window_size = 0
        self._checkpoint = 0
        self._retransmissions = 0
        self._outstanding: deque[_Outstanding] = deque()

    @property
    def stream(self) -> ByteStream:
        """The outbound stream the sender reads from."""
        return self._stream

    @property
    def timer(self) -> RetransmissionTimer:
        return self._timer

    def sequence_numbers_in_flight(self) -> int:
        """How many sequence numbers are sent but not yet acknowledged."""
        return self._in_flight

    def consecutive_retransmissions(self) -> int:
        return self._retransmissions

    def make_empty_message(self) -> TCPSenderMessage:
        """A segment that occupies no sequence numbers, carrying the next seqno."""
        return TCPSenderMessage(
            seqno=Wrap32.wrap(self._next_abs_seqno, self._isn),
            syn=False,
            payload=b"",
            fin=False,
            rst=self._stream.has_error(),
        )

    def _effective_window(self) -> int:
        return self._window_size or 1

    def push(self, transmit: Transmit) -> None:
        """Send as many segments as the receiver's window allows."""
        while self._effective_window() > self._in_flight:
            if self._fin_sent:
                break
            msg = self.make_empty_message()
            if not self._syn_sent:
                msg.syn = True
                self._syn_sent = True

            remaining = self._effective_window() - self._in_flight
            length = min(MAX_PAYLOAD_SIZE, remaining, self._stream.bytes_buffered())
            msg.payload = read(self._stream, length)

            if remaining > msg.sequence_length() and self._stream.is_finished():
                msg.fin = True
                self._fin_sent = True

            if msg.sequence_length() == 0:
                break

            transmit(msg)
            if not self._timer.active:
                self._timer.start()
            self._outstanding.append(_Outstanding(msg, self._next_abs_seqno))
            self._next_abs_seqno += msg.sequence_length()
            self._in_flight += msg.sequence_length()

    def receive(self, msg: TCPReceiverMessage) -> None:
        """Process an acknowledgement and window advertisement from the peer."""
        if self._stream.has_error():
            return
        if msg.rst:
            self._stream.set_error()
            return
        if msg.ackno is None:
            return

        ack = msg.ackno.unwrap(self._isn, self._checkpoint)
        if ack < self._acked or (ack == 0 and self._syn_sent) or ack > self._next_abs_seqno:
            return
        if ack > self._acked:
            self._timer.clear()
            self._retransmissions = 0

        self._window_size = msg.window_size
        self._acked = ack
        while self._outstanding:
            head = self._outstanding[0]
            if head.abs_seqno + head.message.sequence_length() > ack:
                break
            self._outstanding.popleft()
        self._in_flight = self._next_abs_seqno - ack
        self._checkpoint = ack

    def tick(self, ms_since_last_tick: int, transmit: Transmit) -> None:
        """Let time pass, retransmitting the earliest outstanding segment on timeout."""
        if not self._timer.active:
            return
        self._timer.tick(ms_since_last_tick)
        if self._timer.is_expired() and self._outstanding:
            transmit(self._outstanding[0].message)
            if self._window_size:
                self._retransmissions += 1
                self._timer.exponential_backoff()
            self._timer.reset()