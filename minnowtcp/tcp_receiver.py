"""The receiving half of a TCP endpoint."""

from __future__ import annotations

from minnowtcp.byte_stream import ByteStream
from minnowtcp.messages import TCPReceiverMessage, TCPSenderMessage
from minnowtcp.reassembler import Reassembler
from minnowtcp.wrapping import Wrap32

_MAX_WINDOW = 65535


class TCPReceiver:
    """Turns incoming segments into stream bytes and produces acknowledgements."""

    def __init__(self, reassembler: Reassembler) -> None:
        self._reassembler = reassembler
        self._isn = Wrap32(0)
        self._syn_seen = False

    @property
    def reassembler(self) -> Reassembler:
        return self._reassembler

    @property
    def output(self) -> ByteStream:
        """The stream the received bytes are written to."""
        return self._reassembler.output

    def receive(self, message: TCPSenderMessage) -> None:
        """Insert the segment's payload into the reassembler at its stream index."""
        if message.rst:
            self.output.set_error()
            return
        checkpoint = self._reassembler.next_index
        if message.syn:
            self._isn = message.seqno
            self._syn_seen = True
            stream_index = message.seqno.unwrap(self._isn, checkpoint)
        else:
            stream_index = Wrap32(message.seqno.raw_value - 1).unwrap(self._isn, checkpoint)
        self._reassembler.insert(stream_index, message.payload, message.fin)

    def send(self) -> TCPReceiverMessage:
        """Build the acknowledgement and window advertisement for the peer."""
        window_size = min(self.output.available_capacity(), _MAX_WINDOW)
        ackno = None
        if self._syn_seen:
            ackno = self._isn + (
                self._reassembler.next_index + 1 + int(self.output.is_closed())
            )
        return TCPReceiverMessage(ackno=ackno, window_size=window_size, rst=self.output.has_error())