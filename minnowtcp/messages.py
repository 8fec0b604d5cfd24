"""Messages exchanged between a TCP sender and a TCP receiver."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from minnowtcp.wrapping import Wrap32


@dataclass
class TCPSenderMessage:
    """A segment as sent by a TCP sender: sequence number, flags and payload."""

    seqno: Wrap32 = field(default_factory=lambda: Wrap32(0))
    syn: bool = False
    payload: bytes = b""
    fin: bool = False
    rst: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.payload, str):
            self.payload = self.payload.encode()
        else:
            self.payload = bytes(self.payload)

    def sequence_length(self) -> int:
        """Number of sequence numbers the segment occupies (SYN and FIN count as one each)."""
        return int(self.syn) + len(self.payload) + int(self.fin)


@dataclass
class TCPReceiverMessage:
    """An acknowledgement as sent by a TCP receiver."""

    ackno: Optional[Wrap32] = None
    window_size: int = 0
    rst: bool = False