# minnowtcp

The building blocks of a TCP endpoint as plain Python objects. You drive them
entirely through method calls. There are no sockets and there is no clock of its
own. Time passes only when you call `tick`.

## Components

### `minnowtcp.wrapping.Wrap32`

A 32-bit sequence number that wraps at 2**32.

- `Wrap32.wrap(n, zero_point)` turns an absolute sequence number into its wrapped form.
- `unwrap(zero_point, checkpoint)` returns the absolute number closest to `checkpoint` that wraps to this value.
- `raw_value` gives the underlying 32-bit value.
- `+ n` adds an integer modulo 2**32.
- `~` gives the bitwise complement.
- Values compare equal when their raw values are equal.

### `minnowtcp.byte_stream.ByteStream`

A bounded in-memory byte stream.

- Writing side:
  - `push(data)` stores as much of `data` as the available capacity allows.
  - `close()` marks the stream as closed.
  - `is_closed()`, `available_capacity()` and `bytes_pushed()` report on the writing side.
- Reading side:
  - `peek()` returns every buffered byte without removing it.
  - `pop(length)` removes up to `length` bytes.
  - `is_finished()` is true once the stream is closed and empty.
  - `bytes_buffered()` and `bytes_popped()` report on the reading side.
- Errors: `set_error()` and `has_error()`.
- The `capacity` property gives the stream's capacity.
- The helper `minnowtcp.byte_stream.read(stream, length)` peeks and pops up to `length` bytes and returns them.

### `minnowtcp.reassembler.Reassembler`

Wraps an output `ByteStream`.

- `insert(first_index, data, is_last_substring)` takes substrings that may arrive out of order or overlap.
  - It writes bytes to the output as soon as they become contiguous.
  - It drops bytes beyond the output's available capacity.
  - It closes the output once the last byte has been written.
- `bytes_pending()` counts bytes that are stored but not yet written.
- `output` gives the output stream.
- `next_index` gives the index of the first unwritten byte.

### `minnowtcp.messages`

Two dataclasses carry segments between the two ends:

- `TCPSenderMessage` has the fields `seqno`, `syn`, `payload`, `fin` and `rst`.
  - A `str` payload is encoded to bytes.
  - `sequence_length()` counts the payload bytes plus one for SYN and one for FIN.
- `TCPReceiverMessage` has the fields `ackno`, `window_size` and `rst`.

### `minnowtcp.tcp_receiver.TCPReceiver`

Wraps a `Reassembler`.

- `receive(message)` places a segment's payload at its stream index.
  - A segment with RST set marks the output stream as errored.
- `send()` returns a `TCPReceiverMessage` with the acknowledgement, the window and the RST flag.
  - The acknowledgement is present only after a SYN has been seen.
  - The window is capped at 65535.

### `minnowtcp.tcp_sender.TCPSender`

Built from an outbound `ByteStream`, an initial sequence number and an initial retransmission timeout in milliseconds.

- `push(transmit)` reads from the stream and calls `transmit` with segments until the peer's window is full.
  - A window of zero is treated as one.
  - A payload is at most `MAX_PAYLOAD_SIZE` (1000) bytes.
  - SYN and FIN are added when due.
- `receive(msg)` handles acknowledgements and window updates.
  - A message with RST set marks the stream as errored.
- `tick(ms, transmit)` retransmits the earliest outstanding segment when the timer expires.
  - The timeout doubles on each retransmission while the window is non-zero.
- `make_empty_message()`, `sequence_numbers_in_flight()` and `consecutive_retransmissions()` report the sender's state.
- `stream` gives the outbound stream.
- `timer` gives the `RetransmissionTimer`.
  - Its methods are `start`, `stop`, `reset`, `clear`, `tick`, `is_expired` and `exponential_backoff`.
  - Its properties are `active`, `rto_ms` and `elapsed_ms`.

## Example

```python
from minnowtcp.byte_stream import ByteStream, read
from minnowtcp.messages import TCPReceiverMessage, TCPSenderMessage
from minnowtcp.reassembler import Reassembler
from minnowtcp.tcp_receiver import TCPReceiver
from minnowtcp.tcp_sender import TCPSender
from minnowtcp.wrapping import Wrap32

sent = []
sender = TCPSender(ByteStream(4096), Wrap32(0), 1000)
sender.push(sent.append)                        # sends the SYN
sender.receive(TCPReceiverMessage(ackno=Wrap32(1), window_size=100))
sender.stream.push(b"hello")
sender.push(sent.append)                        # sends b"hello"
print(sender.sequence_numbers_in_flight())      # 5
sender.tick(1000, sent.append)                  # retransmits b"hello"

receiver = TCPReceiver(Reassembler(ByteStream(100)))
receiver.receive(TCPSenderMessage(seqno=Wrap32(5), syn=True, payload=b"hi"))
reply = receiver.send()
print(reply.ackno, reply.window_size)           # Wrap32<8> 98
print(read(receiver.output, 10))                # b'hi'
```

## What the package does not do

The package covers only the stream and TCP state logic. It has no code for the following:

- encoding segments to or from wire format
- Ethernet, ARP or IP handling
- routing
- real sockets

You carry the messages between a sender and a receiver yourself.

## Installing and testing

```
pip install .
pip install .[test]
pytest
```