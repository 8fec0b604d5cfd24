"""Wrapping sequence numbers, byte streams, reassembly, and TCP sender and receiver logic."""

__version__ = "0.1.0"

__all__ = ["wrapping", "byte_stream", "messages", "reassembler", "tcp_receiver", "tcp_sender"]