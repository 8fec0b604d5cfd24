"""32-bit sequence numbers that wrap around relative to a zero point."""

from __future__ import annotations

_MASK_LOW_32 = 0x0000_0000_FFFF_FFFF
_MASK_HIGH_32 = 0xFFFF_FFFF_0000_0000
_MASK_64 = 0xFFFF_FFFF_FFFF_FFFF
_BASE = _MASK_LOW_32 + 1


class Wrap32:
    """An unsigned 32-bit value that starts at an arbitrary zero point and wraps at 2**32."""

    __slots__ = ("_raw",)

    def __init__(self, raw_value: int) -> None:
        self._raw = int(raw_value) & _MASK_LOW_32

    @property
    def raw_value(self) -> int:
        """The underlying 32-bit value."""
        return self._raw

    @staticmethod
    def wrap(n: int, zero_point: Wrap32) -> Wrap32:
        """Wrap the absolute sequence number ``n`` relative to ``zero_point``."""
        return Wrap32(n) + zero_point.raw_value

    def unwrap(self, zero_point: Wrap32, checkpoint: int) -> int:
        """Return the absolute sequence number closest to ``checkpoint`` that wraps to this value."""
        checkpoint &= _MASK_64
        n_low32 = (self._raw - zero_point.raw_value) & _MASK_LOW_32
        c_low32 = checkpoint & _MASK_LOW_32
        result = (checkpoint & _MASK_HIGH_32) | n_low32
        if result >= _BASE and n_low32 > c_low32 and n_low32 - c_low32 > _BASE // 2:
            return result - _BASE
        if result < _MASK_HIGH_32 and c_low32 > n_low32 and c_low32 - n_low32 > _BASE // 2:
            return result + _BASE
        return result

    def __add__(self, n: int) -> Wrap32:
        if isinstance(n, Wrap32) or not isinstance(n, int):
            return NotImplemented
        return Wrap32(self._raw + n)

    def __invert__(self) -> Wrap32:
        return Wrap32(~self._raw)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Wrap32):
            return NotImplemented
        return self._raw == other._raw

    def __hash__(self) -> int:
        return hash(self._raw)

    def __repr__(self) -> str:
        return f"Wrap32({self._raw})"

    def __str__(self) -> str:
        return f"Wrap32<{self._raw}>"