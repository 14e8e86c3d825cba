"""Multiply-and-accumulate over GF(2^64) and GF(2^128) as used by MGM."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

_MASK64 = (1 << 64) - 1


def _clmul(a: int, b: int) -> int:
    """Carry-less product of two non-negative integers."""
    result = 0
    while b:
        if b & 1:
            result ^= a
        a <<= 1
        b >>= 1
    return result


def _reduce(value: int, bits: int, low_poly: int) -> int:
    """Reduce ``value`` modulo x^bits + low_poly."""
    mask = (1 << bits) - 1
    while value >> bits:
        value = (value & mask) ^ _clmul(value >> bits, low_poly)
    return value


def _read_block(block, size: int, name: str) -> int:
    data = bytes(block)
    if len(data) != size:
        raise ValueError(f"{name} must be {size} bytes, got {len(data)}")
    return int.from_bytes(data, "big")


def _field_product(a, b, size: int, low_poly: int) -> int:
    product = _clmul(_read_block(a, size, "a"), _read_block(b, size, "b"))
    return _reduce(product, size * 8, low_poly)


def bmul64(x: int, y: int) -> int:
    """Multiply two 64-bit polynomials over GF(2), returning the 128-bit product."""
    for name, value in (("x", x), ("y", y)):
        if not 0 <= value <= _MASK64:
            raise ValueError(f"{name} must fit in 64 bits")
    return _clmul(x, y)


@dataclass
class GF64Element:
    """Accumulator in GF(2^64) with f(w) = w^64 + w^4 + w^3 + w + 1."""

    value: int = 0

    SIZE: ClassVar[int] = 8
    _LOW_POLY: ClassVar[int] = 0x1B

    def mul_sum(self, a, b) -> None:
        """Add the field product of blocks ``a`` and ``b`` to this element."""
        self.value ^= _field_product(a, b, self.SIZE, self._LOW_POLY)

    def to_bytes(self) -> bytes:
        """Big-endian encoding of the element."""
        return self.value.to_bytes(self.SIZE, "big")


@dataclass
class GF128Element:
    """Accumulator in GF(2^128) with f(w) = w^128 + w^7 + w^2 + w + 1."""

    value: int = 0

    SIZE: ClassVar[int] = 16
    _LOW_POLY: ClassVar[int] = 0x87

    def mul_sum(self, a, b) -> None:
        """Add the field product of blocks ``a`` and ``b`` to this element."""
        self.value ^= _field_product(a, b, self.SIZE, self._LOW_POLY)

    def to_bytes(self) -> bytes:
        """Big-endian encoding of the element."""
        return self.value.to_bytes(self.SIZE, "big")