"""Multilinear Galois Mode (MGM) over any 64- or 128-bit block cipher."""

from __future__ import annotations

import hmac
from dataclasses import dataclass
from itertools import chain
from typing import Iterator, Protocol, Union

from .errors import AeadError
from .mgm_gf import GF64Element, GF128Element

SUPPORTED_BLOCK_SIZES = (8, 16)


class BlockCipher(Protocol):
    """A keyed block cipher; ``block_size`` is given in bytes."""

    block_size: int

    def encrypt_block(self, block: bytes) -> bytes:
        """Encrypt exactly one block."""
        ...


@dataclass
class _Counter:
    """A block viewed as two big-endian half-block counters."""

    left: int
    right: int
    half: int

    @classmethod
    def from_block(cls, block: bytes) -> "_Counter":
        half = len(block) // 2
        return cls(
            int.from_bytes(block[:half], "big"),
            int.from_bytes(block[half:], "big"),
            half,
        )

    def to_block(self) -> bytes:
        return self.left.to_bytes(self.half, "big") + self.right.to_bytes(self.half, "big")

    @property
    def _modulus(self) -> int:
        return 1 << (8 * self.half)

    def incr_left(self) -> None:
        self.left = (self.left + 1) % self._modulus

    def incr_right(self) -> None:
        self.right = (self.right + 1) % self._modulus


def _blocks(data: bytes, size: int) -> Iterator[bytes]:
    """Split ``data`` into blocks, zero-padding the last partial one."""
    for start in range(0, len(data), size):
        chunk = data[start : start + size]
        yield chunk + bytes(size - len(chunk))


def _xor(a: bytes, b: bytes) -> bytes:
    return bytes(x ^ y for x, y in zip(a, b))


class Mgm:
    """MGM authenticated encryption around a block cipher instance.

    The nonce is one block long and its most significant bit must be zero.
    The tag is one block long.
    """

    def __init__(self, cipher: BlockCipher) -> None:
        block_size = getattr(cipher, "block_size", None)
        if block_size not in SUPPORTED_BLOCK_SIZES:
            raise ValueError(
                f"cipher block size must be one of {SUPPORTED_BLOCK_SIZES} bytes, got {block_size}"
            )
        if not callable(getattr(cipher, "encrypt_block", None)):
            raise TypeError("cipher must provide encrypt_block(block)")
        self._cipher = cipher
        self.block_size: int = block_size

    @property
    def nonce_size(self) -> int:
        return self.block_size

    @property
    def tag_size(self) -> int:
        return self.block_size

    def _encrypt(self, block: bytes) -> bytes:
        out = bytes(self._cipher.encrypt_block(block))
        if len(out) != self.block_size:
            raise ValueError(
                f"cipher returned {len(out)} bytes for a {self.block_size}-byte block"
            )
        return out

    def _element(self) -> Union[GF64Element, GF128Element]:
        return GF64Element() if self.block_size == 8 else GF128Element()

    def _check_nonce(self, nonce) -> bytes:
        nonce = bytes(nonce)
        if len(nonce) != self.block_size:
            raise ValueError(f"nonce must be {self.block_size} bytes, got {len(nonce)}")
        if nonce[0] >> 7:
            raise AeadError("first nonce bit must be zero")
        return nonce

    def _lengths_block(self, ad_len: int, data_len: int) -> bytes:
        half = self.block_size // 2
        limit = 1 << (8 * half)
        bit_lengths = (ad_len * 8, data_len * 8)
        if any(n >= limit for n in bit_lengths):
            raise AeadError("input too long")
        return b"".join(n.to_bytes(half, "big") for n in bit_lengths)

    def _compute_tag(self, nonce: bytes, associated_data: bytes, ciphertext: bytes) -> bytes:
        final_block = self._lengths_block(len(associated_data), len(ciphertext))
        bs = self.block_size
        counter = _Counter.from_block(self._encrypt(bytes([nonce[0] | 0x80]) + nonce[1:]))
        acc = self._element()
        for block in chain(_blocks(associated_data, bs), _blocks(ciphertext, bs), [final_block]):
            h = self._encrypt(counter.to_block())
            acc.mul_sum(h, block)
            counter.incr_left()
        return self._encrypt(acc.to_bytes())

    def _keystream_xor(self, nonce: bytes, data: bytes) -> bytes:
        bs = self.block_size
        counter = _Counter.from_block(self._encrypt(bytes([nonce[0] & 0x7F]) + nonce[1:]))
        out = bytearray()
        for start in range(0, len(data), bs):
            out += _xor(data[start : start + bs], self._encrypt(counter.to_block()))
            counter.incr_right()
        return bytes(out)

    def encrypt_detached(self, nonce, plaintext, associated_data=b"") -> tuple[bytes, bytes]:
        """Encrypt ``plaintext``, returning ``(ciphertext, tag)``."""
        nonce = self._check_nonce(nonce)
        plaintext = bytes(plaintext)
        associated_data = bytes(associated_data)
        self._lengths_block(len(associated_data), len(plaintext))
        ciphertext = self._keystream_xor(nonce, plaintext)
        return ciphertext, self._compute_tag(nonce, associated_data, ciphertext)

    def decrypt_detached(self, nonce, ciphertext, tag, associated_data=b"") -> bytes:
        """Verify ``tag`` and return the plaintext; raise :class:`AeadError` on mismatch."""
        nonce = self._check_nonce(nonce)
        ciphertext = bytes(ciphertext)
        associated_data = bytes(associated_data)
        tag = bytes(tag)
        if len(tag) != self.block_size:
            raise ValueError(f"tag must be {self.block_size} bytes, got {len(tag)}")
        expected = self._compute_tag(nonce, associated_data, ciphertext)
        if not hmac.compare_digest(expected, tag):
            raise AeadError("tag mismatch")
        return self._keystream_xor(nonce, ciphertext)

    def encrypt(self, nonce, plaintext, associated_data=b"") -> bytes:
        """Encrypt ``plaintext`` and return the ciphertext followed by the tag."""
        ciphertext, tag = self.encrypt_detached(nonce, plaintext, associated_data)
        return ciphertext + tag

    def decrypt(self, nonce, ciphertext, associated_data=b"") -> bytes:
        """Decrypt a ciphertext that carries its tag at the end."""
        data = bytes(ciphertext)
        if len(data) < self.block_size:
            raise AeadError("ciphertext shorter than the tag")
        split = len(data) - self.block_size
        return self.decrypt_detached(nonce, data[:split], data[split:], associated_data)