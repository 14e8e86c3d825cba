"""XSalsa20Poly1305 (NaCl secretbox) authenticated encryption."""

from __future__ import annotations

import hmac
import os
import struct

from cryptography.hazmat.primitives.poly1305 import Poly1305

from .errors import AeadError

KEY_SIZE = 32
NONCE_SIZE = 24
TAG_SIZE = 16

_MASK32 = 0xFFFFFFFF
_SIGMA = struct.unpack("<4I", b"expand 32-byte k")

_QUARTER_ROUNDS = (
    # column round
    (0, 4, 8, 12), (5, 9, 13, 1), (10, 14, 2, 6), (15, 3, 7, 11),
    # row round
    (0, 1, 2, 3), (5, 6, 7, 4), (10, 11, 8, 9), (15, 12, 13, 14),
)


def _rotl(value: int, shift: int) -> int:
    value &= _MASK32
    return ((value << shift) | (value >> (32 - shift))) & _MASK32


def _rounds(state: list[int]) -> list[int]:
    x = list(state)
    for _ in range(10):
        for a, b, c, d in _QUARTER_ROUNDS:
            x[b] ^= _rotl(x[a] + x[d], 7)
            x[c] ^= _rotl(x[b] + x[a], 9)
            x[d] ^= _rotl(x[c] + x[b], 13)
            x[a] ^= _rotl(x[d] + x[c], 18)
    return x


def _initial_state(key: bytes, middle: bytes) -> list[int]:
    k = struct.unpack("<8I", key)
    m = struct.unpack("<4I", middle)
    return [
        _SIGMA[0], k[0], k[1], k[2],
        k[3], _SIGMA[1], m[0], m[1],
        m[2], m[3], _SIGMA[2], k[4],
        k[5], k[6], k[7], _SIGMA[3],
    ]


def _hsalsa20(key: bytes, nonce16: bytes) -> bytes:
    x = _rounds(_initial_state(key, nonce16))
    return struct.pack("<8I", *(x[i] for i in (0, 5, 10, 15, 6, 7, 8, 9)))


def _salsa20_keystream(key: bytes, nonce8: bytes, length: int) -> bytes:
    out = bytearray()
    counter = 0
    while len(out) < length:
        state = _initial_state(key, nonce8 + struct.pack("<Q", counter))
        mixed = _rounds(state)
        out += struct.pack("<16I", *((m + s) & _MASK32 for m, s in zip(mixed, state)))
        counter += 1
    return bytes(out[:length])


def _xor(a: bytes, b: bytes) -> bytes:
    return bytes(x ^ y for x, y in zip(a, b))


class XSalsa20Poly1305:
    """XSalsa20 stream cipher with a Poly1305 tag; no associated data."""

    KEY_SIZE = KEY_SIZE
    NONCE_SIZE = NONCE_SIZE
    TAG_SIZE = TAG_SIZE

    def __init__(self, key) -> None:
        key = bytes(key)
        if len(key) != KEY_SIZE:
            raise ValueError(f"key must be {KEY_SIZE} bytes, got {len(key)}")
        self._key = key

    @staticmethod
    def generate_key() -> bytes:
        """Return a fresh random key."""
        return os.urandom(KEY_SIZE)

    @staticmethod
    def generate_nonce() -> bytes:
        """Return a random nonce; every message must have a unique nonce."""
        return os.urandom(NONCE_SIZE)

    def _keystream(self, nonce, length: int) -> tuple[bytes, bytes]:
        """Return the Poly1305 key and ``length`` bytes of message keystream."""
        nonce = bytes(nonce)
        if len(nonce) != NONCE_SIZE:
            raise ValueError(f"nonce must be {NONCE_SIZE} bytes, got {len(nonce)}")
        subkey = _hsalsa20(self._key, nonce[:16])
        stream = _salsa20_keystream(subkey, nonce[16:], 32 + length)
        return stream[:32], stream[32:]

    @staticmethod
    def _reject_associated_data(associated_data) -> None:
        if bytes(associated_data):
            raise AeadError("associated data is not supported")

    def encrypt_detached(self, nonce, plaintext, associated_data=b"") -> tuple[bytes, bytes]:
        """Encrypt ``plaintext``, returning ``(ciphertext, tag)``."""
        self._reject_associated_data(associated_data)
        plaintext = bytes(plaintext)
        mac_key, stream = self._keystream(nonce, len(plaintext))
        ciphertext = _xor(plaintext, stream)
        return ciphertext, Poly1305.generate_tag(mac_key, ciphertext)

    def decrypt_detached(self, nonce, ciphertext, tag, associated_data=b"") -> bytes:
        """Verify ``tag`` and return the plaintext; raise :class:`AeadError` on mismatch."""
        self._reject_associated_data(associated_data)
        ciphertext = bytes(ciphertext)
        tag = bytes(tag)
        if len(tag) != TAG_SIZE:
            raise ValueError(f"tag must be {TAG_SIZE} bytes, got {len(tag)}")
        mac_key, stream = self._keystream(nonce, len(ciphertext))
        expected = Poly1305.generate_tag(mac_key, ciphertext)
        if not hmac.compare_digest(expected, tag):
            raise AeadError("tag mismatch")
        return _xor(ciphertext, stream)

    def encrypt(self, nonce, plaintext, associated_data=b"") -> bytes:
        """Encrypt ``plaintext`` and return the tag followed by the ciphertext."""
        ciphertext, tag = self.encrypt_detached(nonce, plaintext, associated_data)
        return tag + ciphertext

    def decrypt(self, nonce, ciphertext, associated_data=b"") -> bytes:
        """Decrypt a ciphertext that carries its tag at the front."""
        data = bytes(ciphertext)
        if len(data) < TAG_SIZE:
            raise AeadError("ciphertext shorter than the tag")
        return self.decrypt_detached(nonce, data[TAG_SIZE:], data[:TAG_SIZE], associated_data)