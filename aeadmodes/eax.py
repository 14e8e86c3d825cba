"""EAX authenticated encryption over AES."""

from __future__ import annotations

import hmac

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.cmac import CMAC

from .errors import AeadError

BLOCK_SIZE = 16
NONCE_SIZE = BLOCK_SIZE
MIN_TAG_SIZE = 4
MAX_TAG_SIZE = 16
KEY_SIZES = (16, 24, 32)

A_MAX = 1 << 36
"""Maximum length of associated data."""

P_MAX = 1 << 36
"""Maximum length of plaintext."""

C_MAX = (1 << 36) + 16
"""Maximum length of ciphertext."""


def _xor(*blocks: bytes) -> bytes:
    out = bytearray(blocks[0])
    for block in blocks[1:]:
        for i, b in enumerate(block):
            out[i] ^= b
    return bytes(out)


class Eax:
    """EAX mode over AES with a configurable tag length of 4 to 16 bytes."""

    NONCE_SIZE = NONCE_SIZE

    def __init__(self, key, tag_size: int = MAX_TAG_SIZE) -> None:
        key = bytes(key)
        if len(key) not in KEY_SIZES:
            raise ValueError(f"key must be one of {KEY_SIZES} bytes, got {len(key)}")
        if isinstance(tag_size, bool) or not isinstance(tag_size, int):
            raise TypeError("tag_size must be an integer")
        if not MIN_TAG_SIZE <= tag_size <= MAX_TAG_SIZE:
            raise ValueError(
                f"tag_size must be between {MIN_TAG_SIZE} and {MAX_TAG_SIZE}, got {tag_size}"
            )
        self._key = key
        self.tag_size = tag_size

    def _omac(self, domain: int, data: bytes) -> bytes:
        """CMAC of ``data`` prefixed with ``domain`` encoded as a full block."""
        mac = CMAC(algorithms.AES(self._key))
        mac.update(bytes(BLOCK_SIZE - 1) + bytes([domain]))
        mac.update(data)
        return mac.finalize()

    def _ctr(self, counter: bytes, data: bytes) -> bytes:
        encryptor = Cipher(algorithms.AES(self._key), modes.CTR(counter)).encryptor()
        return encryptor.update(data) + encryptor.finalize()

    def _check_nonce(self, nonce) -> bytes:
        nonce = bytes(nonce)
        if len(nonce) != NONCE_SIZE:
            raise ValueError(f"nonce must be {NONCE_SIZE} bytes, got {len(nonce)}")
        return nonce

    def encrypt_detached(self, nonce, plaintext, associated_data=b"") -> tuple[bytes, bytes]:
        """Encrypt ``plaintext``, returning ``(ciphertext, tag)``."""
        nonce = self._check_nonce(nonce)
        plaintext = bytes(plaintext)
        associated_data = bytes(associated_data)
        if len(plaintext) > P_MAX or len(associated_data) > A_MAX:
            raise AeadError("input too long")

        n = self._omac(0, nonce)
        h = self._omac(1, associated_data)
        ciphertext = self._ctr(n, plaintext)
        c = self._omac(2, ciphertext)
        return ciphertext, _xor(n, h, c)[: self.tag_size]

    def decrypt_detached(self, nonce, ciphertext, tag, associated_data=b"") -> bytes:
        """Verify ``tag`` and return the plaintext; raise :class:`AeadError` on mismatch."""
        nonce = self._check_nonce(nonce)
        ciphertext = bytes(ciphertext)
        associated_data = bytes(associated_data)
        tag = bytes(tag)
        if len(tag) != self.tag_size:
            raise ValueError(f"tag must be {self.tag_size} bytes, got {len(tag)}")
        if len(ciphertext) > C_MAX or len(associated_data) > A_MAX:
            raise AeadError("input too long")

        n = self._omac(0, nonce)
        h = self._omac(1, associated_data)
        c = self._omac(2, ciphertext)
        expected = _xor(n, h, c)[: len(tag)]
        if not hmac.compare_digest(expected, tag):
            raise AeadError("tag mismatch")
        return self._ctr(n, ciphertext)

    def encrypt(self, nonce, plaintext, associated_data=b"") -> bytes:
        """Encrypt ``plaintext`` and return the ciphertext followed by the tag."""
        ciphertext, tag = self.encrypt_detached(nonce, plaintext, associated_data)
        return ciphertext + tag

    def decrypt(self, nonce, ciphertext, associated_data=b"") -> bytes:
        """Decrypt a ciphertext that carries its tag at the end."""
        data = bytes(ciphertext)
        if len(data) < self.tag_size:
            raise AeadError("ciphertext shorter than the tag")
        split = len(data) - self.tag_size
        return self.decrypt_detached(nonce, data[:split], data[split:], associated_data)