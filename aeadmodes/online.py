"""Online (streaming) EAX over AES.

Associated data and message chunks can be fed in any number of pieces. The
result must always be authenticated by calling ``finish``.
"""

from __future__ import annotations

import hmac

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.cmac import CMAC

from .eax import BLOCK_SIZE, KEY_SIZES, MAX_TAG_SIZE, MIN_TAG_SIZE, NONCE_SIZE
from .errors import AeadError


def _xor(*blocks: bytes) -> bytes:
    out = bytearray(blocks[0])
    for block in blocks[1:]:
        for i, b in enumerate(block):
            out[i] ^= b
    return bytes(out)


class _EaxStream:
    """State shared by the online encryptor and decryptor."""

    def _setup(self, key, nonce, tag_size: int) -> None:
        key = bytes(key)
        if len(key) not in KEY_SIZES:
            raise ValueError(f"key must be one of {KEY_SIZES} bytes, got {len(key)}")
        nonce = bytes(nonce)
        if len(nonce) != NONCE_SIZE:
            raise ValueError(f"nonce must be {NONCE_SIZE} bytes, got {len(nonce)}")
        if isinstance(tag_size, bool) or not isinstance(tag_size, int):
            raise TypeError("tag_size must be an integer")
        if not MIN_TAG_SIZE <= tag_size <= MAX_TAG_SIZE:
            raise ValueError(
                f"tag_size must be between {MIN_TAG_SIZE} and {MAX_TAG_SIZE}, got {tag_size}"
            )
        self.tag_size = tag_size

        def omac(domain: int) -> CMAC:
            mac = CMAC(algorithms.AES(key))
            mac.update(bytes(BLOCK_SIZE - 1) + bytes([domain]))
            return mac

        nonce_mac = omac(0)
        nonce_mac.update(nonce)
        self._nonce = nonce_mac.finalize()
        self._data = omac(1)
        self._message = omac(2)
        self._ctr = Cipher(algorithms.AES(key), modes.CTR(self._nonce)).encryptor()
        self._finished = False

    def _check_open(self) -> None:
        if self._finished:
            raise RuntimeError("stream already finished")

    def _update_assoc(self, data) -> None:
        self._check_open()
        self._data.update(bytes(data))

    def _full_tag(self, data_mac: CMAC, message_mac: CMAC) -> bytes:
        return _xor(self._nonce, data_mac.finalize(), message_mac.finalize())[: self.tag_size]

    def _tag_clone(self) -> bytes:
        self._check_open()
        return self._full_tag(self._data.copy(), self._message.copy())

    def _take_tag(self) -> bytes:
        self._check_open()
        self._finished = True
        return self._full_tag(self._data, self._message)


class EaxEncryptor(_EaxStream):
    """Streaming EAX encryption."""

    def __init__(self, key, nonce, tag_size: int = MAX_TAG_SIZE) -> None:
        self._setup(key, nonce, tag_size)

    def update_assoc(self, data) -> None:
        """Process a piece of the associated data."""
        self._update_assoc(data)

    def encrypt(self, msg) -> bytes:
        """Encrypt a chunk of plaintext and return the ciphertext chunk."""
        self._check_open()
        ciphertext = self._ctr.update(bytes(msg))
        self._message.update(ciphertext)
        return ciphertext

    def tag_clone(self) -> bytes:
        """Tag over everything processed so far, leaving the stream usable."""
        return self._tag_clone()

    def finish(self) -> bytes:
        """End the stream and return the tag."""
        return self._take_tag()


class EaxDecryptor(_EaxStream):
    """Streaming EAX decryption."""

    def __init__(self, key, nonce, tag_size: int = MAX_TAG_SIZE) -> None:
        self._setup(key, nonce, tag_size)

    def update_assoc(self, data) -> None:
        """Process a piece of the associated data."""
        self._update_assoc(data)

    def decrypt_unauthenticated_hazmat(self, msg) -> bytes:
        """Decrypt a chunk of ciphertext without verifying it.

        The output is not authentic until :meth:`finish` succeeds.
        """
        self._check_open()
        ciphertext = bytes(msg)
        self._message.update(ciphertext)
        return self._ctr.update(ciphertext)

    def tag_clone(self) -> bytes:
        """Tag over everything processed so far, leaving the stream usable."""
        return self._tag_clone()

    def finish(self, expected) -> None:
        """End the stream; raise :class:`AeadError` if ``expected`` does not match."""
        expected = bytes(expected)
        if len(expected) != self.tag_size:
            raise ValueError(f"tag must be {self.tag_size} bytes, got {len(expected)}")
        tag = self._take_tag()
        if not hmac.compare_digest(tag, expected):
            raise AeadError("tag mismatch")