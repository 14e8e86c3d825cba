"""The Deoxys-BC tweakable block ciphers (TWEAKEY sizes 256 and 384 bits)."""

from __future__ import annotations

from functools import reduce
from operator import xor
from typing import Callable, ClassVar

from .aes_round import cipher_round, equiv_inv_cipher_round, inv_mix_columns, mix_columns

BLOCK_SIZE = 16

H_PERM = (1, 6, 11, 12, 5, 10, 15, 0, 9, 14, 3, 4, 13, 2, 7, 8)

_RCON_VALUES = (
    0x2F, 0x5E, 0xBC, 0x63, 0xC6, 0x97, 0x35, 0x6A, 0xD4,
    0xB3, 0x7D, 0xFA, 0xEF, 0xC5, 0x91, 0x39, 0x72,
)

RCON = tuple(bytes((1, 2, 4, 8, v, v, v, v)) + bytes(8) for v in _RCON_VALUES)


def _xor(*blocks: bytes) -> bytes:
    return bytes(reduce(xor, column) for column in zip(*blocks))


def _h_substitution(tk: bytes) -> bytes:
    return bytes(tk[i] for i in H_PERM)


def _lfsr2(tk: bytes) -> bytes:
    return bytes(((b << 1) & 0xFE) | (((b >> 7) ^ (b >> 5)) & 0x01) for b in tk)


def _lfsr3(tk: bytes) -> bytes:
    return bytes(((b >> 1) & 0x7F) | (((b << 7) ^ (b << 1)) & 0x80) for b in tk)


def _as_block(data, name: str) -> bytes:
    block = bytes(data)
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"{name} must be {BLOCK_SIZE} bytes, got {len(block)}")
    return block


class DeoxysBC:
    """Deoxys-BC with precomputed key-dependent subkeys.

    Use :class:`DeoxysBC256` or :class:`DeoxysBC384`.
    """

    KEY_SIZE: ClassVar[int]
    SUBKEY_COUNT: ClassVar[int]
    # LFSR applied to each 16-byte key lane, in key order.
    _LANE_LFSRS: ClassVar[tuple[Callable[[bytes], bytes], ...]]

    def __init__(self, key) -> None:
        if type(self) is DeoxysBC:
            raise TypeError("instantiate DeoxysBC256 or DeoxysBC384")
        key = bytes(key)
        if len(key) != self.KEY_SIZE:
            raise ValueError(f"key must be {self.KEY_SIZE} bytes, got {len(key)}")
        lanes = [key[i : i + BLOCK_SIZE] for i in range(0, len(key), BLOCK_SIZE)]
        subkeys: list[bytes] = []
        for rcon in RCON[: self.SUBKEY_COUNT]:
            if subkeys:
                lanes = [lfsr(_h_substitution(tk)) for tk, lfsr in zip(lanes, self._LANE_LFSRS)]
            subkeys.append(_xor(rcon, *lanes))
        self._subkeys = tuple(subkeys)

    def key_schedule(self, tweak) -> list[bytes]:
        """Return the round subtweakeys for ``tweak``."""
        tweak = _as_block(tweak, "tweak")
        keys = [_xor(tweak, self._subkeys[0])]
        for subkey in self._subkeys[1:]:
            tweak = _h_substitution(tweak)
            keys.append(_xor(subkey, tweak))
        return keys

    def encrypt_block(self, block, tweak) -> bytes:
        """Encrypt one 16-byte block under ``tweak``."""
        state = _as_block(block, "block")
        keys = self.key_schedule(tweak)
        state = _xor(state, keys[0])
        for key in keys[1:]:
            state = cipher_round(state, key)
        return state

    def decrypt_block(self, block, tweak) -> bytes:
        """Decrypt one 16-byte block under ``tweak``."""
        state = _as_block(block, "block")
        keys = self.key_schedule(tweak)
        state = inv_mix_columns(_xor(state, keys[-1]))
        for key in reversed(keys[:-1]):
            state = equiv_inv_cipher_round(state, inv_mix_columns(key))
        return mix_columns(state)


class DeoxysBC256(DeoxysBC):
    """Deoxys-BC-256: 128-bit key, 128-bit tweak, 14 rounds."""

    KEY_SIZE = 16
    SUBKEY_COUNT = 15
    _LANE_LFSRS = (_lfsr2,)


class DeoxysBC384(DeoxysBC):
    """Deoxys-BC-384: 256-bit key, 128-bit tweak, 16 rounds."""

    KEY_SIZE = 32
    SUBKEY_COUNT = 17
    _LANE_LFSRS = (_lfsr3, _lfsr2)