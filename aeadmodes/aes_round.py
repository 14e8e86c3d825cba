"""Single AES round operations on 16-byte states in column-major order."""

from __future__ import annotations

from functools import reduce
from operator import xor

BLOCK_SIZE = 16


def _gmul(a: int, b: int) -> int:
    """Multiply two elements of GF(2^8) modulo x^8 + x^4 + x^3 + x + 1."""
    result = 0
    while b:
        if b & 1:
            result ^= a
        a <<= 1
        if a & 0x100:
            a ^= 0x11B
        b >>= 1
    return result


def _ginv(a: int) -> int:
    """Multiplicative inverse in GF(2^8); zero maps to zero."""
    result, base, exponent = 1, a, 254
    while exponent:
        if exponent & 1:
            result = _gmul(result, base)
        base = _gmul(base, base)
        exponent >>= 1
    return result if a else 0


def _rotl8(value: int, shift: int) -> int:
    return ((value << shift) | (value >> (8 - shift))) & 0xFF


def _build_sboxes() -> tuple[bytes, bytes]:
    forward = bytearray(256)
    inverse = bytearray(256)
    for x in range(256):
        b = _ginv(x)
        s = b ^ _rotl8(b, 1) ^ _rotl8(b, 2) ^ _rotl8(b, 3) ^ _rotl8(b, 4) ^ 0x63
        forward[x] = s
        inverse[s] = x
    return bytes(forward), bytes(inverse)


_SBOX, _INV_SBOX = _build_sboxes()

_MUL = {n: bytes(_gmul(x, n) for x in range(256)) for n in (1, 2, 3, 9, 11, 13, 14)}
_MIX_ROW = tuple(_MUL[n] for n in (2, 3, 1, 1))
_INV_MIX_ROW = tuple(_MUL[n] for n in (14, 11, 13, 9))

_SHIFT_ROWS = tuple(r + 4 * ((c + r) % 4) for c in range(4) for r in range(4))
_INV_SHIFT_ROWS = tuple(r + 4 * ((c - r) % 4) for c in range(4) for r in range(4))


def _as_block(data, name: str) -> bytes:
    block = bytes(data)
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"{name} must be {BLOCK_SIZE} bytes, got {len(block)}")
    return block


def _xor(a: bytes, b: bytes) -> bytes:
    return bytes(x ^ y for x, y in zip(a, b))


def _permute(state: bytes, order: tuple[int, ...]) -> bytes:
    return bytes(state[i] for i in order)


def _mix(state: bytes, row: tuple[bytes, ...]) -> bytes:
    out = bytearray()
    for column in (state[i : i + 4] for i in range(0, BLOCK_SIZE, 4)):
        for r in range(4):
            out.append(reduce(xor, (row[(k - r) % 4][byte] for k, byte in enumerate(column))))
    return bytes(out)


def mix_columns(block) -> bytes:
    """Apply the AES MixColumns transformation."""
    return _mix(_as_block(block, "block"), _MIX_ROW)


def inv_mix_columns(block) -> bytes:
    """Apply the AES InvMixColumns transformation."""
    return _mix(_as_block(block, "block"), _INV_MIX_ROW)


def cipher_round(block, round_key) -> bytes:
    """One AES encryption round: SubBytes, ShiftRows, MixColumns, AddRoundKey."""
    state = _as_block(block, "block")
    key = _as_block(round_key, "round_key")
    state = _permute(state.translate(_SBOX), _SHIFT_ROWS)
    return _xor(_mix(state, _MIX_ROW), key)


def equiv_inv_cipher_round(block, round_key) -> bytes:
    """One round of the AES equivalent inverse cipher.

    InvSubBytes, InvShiftRows, InvMixColumns, then AddRoundKey.
    """
    state = _as_block(block, "block")
    key = _as_block(round_key, "round_key")
    state = _permute(state.translate(_INV_SBOX), _INV_SHIFT_ROWS)
    return _xor(_mix(state, _INV_MIX_ROW), key)