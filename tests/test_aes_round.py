import pytest

from aeadmodes.aes_round import (
    cipher_round,
    equiv_inv_cipher_round,
    inv_mix_columns,
    mix_columns,
)

STATES = [
    bytes(16),
    bytes(range(16)),
    bytes(range(0xF0, 0x100)),
    bytes.fromhex("193de3bea0f4e22b9ac68d2ae9f84808"),
    b"\xff" * 16,
]


def _xor(a, b):
    return bytes(x ^ y for x, y in zip(a, b))


def test_mix_columns_known_columns():
    state = bytes.fromhex("db135345f20a225c01010101c6c6c6c6")
    assert mix_columns(state) == bytes.fromhex("8e4da1bc9fdc589d01010101c6c6c6c6")


def test_cipher_round_matches_standard_round_one():
    state = bytes.fromhex("193de3bea0f4e22b9ac68d2ae9f84808")
    key = bytes.fromhex("a0fafe1788542cb123a3392a762c7605")
    assert cipher_round(state, key) == bytes.fromhex("a49c7ff2689f352b6b5bea43026a5049")


def test_mix_columns_of_zero_is_zero():
    assert mix_columns(bytes(16)) == bytes(16)
    assert inv_mix_columns(bytes(16)) == bytes(16)


@pytest.mark.parametrize("state", STATES)
def test_inv_mix_columns_undoes_mix_columns(state):
    assert inv_mix_columns(mix_columns(state)) == state
    assert mix_columns(inv_mix_columns(state)) == state


@pytest.mark.parametrize("state", STATES)
@pytest.mark.parametrize("key", [bytes(16), bytes(range(16, 32))])
def test_equiv_inverse_round_inverts_cipher_round(state, key):
    encrypted = cipher_round(state, key)
    unmixed = inv_mix_columns(_xor(encrypted, key))
    assert mix_columns(equiv_inv_cipher_round(unmixed, bytes(16))) == state


@pytest.mark.parametrize("state", STATES)
def test_round_key_is_xored_last(state):
    key = bytes(range(100, 116))
    assert cipher_round(state, key) == _xor(cipher_round(state, bytes(16)), key)
    assert equiv_inv_cipher_round(state, key) == _xor(
        equiv_inv_cipher_round(state, bytes(16)), key
    )


def test_accepts_bytearray():
    state = bytearray(range(16))
    assert mix_columns(state) == mix_columns(bytes(state))


@pytest.mark.parametrize("bad", [b"", bytes(15), bytes(17)])
def test_wrong_lengths_raise(bad):
    with pytest.raises(ValueError):
        mix_columns(bad)
    with pytest.raises(ValueError):
        inv_mix_columns(bad)
    with pytest.raises(ValueError):
        cipher_round(bad, bytes(16))
    with pytest.raises(ValueError):
        cipher_round(bytes(16), bad)
    with pytest.raises(ValueError):
        equiv_inv_cipher_round(bad, bytes(16))
    with pytest.raises(ValueError):
        equiv_inv_cipher_round(bytes(16), bad)