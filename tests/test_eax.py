import pytest

from aeadmodes.eax import Eax
from aeadmodes.errors import AeadError

# (key, nonce, header, plaintext, ciphertext || tag), AES-128 EAX vectors.
VECTORS = [
    (
        "233952DEE4D5ED5F9B9C6D6FF80FF478",
        "62EC67F9C3A4A407FCB2A8C49031A8B3",
        "6BFB914FD07EAE6B",
        "",
        "E037830E8389F27B025A2D6527E79D01",
    ),
    (
        "91945D3F4DCBEE0BF45EF52255F095A4",
        "BECAF043B0A23D843194BA972C66DEBD",
        "FA3BFD4806EB53FA",
        "F7FB",
        "19DD5C4C9331049D0BDAB0277408F67967E5",
    ),
    (
        "01F74AD64077F2E704C0F60ADA3DD523",
        "70C3DB4F0D26368400A10ED05D2BFF5E",
        "234A3463C1264AC6",
        "1A47CB4933",
        "D851D5BAE03A59F238A23E39199DC9266626C40F80",
    ),
    (
        "D07CF6CBB7F313BDDE66B727AFD3C5E8",
        "8408DFFF3C1A2B1292DC199E46B7D617",
        "33CCE2EABFF5A79D",
        "481C9E39B1",
        "632A9D131AD4C168A4225D8E1FF755939974A7BEDE",
    ),
    (
        "35B6D0580005BBC12B0587124557D2C2",
        "FDB6B06676EEDC5C61D74276E1F8E816",
        "AEB96EAEBE2970E9",
        "40D0C07DA5E4",
        "071DFE16C675CB0677E536F73AFE6A14B74EE49844DD",
    ),
    (
        "BD8E6E11475E60B268784C38C62FEB22",
        "6EAC5C93072D8E8513F750935E46DA1B",
        "D4482D1CA78DCE0F",
        "4DE3B35C3FC039245BD1FB7D",
        "835BB4F15D743E350E728414ABB8644FD6CCB86947C5E10590210A4F",
    ),
    (
        "7C77D6E813BED5AC98BAA417477A2E7D",
        "1A8C98DCD73D38393B2BF1569DEEFC19",
        "65D2017990D62528",
        "8B0A79306C9CE7ED99DAE4F87F8DD61636",
        "02083E3979DA014812F59F11D52630DA30137327D10649B0AA6E1C181DB617D7F2",
    ),
    (
        "5FFF20CAFAB119CA2FC73549E20F5B0D",
        "DDE59B97D722156D4D9AFF2BC7559826",
        "54B9F04E6A09189A",
        "1BDA122BCE8A8DBAF1877D962B8592DD2D56",
        "2EC47B2C4954A489AFC7BA4897EDCDAE8CC33B60450599BD02C96382902AEF7F832A",
    ),
    (
        "A4A4782BCFFD3EC5E7EF6D8C34A56123",
        "B781FCF2F75FA5A8DE97A9CA48E522EC",
        "899A175897561D7E",
        "6CF36720872B8513F6EAB1A8A44438D5EF11",
        "0DE18FD0FDD91E7AF19F1D8EE8733938B1E8E7F6D2231618102FDB7FE55FF1991700",
    ),
    (
        "8395FCF1E95BEBD697BD010BC766AAC3",
        "22E7ADD93CFC6393C57EC0B3C17D6B44",
        "126735FCC320D25A",
        "CA40D7446E545FFAED3BD12A740A659FFBBB3CEAB7",
        "CB8920F87A6C75CFF39627B56E3ED197C552D295A7CFC46AFC253B4652B1AF3795B124AB6E",
    ),
]

PARAMS = [tuple(bytes.fromhex(field) for field in vector) for vector in VECTORS]


@pytest.mark.parametrize("key,nonce,aad,plaintext,ciphertext", PARAMS)
def test_encrypt(key, nonce, aad, plaintext, ciphertext):
    assert Eax(key).encrypt(nonce, plaintext, aad) == ciphertext


@pytest.mark.parametrize("key,nonce,aad,plaintext,ciphertext", PARAMS)
def test_decrypt(key, nonce, aad, plaintext, ciphertext):
    assert Eax(key).decrypt(nonce, ciphertext, aad) == plaintext


def test_decrypt_modified():
    key, nonce, aad, _, ciphertext = PARAMS[0]
    tampered = bytes([ciphertext[0] ^ 0xAA]) + ciphertext[1:]
    with pytest.raises(AeadError):
        Eax(key).decrypt(nonce, tampered, aad)


def test_decrypt_wrong_associated_data():
    key, nonce, _, _, ciphertext = PARAMS[2]
    with pytest.raises(AeadError):
        Eax(key).decrypt(nonce, ciphertext, b"tampered")


@pytest.mark.parametrize("key,nonce,aad,plaintext,ciphertext", PARAMS)
def test_detached_matches_combined(key, nonce, aad, plaintext, ciphertext):
    body, tag = Eax(key).encrypt_detached(nonce, plaintext, aad)
    assert body == ciphertext[: len(plaintext)]
    assert tag == ciphertext[len(plaintext):]


def test_short_tag_is_prefix_of_full_tag():
    key, nonce, aad, plaintext, ciphertext = PARAMS[4]
    cipher = Eax(key, tag_size=8)
    body, tag = cipher.encrypt_detached(nonce, plaintext, aad)
    assert len(tag) == 8
    assert tag == ciphertext[len(plaintext): len(plaintext) + 8]
    assert cipher.decrypt_detached(nonce, body, tag, aad) == plaintext


def test_short_tag_round_trip_combined():
    key, nonce, aad, plaintext, _ = PARAMS[6]
    cipher = Eax(key, tag_size=4)
    sealed = cipher.encrypt(nonce, plaintext, aad)
    assert len(sealed) == len(plaintext) + 4
    assert cipher.decrypt(nonce, sealed, aad) == plaintext


@pytest.mark.parametrize("tag_size", [0, 3, 17])
def test_invalid_tag_size(tag_size):
    with pytest.raises(ValueError):
        Eax(bytes(16), tag_size=tag_size)


def test_invalid_key_size():
    with pytest.raises(ValueError):
        Eax(bytes(15))


def test_invalid_nonce_size():
    with pytest.raises(ValueError):
        Eax(bytes(16)).encrypt(bytes(12), b"data")


def test_aes256_round_trip():
    key = b"an example very very secret key."
    nonce = b"my unique nonces"
    cipher = Eax(key)
    sealed = cipher.encrypt(nonce, b"plaintext message", b"header")
    assert sealed[:17] != b"plaintext message"
    assert cipher.decrypt(nonce, sealed, b"header") == b"plaintext message"


def test_decrypt_too_short():
    with pytest.raises(AeadError):
        Eax(bytes(16)).decrypt(bytes(16), bytes(10))


def test_wrong_tag_length_detached():
    with pytest.raises(ValueError):
        Eax(bytes(16)).decrypt_detached(bytes(16), b"", bytes(8))