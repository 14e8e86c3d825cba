# aeadmodes

Authenticated encryption with associated data (AEAD) in Python, plus the
building blocks behind it:

- **EAX** over AES (`aeadmodes.eax.Eax`), with tag sizes from 4 to 16 bytes.
- **Online EAX** for streaming data (`aeadmodes.online.EaxEncryptor`,
  `aeadmodes.online.EaxDecryptor`).
- **MGM**, the Multilinear Galois Mode, over any block cipher with a 64-bit
  or 128-bit block (`aeadmodes.mgm.Mgm`).
- **XSalsa20Poly1305**, the NaCl `crypto_secretbox` construction
  (`aeadmodes.xsalsa20poly1305.XSalsa20Poly1305`).
- The **Deoxys-BC** tweakable block cipher (`aeadmodes.deoxys_bc.DeoxysBC256`
  with a 16-byte key, `aeadmodes.deoxys_bc.DeoxysBC384` with a 32-byte key).
- Single AES round operations (`aeadmodes.aes_round`) and the GF(2^64) /
  GF(2^128) multiply-accumulate used by MGM (`aeadmodes.mgm_gf`).

Failed authentication, nonces MGM does not accept and over-long inputs raise
`aeadmodes.errors.AeadError`. Wrong key, nonce or tag lengths raise
`ValueError`.

## Installation

```
pip install aeadmodes
```

AES, CMAC and Poly1305 come from the `cryptography` library.

## Usage

The combined `encrypt` of `Eax` and `Mgm` returns the ciphertext with the tag
appended; `XSalsa20Poly1305` puts the tag in front, as NaCl does. `decrypt`
checks the tag and returns the plaintext. `encrypt_detached` returns
`(ciphertext, tag)` and `decrypt_detached` takes the tag separately.

### EAX

```python
import os

from aeadmodes.eax import Eax
from aeadmodes.errors import AeadError

key = os.urandom(16)           # 16, 24 or 32 bytes
nonce = os.urandom(16)         # one AES block, unique per message
cipher = Eax(key, 16)          # tag size 4..16 bytes

sealed = cipher.encrypt(nonce, b"plaintext message", b"header")
assert cipher.decrypt(nonce, sealed, b"header") == b"plaintext message"

try:
    cipher.decrypt(nonce, sealed, b"tampered header")
except AeadError:
    print("authentication failed")

ciphertext, tag = cipher.encrypt_detached(nonce, b"message", b"")
assert cipher.decrypt_detached(nonce, ciphertext, tag, b"") == b"message"
```

### Online EAX

```python
import os

from aeadmodes.online import EaxEncryptor, EaxDecryptor

key = os.urandom(32)
nonce = os.urandom(16)

enc = EaxEncryptor(key, nonce, 16)
enc.update_assoc(b"my associated data")
ct = enc.encrypt(b"plaintext") + enc.encrypt(b" message")
tag = enc.finish()

dec = EaxDecryptor(key, nonce, 16)
dec.update_assoc(b"my associated data")
pt = dec.decrypt_unauthenticated_hazmat(ct)
dec.finish(tag)                # raises AeadError if the data was altered
```

`tag_clone()` returns the tag over what has been processed so far without
ending the stream. After `finish`, any further call raises `RuntimeError`.
Data returned by `decrypt_unauthenticated_hazmat` must not be trusted until
`finish` has succeeded.

### XSalsa20Poly1305

```python
from aeadmodes.xsalsa20poly1305 import XSalsa20Poly1305

key = XSalsa20Poly1305.generate_key()
nonce = XSalsa20Poly1305.generate_nonce()
box = XSalsa20Poly1305(key)
sealed = box.encrypt(nonce, b"plaintext message", b"")
assert box.decrypt(nonce, sealed, b"") == b"plaintext message"
```

XSalsa20Poly1305 does not support associated data; passing any raises
`AeadError`.

### MGM

`Mgm` wraps any object that has a `block_size` in bytes (8 or 16) and an
`encrypt_block(block)` method. Nonce and tag are one block long, and the first
bit of the nonce must be zero.

```python
import os

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from aeadmodes.mgm import Mgm


class AesBlock:
    block_size = 16

    def __init__(self, key):
        self._encryptor = Cipher(algorithms.AES(key), modes.ECB()).encryptor()

    def encrypt_block(self, block):
        return self._encryptor.update(block)


cipher = Mgm(AesBlock(os.urandom(32)))
nonce = bytes([0x11]) + os.urandom(15)   # most significant bit clear
sealed = cipher.encrypt(nonce, b"plaintext message", b"header")
assert cipher.decrypt(nonce, sealed, b"header") == b"plaintext message"
```

### Deoxys-BC

```python
import os

from aeadmodes.deoxys_bc import DeoxysBC256

bc = DeoxysBC256(os.urandom(16))
tweak = bytes(16)
block = bc.encrypt_block(b"sixteen byte blk", tweak)
assert bc.decrypt_block(block, tweak) == b"sixteen byte blk"
```

## What the package does not do

The Deoxys-BC block cipher is provided on its own; the package has no
Deoxys-I or Deoxys-II AEAD mode built on it. There is no command-line tool,
and the package ships no AES or other block cipher for MGM: the caller
supplies one.

## Running the tests

```
pip install -e ".[test]"
pytest
```