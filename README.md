# gcmcipher

AES-GCM authenticated encryption (AEAD) as described in NIST SP 800-38D.
GHASH is written in Python, and nonce and tag sizes other than the
standard ones are supported.

## Installation

```
pip install .
```

The AES block cipher comes from the `cryptography` distribution. The counter
mode, the GHASH authentication and the tag handling are in this package.

## Quick start

```python
from gcmcipher.gcm import AeadError, Aes256Gcm, generate_key

key = generate_key(32)               # random 256-bit key
cipher = Aes256Gcm(key)
nonce = cipher.generate_nonce()      # 96 bits; never reuse with the same key

ciphertext = cipher.encrypt(nonce, b"plaintext message")
assert cipher.decrypt(nonce, ciphertext) == b"plaintext message"
```

`Aes128Gcm` works the same way with a 16-byte key. `generate_key` accepts 16,
24 or 32 and raises `ValueError` for any other size.

## Associated data

Associated data is authenticated but not encrypted. Give the same bytes when
decrypting. It is the third argument of `encrypt` and `decrypt` and defaults
to empty:

```python
header = b"message-id: 42"
ciphertext = cipher.encrypt(nonce, b"body", header)
plaintext = cipher.decrypt(nonce, ciphertext, header)
```

## Detached tags

When the tag is stored apart from the ciphertext, use the detached methods.
In these the associated data comes before the message:

```python
ciphertext, tag = cipher.encrypt_detached(nonce, header, b"body")
plaintext = cipher.decrypt_detached(nonce, header, ciphertext, tag)
```

`encrypt` returns the ciphertext with the tag appended, and `decrypt` splits
the tag off the end again.

## Failures

`AeadError` is raised when:

- authentication fails: wrong key, nonce, tag or associated data, or a
  modified ciphertext;
- plaintext or associated data is longer than 2^36 bytes, or a ciphertext is
  longer than 2^36 + 16 bytes;
- `decrypt` is given fewer bytes than the tag size.

No plaintext is returned when the tag does not match.

```python
try:
    cipher.decrypt(nonce, ciphertext[:-1] + b"\x00", header)
except AeadError:
    print("message rejected")
```

A nonce of the wrong length raises `ValueError`. So does a tag of the wrong
length given to `decrypt_detached`, and a key of an unsupported size given
to any constructor.

## Other key, nonce and tag sizes

`AesGcm(key, nonce_size=12, tag_size=16)` takes a 16, 24 or 32-byte key, so
AES-192 is available through it as well. Nonce and tag sizes are given in
bytes. A 12-byte nonce is used directly. Any other size is first run through
GHASH, as the standard prescribes. Tag sizes from 12 to 16 bytes are
accepted, and the tag is the leading bytes of the full 16-byte tag.

```python
from gcmcipher.gcm import AesGcm, generate_key

cipher = AesGcm(generate_key(16), 16, 12)   # 128-bit nonce, 96-bit tag
print(cipher.key_size, cipher.nonce_size, cipher.tag_size)
```

Keep to the defaults of `Aes128Gcm` and `Aes256Gcm` (96-bit nonce, 128-bit
tag) unless a protocol requires something else.

The module also defines the limits `A_MAX`, `P_MAX` and `C_MAX`.

## GHASH

The universal hash used for authentication can be used on its own as
`gcmcipher.ghash.GHash`:

- create it from a 16-byte hash key;
- feed it with `update`, which takes an iterable of whole 16-byte blocks, or
  with `update_padded`, which takes any bytes and zero-pads them to a block
  boundary;
- read the 16-byte result with `finalize`.

`copy` returns an independent hasher in the same state. A block that is not
16 bytes long raises `ValueError`.

## What it does not do

This is a library only. It has no command-line tool and does not read or
write files. It does not stream: each message is handled in memory as a
whole. It does not aim at speed either; GHASH runs in Python.

## Running the tests

```
pip install ".[test]"
pytest
```