"""AES in Galois/Counter Mode with configurable nonce and tag sizes."""

from __future__ import annotations

import hmac
import os

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .ghash import BLOCK_SIZE, GHash

A_MAX = 1 << 36
"""Maximum length of associated data."""

P_MAX = 1 << 36
"""Maximum length of plaintext."""

C_MAX = (1 << 36) + 16
"""Maximum length of ciphertext."""

KEY_SIZES = (16, 24, 32)
TAG_SIZES = (12, 13, 14, 15, 16)


class AeadError(Exception):
    """Raised when authentication fails or an input exceeds the allowed size."""


def generate_key(key_size: int) -> bytes:
    """Return a random AES key of the given size in bytes."""
    if key_size not in KEY_SIZES:
        raise ValueError(f"AES key size must be one of {KEY_SIZES}, got {key_size}")
    return os.urandom(key_size)


def _xor(data: bytes, keystream: bytes) -> bytes:
    if not data:
        return b""
    n = len(data)
    value = int.from_bytes(data, "big") ^ int.from_bytes(keystream[:n], "big")
    return value.to_bytes(n, "big")


class AesGcm:
    """AES-GCM over a 128, 192 or 256-bit key."""

    def __init__(self, key: bytes, nonce_size: int = 12, tag_size: int = 16) -> None:
        key = bytes(key)
        if len(key) not in KEY_SIZES:
            raise ValueError(f"AES key size must be one of {KEY_SIZES}, got {len(key)}")
        if nonce_size < 0:
            raise ValueError("nonce size must not be negative")
        if tag_size not in TAG_SIZES:
            raise ValueError(f"tag size must be one of {TAG_SIZES}, got {tag_size}")
        self._nonce_size = nonce_size
        self._tag_size = tag_size
        self._key_size = len(key)
        self._ecb = Cipher(algorithms.AES(key), modes.ECB()).encryptor()
        self._ghash = GHash(self._ecb.update(bytes(BLOCK_SIZE)))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(key_size={self._key_size}, "
            f"nonce_size={self._nonce_size}, tag_size={self._tag_size})"
        )

    @property
    def key_size(self) -> int:
        return self._key_size

    @property
    def nonce_size(self) -> int:
        return self._nonce_size

    @property
    def tag_size(self) -> int:
        return self._tag_size

    def generate_nonce(self) -> bytes:
        """Return a random nonce of this cipher's nonce size."""
        return os.urandom(self._nonce_size)

    def _check_nonce(self, nonce: bytes) -> bytes:
        nonce = bytes(nonce)
        if len(nonce) != self._nonce_size:
            raise ValueError(
                f"nonce must be {self._nonce_size} bytes, got {len(nonce)}"
            )
        return nonce

    def _init_ctr(self, nonce: bytes) -> tuple[bytes, bytes]:
        """Derive the pre-counter block J0 and the tag mask E(K, J0)."""
        if self._nonce_size == 12:
            j0 = nonce + b"\x00\x00\x00\x01"
        else:
            ghash = self._ghash.copy()
            ghash.update_padded(nonce)
            ghash.update([bytes(8) + (self._nonce_size * 8).to_bytes(8, "big")])
            j0 = ghash.finalize()
        return j0, self._ecb.update(j0)

    def _apply_keystream(self, j0: bytes, data: bytes) -> bytes:
        """Counter mode with a 32-bit big-endian counter, starting after J0."""
        if not data:
            return b""
        prefix = j0[:12]
        start = int.from_bytes(j0[12:], "big")
        count = -(-len(data) // BLOCK_SIZE)
        counters = b"".join(
            prefix + ((start + i) & 0xFFFFFFFF).to_bytes(4, "big")
            for i in range(1, count + 1)
        )
        return _xor(data, self._ecb.update(counters))

    def _compute_tag(self, mask: bytes, associated_data: bytes, buffer: bytes) -> bytes:
        ghash = self._ghash.copy()
        ghash.update_padded(associated_data)
        ghash.update_padded(buffer)
        lengths = (len(associated_data) * 8).to_bytes(8, "big") + (
            len(buffer) * 8
        ).to_bytes(8, "big")
        ghash.update([lengths])
        return _xor(ghash.finalize(), mask)

    def encrypt_detached(
        self, nonce: bytes, associated_data: bytes, plaintext: bytes
    ) -> tuple[bytes, bytes]:
        """Encrypt and return (ciphertext, tag)."""
        nonce = self._check_nonce(nonce)
        associated_data = bytes(associated_data)
        plaintext = bytes(plaintext)
        if len(plaintext) > P_MAX or len(associated_data) > A_MAX:
            raise AeadError("input too long")
        j0, mask = self._init_ctr(nonce)
        ciphertext = self._apply_keystream(j0, plaintext)
        tag = self._compute_tag(mask, associated_data, ciphertext)
        return ciphertext, tag[: self._tag_size]

    def decrypt_detached(
        self, nonce: bytes, associated_data: bytes, ciphertext: bytes, tag: bytes
    ) -> bytes:
        """Verify the tag and return the plaintext, or raise AeadError."""
        nonce = self._check_nonce(nonce)
        associated_data = bytes(associated_data)
        ciphertext = bytes(ciphertext)
        tag = bytes(tag)
        if len(tag) != self._tag_size:
            raise ValueError(f"tag must be {self._tag_size} bytes, got {len(tag)}")
        if len(ciphertext) > C_MAX or len(associated_data) > A_MAX:
            raise AeadError("input too long")
        j0, mask = self._init_ctr(nonce)
        expected = self._compute_tag(mask, associated_data, ciphertext)
        if not hmac.compare_digest(expected[: self._tag_size], tag):
            raise AeadError("authentication failed")
        return self._apply_keystream(j0, ciphertext)

    def encrypt(
        self, nonce: bytes, plaintext: bytes, associated_data: bytes = b""
    ) -> bytes:
        """Encrypt and return the ciphertext with the tag appended."""
        ciphertext, tag = self.encrypt_detached(nonce, associated_data, plaintext)
        return ciphertext + tag

    def decrypt(
        self, nonce: bytes, ciphertext: bytes, associated_data: bytes = b""
    ) -> bytes:
        """Decrypt a ciphertext with an appended tag."""
        ciphertext = bytes(ciphertext)
        if len(ciphertext) < self._tag_size:
            raise AeadError("ciphertext shorter than the tag")
        split = len(ciphertext) - self._tag_size
        return self.decrypt_detached(
            nonce, associated_data, ciphertext[:split], ciphertext[split:]
        )


class Aes128Gcm(AesGcm):
    """AES-GCM with a 128-bit key and 96-bit nonce."""

    def __init__(self, key: bytes) -> None:
        key = bytes(key)
        if len(key) != 16:
            raise ValueError(f"Aes128Gcm needs a 16-byte key, got {len(key)}")
        super().__init__(key, 12, 16)


class Aes256Gcm(AesGcm):
    """AES-GCM with a 256-bit key and 96-bit nonce."""

    def __init__(self, key: bytes) -> None:
        key = bytes(key)
        if len(key) != 32:
            raise ValueError(f"Aes256Gcm needs a 32-byte key, got {len(key)}")
        super().__init__(key, 12, 16)