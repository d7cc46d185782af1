"""AES-GCM authenticated encryption (gcm) and the GHASH universal hash (ghash)."""

__version__ = "0.1.0"