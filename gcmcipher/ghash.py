"""GHASH universal hash over GF(2^128), as used by Galois/Counter Mode."""

from __future__ import annotations

from collections.abc import Iterable

BLOCK_SIZE = 16

# Reduction constant for x^128 + x^7 + x^2 + x + 1 in GCM's reflected bit order.
_R = 0xE1 << 120


def _as_block(block: bytes) -> int:
    data = bytes(block)
    if len(data) != BLOCK_SIZE:
        raise ValueError(f"GHASH blocks must be {BLOCK_SIZE} bytes, got {len(data)}")
    return int.from_bytes(data, "big")


def _powers_of(h: int) -> tuple[int, ...]:
    """Return H multiplied by each successive power of x, most significant bit first."""
    table = []
    v = h
    for _ in range(128):
        table.append(v)
        v = (v >> 1) ^ _R if v & 1 else v >> 1
    return tuple(table)


class GHash:
    """Incremental GHASH keyed by a 16-byte hash subkey H."""

    __slots__ = ("_table", "_state")

    def __init__(self, key: bytes) -> None:
        self._table = _powers_of(_as_block(key))
        self._state = 0

    def _multiply(self, x: int) -> int:
        result = 0
        for shift, term in enumerate(self._table):
            if (x >> (127 - shift)) & 1:
                result ^= term
        return result

    def update(self, blocks: Iterable[bytes]) -> None:
        """Absorb whole 16-byte blocks."""
        for block in blocks:
            self._state = self._multiply(self._state ^ _as_block(block))

    def update_padded(self, data: bytes) -> None:
        """Absorb arbitrary bytes, zero-padding the final partial block."""
        data = bytes(data)
        self.update(
            data[start:start + BLOCK_SIZE].ljust(BLOCK_SIZE, b"\x00")
            for start in range(0, len(data), BLOCK_SIZE)
        )

    def finalize(self) -> bytes:
        """Return the current 16-byte hash value."""
        return self._state.to_bytes(BLOCK_SIZE, "big")

    def copy(self) -> "GHash":
        """Return an independent copy carrying the same key and state."""
        clone = GHash.__new__(GHash)
        clone._table = self._table
        clone._state = self._state
        return clone