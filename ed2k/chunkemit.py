from __future__ import annotations

from typing import Optional

from .constants import CHUNK_SIZE, DIGEST_SIZE
from .hashutil import EMPTY_CHUNK_DIGEST, md4_new


class ChunkList:
    """Append-only sequence of 16-byte chunk digests.

    The concatenation is never materialized: digests are folded into a
    running MD4 as they arrive, so memory stays constant regardless of the
    input length. The first digest is kept aside for the single-chunk rule.
    """

    def __init__(self) -> None:
        self._hasher = md4_new()
        self.first: Optional[bytes] = None
        self.count = 0

    def add(self, digest16: bytes) -> None:
        if len(digest16) != DIGEST_SIZE:
            raise ValueError(f"chunk digest must be {DIGEST_SIZE} bytes, got {len(digest16)}")
        if self.count == 0:
            self.first = bytes(digest16)
        self.count += 1
        self._hasher.update(digest16)

    def list_digest(self, extra: Optional[bytes] = None) -> bytes:
        """Hash of all digests (plus ``extra`` when given) without mutating the list."""
        h = self._hasher.copy()
        if extra is not None:
            h.update(extra)
        return h.digest()

    def copy(self) -> "ChunkList":
        other = ChunkList.__new__(ChunkList)
        other._hasher = self._hasher.copy()
        other.first = self.first
        other.count = self.count
        return other


class ChunkAccumulator:
    """Turns arbitrarily split updates into fixed-size chunk digests.

    Incoming bytes stream straight into the MD4 of the chunk being filled,
    so nothing larger than the caller's own buffer is ever held. Each time
    the chunk reaches ``chunk_size`` its digest is appended to ``chunks``
    and a fresh MD4 is started.
    """

    def __init__(self, *, chunk_size: int = CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.chunk_size = chunk_size
        self.chunks = ChunkList()
        self.chunk_len = 0
        self.total_len = 0
        self._hasher = md4_new()

    def update(self, data) -> None:
        m = memoryview(data)
        if m.ndim != 1 or m.itemsize != 1:
            m = m.cast("B")
        pos = 0
        size = len(m)
        while pos < size:
            take = min(size - pos, self.chunk_size - self.chunk_len)
            self._hasher.update(m[pos : pos + take])
            self.chunk_len += take
            self.total_len += take
            pos += take
            if self.chunk_len == self.chunk_size:
                self._emit()

    def _emit(self) -> None:
        digest16 = self._hasher.digest()
        self._hasher = md4_new()
        self.chunk_len = 0
        self.chunks.add(digest16)

    def finish(self) -> tuple[bytes, int]:
        """Return ``(tail_digest, tail_len)`` for the chunk being filled.

        ``tail_len`` is in ``[0, chunk_size)``; with ``tail_len == 0`` the
        digest is that of the empty chunk. Whether that empty digest is used
        is up to the combiner. The accumulator itself is left untouched.
        """
        if self.chunk_len == 0:
            return EMPTY_CHUNK_DIGEST, 0
        return self._hasher.digest(), self.chunk_len

    def copy(self) -> "ChunkAccumulator":
        other = ChunkAccumulator.__new__(ChunkAccumulator)
        other.chunk_size = self.chunk_size
        other.chunks = self.chunks.copy()
        other.chunk_len = self.chunk_len
        other.total_len = self.total_len
        other._hasher = self._hasher.copy()
        return other
