from __future__ import annotations

import enum


# Chunk geometry
CHUNK_SIZE = 9_728_000  # 9500 KiB
DIGEST_SIZE = 16        # MD4 output

# File streaming; any value works, the digest never depends on it
READ_SIZE = 1_048_576   # 1 MiB

LINK_PREFIX = "ed2k://|file|"


class Variant(enum.Enum):
    """ED2K flavor, fixed for the lifetime of a hashing session.

    RED appends the digest of an empty chunk when the input ends exactly on
    a chunk boundary, BLUE does not. REDBLUE yields both, Red first.
    """

    RED = "red"
    BLUE = "blue"
    REDBLUE = "redblue"

    @property
    def digest_size(self) -> int:
        if self is Variant.REDBLUE:
            return 2 * DIGEST_SIZE
        return DIGEST_SIZE

    @property
    def hash_name(self) -> str:
        return "ed2k-" + self.value


DEFAULT_VARIANT = Variant.BLUE
