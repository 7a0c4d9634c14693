"""
ed2k: ED2K (eDonkey2000) file hashes.

Features:

- Streaming hash sessions for the Red (original) and Blue (fixed) flavors,
  which only disagree on inputs whose size is a positive multiple of the
  9728000-byte chunk size.
- RedBlue: both digests, Red first, from a single pass over the data.
- File helpers and ed2k:// link formatting, plus the ``ed2k`` CLI.

MD4 is provided by PyCryptodomex.
"""

from .constants import CHUNK_SIZE, DIGEST_SIZE, Variant
from .errors import Ed2kError, HashFinalizedError, UnknownVariantError
from .hasher import Ed2k, Ed2kBlue, Ed2kHasher, Ed2kRed, Ed2kRedBlue, new

__version__ = "0.1"

__all__ = [
    "CHUNK_SIZE",
    "DIGEST_SIZE",
    "Variant",
    "Ed2k",
    "Ed2kRed",
    "Ed2kBlue",
    "Ed2kRedBlue",
    "Ed2kHasher",
    "new",
    "Ed2kError",
    "HashFinalizedError",
    "UnknownVariantError",
]
