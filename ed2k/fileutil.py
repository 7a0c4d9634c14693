from __future__ import annotations

import os
from typing import BinaryIO, Tuple, Union

from .constants import DIGEST_SIZE, LINK_PREFIX, READ_SIZE, Variant
from .hasher import new


def hash_file(
    fh: BinaryIO,
    variant: Union[str, Variant] = Variant.BLUE,
    *,
    read_size: int = READ_SIZE,
) -> Tuple[int, bytes]:
    """Hash a binary stream until EOF.

    Returns:
        ``(size, digest)`` where size is the number of bytes read.
    """
    h = new(variant)
    while True:
        raw = fh.read(read_size)
        if not raw:
            break
        h.update(raw)
    size = h.total_len
    return size, h.finalize()


def hash_path(path: str, variant: Union[str, Variant] = Variant.BLUE, *, read_size: int = READ_SIZE) -> Tuple[int, bytes]:
    with open(path, "rb") as rf:
        return hash_file(rf, variant, read_size=read_size)


def ed2k_link(name: str, size: int, digest16: bytes) -> str:
    """Format an ``ed2k://|file|<name>|<size>|<hash>|/`` link.

    Only the base name is used. Names containing ``|`` cannot be encoded.
    """
    if len(digest16) != DIGEST_SIZE:
        raise ValueError(f"ed2k links carry a {DIGEST_SIZE}-byte hash, got {len(digest16)} bytes")
    base = os.path.basename(name)
    if not base:
        raise ValueError("ed2k link needs a file name")
    if "|" in base:
        raise ValueError(f"file name may not contain '|': {base!r}")
    if size < 0:
        raise ValueError("size must be non-negative")
    return f"{LINK_PREFIX}{base}|{size}|{digest16.hex()}|/"
