from __future__ import annotations

from .chunkemit import ChunkList
from .constants import Variant


def combine(variant: Variant, chunks: ChunkList, tail_digest: bytes, tail_len: int) -> bytes:
    """Fold the chunk digests of a finished input into its final digest.

    Args:
        variant: Flavor deciding the terminal rule.
        chunks: Digests of every complete chunk, in order.
        tail_digest: Digest of the trailing chunk (the empty digest when
            ``tail_len`` is 0).
        tail_len: Length of the trailing chunk, below the chunk size.

    Returns:
        16 bytes for RED and BLUE, 32 bytes (Red then Blue) for REDBLUE.
    """
    if variant is Variant.REDBLUE:
        red, blue = combine_red_blue(chunks, tail_digest, tail_len)
        return red + blue
    if variant is Variant.RED:
        return _combine_red(chunks, tail_digest)
    if variant is Variant.BLUE:
        return _combine_blue(chunks, tail_digest, tail_len)
    raise TypeError(f"not a Variant: {variant!r}")


def combine_red_blue(chunks: ChunkList, tail_digest: bytes, tail_len: int) -> tuple[bytes, bytes]:
    """Red and Blue digests from one shared chunk list.

    Both flavors only differ once the input ends on a chunk boundary, and
    then only in whether the empty-chunk digest is folded in.
    """
    red = _combine_red(chunks, tail_digest)
    if chunks.count == 0 or tail_len != 0:
        return red, red
    return red, _combine_blue(chunks, tail_digest, tail_len)


def _combine_red(chunks: ChunkList, tail_digest: bytes) -> bytes:
    # under one chunk: |##> |
    if chunks.count == 0:
        return tail_digest
    # |####|..|##> | or |####|..|> | ; the trailing (maybe empty) chunk always counts
    return chunks.list_digest(tail_digest)


def _combine_blue(chunks: ChunkList, tail_digest: bytes, tail_len: int) -> bytes:
    if chunks.count == 0:
        return tail_digest
    if tail_len != 0:
        return chunks.list_digest(tail_digest)
    # ends on a boundary: |####|..|> |
    if chunks.count == 1:
        return chunks.first
    return chunks.list_digest()
