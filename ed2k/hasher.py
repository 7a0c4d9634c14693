from __future__ import annotations

from typing import Optional, Union

from .chunkemit import ChunkAccumulator
from .combine import combine
from .constants import DEFAULT_VARIANT, Variant
from .errors import HashFinalizedError, UnknownVariantError


class Ed2kHasher:
    """Streaming ED2K hash session.

    The flavor is fixed at construction. Input may be split across any
    number of ``update`` calls; the digest only depends on the bytes. The
    raw input is hashed exactly once even for REDBLUE, which derives both
    results from the same chunk digests.

    A session is finalized exactly once. ``update``, ``finalize`` and
    ``copy`` on a finalized session raise :class:`HashFinalizedError`;
    ``reset`` (or ``finalize_reset``) makes it usable again.
    """

    def __init__(self, variant: Optional[Variant] = None, data: bytes = b"") -> None:
        if variant is None:
            variant = DEFAULT_VARIANT
        elif not isinstance(variant, Variant):
            raise TypeError(f"variant must be a Variant, not {type(variant).__name__}")
        self._variant = variant
        self._acc = ChunkAccumulator()
        self._finalized = False
        self.update(data)

    @property
    def variant(self) -> Variant:
        return self._variant

    @property
    def name(self) -> str:
        return self.variant.hash_name

    @property
    def digest_size(self) -> int:
        return self.variant.digest_size

    @property
    def chunk_size(self) -> int:
        return self._acc.chunk_size

    @property
    def total_len(self) -> int:
        return self._acc.total_len

    @property
    def finalized(self) -> bool:
        return self._finalized

    def _check_open(self, op: str) -> None:
        if self._finalized:
            raise HashFinalizedError(f"{self.name}: cannot {op} a finalized hash; call reset() first")

    def update(self, data) -> None:
        self._check_open("update")
        self._acc.update(data)

    def finalize(self) -> bytes:
        self._check_open("finalize")
        self._finalized = True
        tail_digest, tail_len = self._acc.finish()
        return combine(self.variant, self._acc.chunks, tail_digest, tail_len)

    def hexfinalize(self) -> str:
        return self.finalize().hex()

    def finalize_reset(self) -> bytes:
        out = self.finalize()
        self.reset()
        return out

    def reset(self) -> None:
        self._acc = ChunkAccumulator()
        self._finalized = False

    def copy(self) -> "Ed2kHasher":
        self._check_open("copy")
        other = self.__class__.__new__(self.__class__)
        other._variant = self._variant
        other._acc = self._acc.copy()
        other._finalized = False
        return other

    @classmethod
    def digest(cls, data: bytes, variant: Optional[Variant] = None) -> bytes:
        """One-shot: new session, single update, finalize."""
        h = cls(variant)
        h.update(data)
        return h.finalize()

    @classmethod
    def hexdigest(cls, data: bytes, variant: Optional[Variant] = None) -> str:
        return cls.digest(data, variant).hex()

    def __repr__(self) -> str:
        state = "finalized" if self._finalized else f"{self.total_len} bytes"
        return f"<{self.__class__.__name__} {self.name} {state}>"


class _Ed2kFlavor(Ed2kHasher):
    """Front-end bound to one variant; only the data is accepted."""

    fixed_variant: Variant = DEFAULT_VARIANT

    def __init__(self, data: bytes = b"") -> None:
        if isinstance(data, Variant):
            raise TypeError(f"{self.__class__.__name__} always computes {self.fixed_variant.hash_name}, got {data!r}")
        super().__init__(self.fixed_variant, data)

    @classmethod
    def digest(cls, data: bytes) -> bytes:
        return cls(data).finalize()

    @classmethod
    def hexdigest(cls, data: bytes) -> str:
        return cls.digest(data).hex()


class Ed2kRed(_Ed2kFlavor):
    """The old ED2K hash: a trailing empty chunk counts when the input ends on a chunk boundary."""

    fixed_variant = Variant.RED


class Ed2kBlue(_Ed2kFlavor):
    """The fixed ED2K hash: no empty trailing chunk."""

    fixed_variant = Variant.BLUE


class Ed2kRedBlue(_Ed2kFlavor):
    """Red digest followed by Blue digest, 32 bytes, from a single pass."""

    fixed_variant = Variant.REDBLUE


# The "official" ED2K hash
Ed2k = Ed2kBlue

_BY_VARIANT = {
    Variant.RED: Ed2kRed,
    Variant.BLUE: Ed2kBlue,
    Variant.REDBLUE: Ed2kRedBlue,
}


def parse_variant(value: Union[str, Variant]) -> Variant:
    if isinstance(value, Variant):
        return value
    try:
        return Variant(str(value).strip().lower())
    except ValueError:
        choices = ", ".join(v.value for v in Variant)
        raise UnknownVariantError(f"unknown ed2k variant {value!r} (expected one of: {choices})") from None


def new(variant: Union[str, Variant] = DEFAULT_VARIANT, data: bytes = b"") -> Ed2kHasher:
    """Create a hash session for ``variant`` ("red", "blue", "redblue" or a Variant)."""
    return _BY_VARIANT[parse_variant(variant)](data=data)
