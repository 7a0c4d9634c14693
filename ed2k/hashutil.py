from __future__ import annotations

from Cryptodome.Hash import MD4


def md4_new(data: bytes = b""):
    # PyCryptodomex MD4; hashlib only has md4 when OpenSSL still ships it.
    return MD4.new(data)


EMPTY_CHUNK_DIGEST = md4_new().digest()
