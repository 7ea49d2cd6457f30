# -*- coding: utf-8 -*-
"""
sharing.py  (k-of-n backup shares of a secret key)
--------------------------------------------------
PyCryptodome's Shamir works on 16-byte secrets, so the secret is cut into
16-byte blocks and every block is shared with the same x-coordinates.

Share layout:  index (1 byte) || share(block 0) || share(block 1) || ...
"""

from __future__ import annotations

from typing import Dict, List, Sequence

from Crypto.Protocol.SecretSharing import Shamir

BLOCK_SIZE = 16
MAX_SHARES = 255


def split_secret(secret: bytes, threshold: int, shares: int) -> List[bytes]:
    if not secret or len(secret) % BLOCK_SIZE:
        raise ValueError(f"secret length must be a non-zero multiple of {BLOCK_SIZE}")
    if not 2 <= threshold <= shares <= MAX_SHARES:
        raise ValueError("need 2 <= threshold <= shares <= 255")

    out: Dict[int, bytearray] = {}
    for off in range(0, len(secret), BLOCK_SIZE):
        for idx, part in Shamir.split(threshold, shares, secret[off:off + BLOCK_SIZE]):
            out.setdefault(idx, bytearray([idx])).extend(part)
    return [bytes(out[idx]) for idx in sorted(out)]


def combine_secret(shares: Sequence[bytes]) -> bytes:
    if not shares:
        raise ValueError("no shares given")
    size = len(shares[0])
    if size < 1 + BLOCK_SIZE or (size - 1) % BLOCK_SIZE:
        raise ValueError("malformed share")
    if any(len(s) != size for s in shares):
        raise ValueError("shares have different lengths")
    indices = [s[0] for s in shares]
    if len(set(indices)) != len(indices):
        raise ValueError("duplicate share index")

    secret = bytearray()
    for off in range(1, size, BLOCK_SIZE):
        secret.extend(Shamir.combine([(s[0], s[off:off + BLOCK_SIZE]) for s in shares]))
    return bytes(secret)
