# -*- coding: utf-8 -*-
"""
kdf.py  (symmetric key derivation and randomness)
-------------------------------------------------
  derive_symmetric_key(K)  = HKDF-SHA256(ikm = GT-encoding(K),
                                         salt = "PRE_derive_key",
                                         info = "PRE_symmetric_key")
  random_scalar()          = uniform in [0, r) by rejection sampling
  random_symmetric_key()   = (K = Z^s, derive_symmetric_key(K))
"""

from __future__ import annotations

import secrets
from typing import Optional, Tuple

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from precrypt import codec
from precrypt.aead import KEY_SIZES, RandomSource
from precrypt.bn254 import CurvePairingProvider, GTElement, default_provider
from precrypt.errors import EmptyInputMaterial, InvalidKeySize

HKDF_SALT = b"PRE_derive_key"
HKDF_INFO = b"PRE_symmetric_key"

DEFAULT_KEY_SIZE = 32


def derive_symmetric_key(gt: GTElement, size: int = DEFAULT_KEY_SIZE,
                         provider: Optional[CurvePairingProvider] = None) -> bytes:
    if size not in KEY_SIZES:
        raise InvalidKeySize(size)

    ikm = codec.gt_to_bytes(gt, provider)
    if not ikm:
        raise EmptyInputMaterial("Failed to get bytes from GT element")

    hkdf = HKDF(
        algorithm=hashes.SHA256(),
        length=size,
        salt=HKDF_SALT,
        info=HKDF_INFO,
    )
    return hkdf.derive(ikm)


def random_scalar(order: int, random_source: RandomSource = secrets.token_bytes) -> int:
    """Uniform integer in [0, order).

    Draws order.bit_length() random bits at a time and retries when the
    candidate lands at or above the order; for BN254 that happens with
    probability below 1/4 per draw.
    """
    nbits  = order.bit_length()
    nbytes = (nbits + 7) // 8
    excess = 8 * nbytes - nbits
    while True:
        candidate = int.from_bytes(random_source(nbytes), "big") >> excess
        if candidate < order:
            return candidate


def random_symmetric_key(z: GTElement, size: int = DEFAULT_KEY_SIZE,
                         provider: Optional[CurvePairingProvider] = None,
                         random_source: RandomSource = secrets.token_bytes
                         ) -> Tuple[GTElement, bytes]:
    """Fresh GT key K = z^s and the AES key derived from it."""
    provider = provider or default_provider()
    if size not in KEY_SIZES:
        raise InvalidKeySize(size)
    s = random_scalar(provider.order, random_source)
    key_gt = provider.gt_pow(z, s)
    return key_gt, derive_symmetric_key(key_gt, size, provider)
