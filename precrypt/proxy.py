# -*- coding: utf-8 -*-
"""
proxy.py  (Proxy role: ReEncrypt)
---------------------------------
  c1' = e(c1, rk_{A->B})     c2' = c2

The proxy only ever sees the second-level key wrapper and the
re-encryption key; the AES envelope is forwarded untouched.
"""

from __future__ import annotations

import logging
from typing import Optional

from precrypt.bn254 import CurvePairingProvider, G2Point, default_provider
from precrypt.models import (
    FirstLevelEncryptionResponse,
    FirstLevelSymmetricKey,
    SecondLevelEncryptionResponse,
    SecondLevelSymmetricKey,
)

logger = logging.getLogger(__name__)


def re_encrypt(encrypted_key: SecondLevelSymmetricKey, re_key: G2Point,
               provider: Optional[CurvePairingProvider] = None) -> FirstLevelSymmetricKey:
    provider = provider or default_provider()
    first = provider.pairing(encrypted_key.first, re_key)
    logger.debug("re-encrypted second-level key")
    return FirstLevelSymmetricKey(first=first, second=encrypted_key.second)


def re_encrypt_response(response: SecondLevelEncryptionResponse, re_key: G2Point,
                        provider: Optional[CurvePairingProvider] = None
                        ) -> FirstLevelEncryptionResponse:
    return FirstLevelEncryptionResponse(
        encrypted_key=re_encrypt(response.encrypted_key, re_key, provider),
        encrypted_message=response.encrypted_message,
    )
