# -*- coding: utf-8 -*-
"""
sdk.py  (high-level entry points for applications)
--------------------------------------------------
PreSdk bundles the engine with fresh randomness per call:

  generate_keys()     -> new secret key, split into 2-of-3 backup shares
  encrypt_data()      -> second-level encryption under a fresh scalar r
  decrypt_data()      -> delegate decryption of a re-encrypted key
"""

from __future__ import annotations

import logging
from typing import List, Optional

from precrypt.models import (
    FirstLevelEncryptionResponse,
    FirstLevelSymmetricKey,
    KeyPair,
    SecondLevelEncryptionResponse,
    SecretKey,
)
from precrypt.pre import PreClient
from precrypt.sharing import combine_secret, split_secret

logger = logging.getLogger(__name__)

SHARE_THRESHOLD = 2
SHARE_COUNT     = 3


class PreSdk:

    def __init__(self, client: Optional[PreClient] = None):
        self.client = client or PreClient()

    def generate_random_key_pair(self) -> KeyPair:
        logger.info("Generating key pair")
        return self.client.generate_random_key_pair()

    def generate_keys(self, threshold: int = SHARE_THRESHOLD,
                      shares: int = SHARE_COUNT) -> List[bytes]:
        """Generate a secret key and return it only as recoverable shares."""
        secret_key = self.client.generate_random_key_pair().secret_key
        logger.info("Generated secret key, splitting %d-of-%d", threshold, shares)
        return split_secret(secret_key.to_bytes(), threshold, shares)

    @staticmethod
    def recover_secret_key(shares: List[bytes]) -> SecretKey:
        return SecretKey.from_bytes(combine_secret(shares))

    def encrypt_data(self, secret: SecretKey, data: bytes) -> SecondLevelEncryptionResponse:
        logger.info("Encrypting %d bytes", len(data))
        r = self.client.generate_random_scalar()
        return self.client.second_level_encrypt(secret, data, r)

    def decrypt_data(self, encrypted_key: FirstLevelSymmetricKey,
                     encrypted_data: bytes, secret: SecretKey) -> bytes:
        logger.info("Decrypting %d bytes", len(encrypted_data))
        return self.client.decrypt_first_level(
            FirstLevelEncryptionResponse(encrypted_key=encrypted_key,
                                         encrypted_message=encrypted_data),
            secret,
        )
