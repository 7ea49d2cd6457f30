# -*- coding: utf-8 -*-
"""
aead.py  (AES-GCM envelope for the message body)
------------------------------------------------
Envelope layout:  nonce (12) || ciphertext || tag (16)

The nonce travels with the ciphertext so the PRE key wrapper only has to
carry the symmetric key.
"""

from __future__ import annotations

import secrets
from typing import Callable, Optional, Protocol

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from precrypt.errors import DecryptionFailed, InvalidKeySize, InvalidLength

NONCE_SIZE = 12
TAG_SIZE   = 16
KEY_SIZES  = (16, 24, 32)

RandomSource = Callable[[int], bytes]


class AeadCipher(Protocol):
    def encrypt(self, plaintext: bytes, key: bytes, nonce: Optional[bytes] = None) -> bytes: ...
    def decrypt(self, envelope: bytes, key: bytes) -> bytes: ...


def check_key_size(key: bytes) -> None:
    if len(key) not in KEY_SIZES:
        raise InvalidKeySize(len(key))


class AesGcmEnvelope:
    """AeadCipher over cryptography's AESGCM.

    ``nonce`` should only be passed by tests; production callers let the
    envelope draw a fresh one from ``random_source``.
    """

    def __init__(self, random_source: RandomSource = secrets.token_bytes):
        self._random = random_source

    def encrypt(self, plaintext: bytes, key: bytes, nonce: Optional[bytes] = None) -> bytes:
        check_key_size(key)
        if nonce is None:
            nonce = self._random(NONCE_SIZE)
        if len(nonce) != NONCE_SIZE:
            raise InvalidLength("nonce", NONCE_SIZE, len(nonce))
        return nonce + AESGCM(key).encrypt(nonce, plaintext, None)

    def decrypt(self, envelope: bytes, key: bytes) -> bytes:
        check_key_size(key)
        if len(envelope) < NONCE_SIZE + TAG_SIZE:
            raise DecryptionFailed(
                f"Decryption failed: ciphertext too short ({len(envelope)} bytes)"
            )
        nonce, ct = envelope[:NONCE_SIZE], envelope[NONCE_SIZE:]
        try:
            return AESGCM(key).decrypt(nonce, ct, None)
        except InvalidTag as e:
            raise DecryptionFailed("Decryption failed: authentication tag mismatch") from e
