# -*- coding: utf-8 -*-
"""
precrypt  (pairing-based proxy re-encryption over BN254)
--------------------------------------------------------
Typical flow:

  client = PreClient()
  alice, bob = client.generate_random_key_pair(), client.generate_random_key_pair()
  resp = client.second_level_encrypt(alice.secret_key, b"data", client.generate_random_scalar())
  rk   = client.generate_re_encryption_key(alice.secret_key.first, bob.public_key.second)
  out  = re_encrypt_response(resp, rk)
  client.decrypt_first_level(out, bob.secret_key)   # -> b"data"
"""

from precrypt.config import PreConfig
from precrypt.errors import (
    DecryptionFailed,
    EmptyInputMaterial,
    InvalidEncoding,
    InvalidKeySize,
    InvalidLength,
    InvalidScalar,
    NonInvertibleScalar,
    PreError,
    UnsupportedInfinityPoint,
    ValidationError,
)
from precrypt.models import (
    FirstLevelEncryptionResponse,
    FirstLevelSymmetricKey,
    KeyPair,
    PublicKey,
    SecondLevelEncryptionResponse,
    SecondLevelSymmetricKey,
    SecretKey,
)
from precrypt.pre import EncryptionOptions, PreClient
from precrypt.proxy import re_encrypt, re_encrypt_response
from precrypt.sdk import PreSdk

__version__ = "0.1.0"

__all__ = [
    "PreClient", "EncryptionOptions", "PreSdk", "PreConfig",
    "re_encrypt", "re_encrypt_response",
    "SecretKey", "PublicKey", "KeyPair",
    "SecondLevelSymmetricKey", "FirstLevelSymmetricKey",
    "SecondLevelEncryptionResponse", "FirstLevelEncryptionResponse",
    "PreError", "InvalidKeySize", "InvalidScalar", "NonInvertibleScalar",
    "EmptyInputMaterial", "ValidationError", "InvalidEncoding", "InvalidLength",
    "UnsupportedInfinityPoint", "DecryptionFailed",
]
