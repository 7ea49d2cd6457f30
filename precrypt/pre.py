# -*- coding: utf-8 -*-
"""
pre.py  (PRE protocol engine)
-----------------------------
Roles:
  Owner    (Alice): KeyGen / ReKeyGen / Encrypt / self-Decrypt
  Proxy           : ReEncrypt                        (see proxy.py)
  Delegate (Bob)  : Decrypt of the re-encrypted key

System parameters (fixed, computed once per engine):
  g1, g2 = curve generators,   Z = e(g1, g2)

  KeyGen     sk = (a1, a2),  pk = (Z^a1, g2^a2)
  ReKeyGen   rk_{A->B} = pk_B.second^(a1)              = g2^(a1 b2)
  Encrypt    K = Z^s,  c1 = g1^r,  c2 = pk_A.first^r * K,
             body = AES-GCM(HKDF(K), M)
  ReEncrypt  c1' = e(c1, rk_{A->B}) = Z^(r a1 b2),  c2' = c2
  Decrypt-2  K = c2 / e(c1, g2)^(a1)
  Decrypt-1  K = c2' / c1'^(1/b2)
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from typing import Optional, Tuple

from precrypt import kdf
from precrypt.aead import AeadCipher, AesGcmEnvelope, RandomSource
from precrypt.bn254 import (
    CurvePairingProvider,
    G2Point,
    GTElement,
    default_provider,
)
from precrypt.config import PreConfig
from precrypt.errors import (
    InvalidKeySize,
    InvalidScalar,
    NonInvertibleScalar,
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

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EncryptionOptions:
    """Pre-computed material for second_level_encrypt.

    Only tests need these: pinning key_gt / key / nonce makes the output
    deterministic.  Leave everything None in production.

      key_gt : GT element wrapped by the PRE layer
      key    : AES key; derived from key_gt when omitted
      nonce  : 12-byte AES-GCM nonce; random when omitted
    """
    key_gt: Optional[GTElement] = None
    key: Optional[bytes] = None
    nonce: Optional[bytes] = None


class PreClient:
    """Stateless PRE engine; one instance may be shared across threads."""

    def __init__(self,
                 provider: Optional[CurvePairingProvider] = None,
                 random_source: RandomSource = secrets.token_bytes,
                 aead: Optional[AeadCipher] = None,
                 config: Optional[PreConfig] = None,
                 validate_uploads: bool = False):
        self.provider = provider or default_provider()
        self.random_source = random_source
        self.aead = aead or AesGcmEnvelope(random_source)
        self.config = config or PreConfig()
        self.validate_uploads = validate_uploads

        self.g1 = self.provider.g1_generator()
        self.g2 = self.provider.g2_generator()
        self.Z  = self.provider.pairing(self.g1, self.g2)
        logger.debug("PRE engine ready (key_size=%d)", self.config.key_size)

    @property
    def order(self) -> int:
        return self.provider.order

    def _check_scalar(self, name: str, s: int) -> None:
        if not 0 <= s < self.order:
            raise InvalidScalar(f"{name} must satisfy 0 <= {name} < order")

    # ---- keys --------------------------------------------------------------

    def generate_random_scalar(self) -> int:
        return kdf.random_scalar(self.order, self.random_source)

    def generate_random_symmetric_key(self, size: Optional[int] = None) -> Tuple[GTElement, bytes]:
        return kdf.random_symmetric_key(
            self.Z, size or self.config.key_size, self.provider, self.random_source)

    def derive_symmetric_key(self, key_gt: GTElement) -> bytes:
        return kdf.derive_symmetric_key(key_gt, self.config.key_size, self.provider)

    def secret_to_public_key(self, secret: SecretKey) -> PublicKey:
        return PublicKey(
            first=self.provider.gt_pow(self.Z, secret.first),
            second=self.provider.g2_mul(self.g2, secret.second),
        )

    def generate_random_key_pair(self) -> KeyPair:
        sk = SecretKey(self.generate_random_scalar(), self.generate_random_scalar())
        return KeyPair(secret_key=sk, public_key=self.secret_to_public_key(sk))

    def generate_re_encryption_key(self, secret_a_first: int, public_b_second: G2Point) -> G2Point:
        """rk_{A->B} = pk_B.second ^ sk_A.first.

        The caller vouches that secret_a_first is the delegator's first
        component; nothing here can check it.
        """
        self._check_scalar("secret_a_first", secret_a_first)
        return self.provider.g2_mul(public_b_second, secret_a_first)

    # ---- upload policy -----------------------------------------------------

    def validate(self, message: bytes) -> None:
        """Reject uploads that are not an allowed image type or are too large."""
        head = bytes(message[:4])
        magic = self.config.magic_numbers
        if not any(head.startswith(magic[t]) for t in self.config.allowed_file_types):
            raise ValidationError("Invalid file type")
        if len(message) > self.config.max_upload_size:
            raise ValidationError(
                f"File size exceeds {self.config.max_upload_size} bytes")

    # ---- encrypt -----------------------------------------------------------

    def second_level_encrypt(self, secret_a: SecretKey, message: bytes, scalar: int,
                             options: Optional[EncryptionOptions] = None
                             ) -> SecondLevelEncryptionResponse:
        self._check_scalar("scalar", scalar)
        if self.validate_uploads:
            self.validate(message)
        opts = options or EncryptionOptions()

        key_gt, key = opts.key_gt, opts.key
        if key_gt is None:
            if key is not None:
                raise ValueError("EncryptionOptions.key requires key_gt")
            key_gt, key = self.generate_random_symmetric_key()
        elif key is None:
            key = self.derive_symmetric_key(key_gt)
        if len(key) != self.config.key_size:
            raise InvalidKeySize(len(key))

        encrypted_message = self.aead.encrypt(message, key, opts.nonce)

        p = self.provider
        first  = p.g1_mul(self.g1, scalar)
        second = p.gt_mul(p.gt_pow(p.gt_pow(self.Z, secret_a.first), scalar), key_gt)
        logger.debug("second-level encryption of %d bytes", len(message))

        return SecondLevelEncryptionResponse(
            encrypted_key=SecondLevelSymmetricKey(first=first, second=second),
            encrypted_message=encrypted_message,
        )

    # ---- decrypt (owner, no proxy) -----------------------------------------

    def decrypt_second_level_key(self, encrypted_key: SecondLevelSymmetricKey,
                                 secret_key: SecretKey) -> bytes:
        p = self.provider
        temp = p.pairing(encrypted_key.first, self.g2)                   # Z^r
        key_gt = p.gt_div(encrypted_key.second, p.gt_pow(temp, secret_key.first))
        return self.derive_symmetric_key(key_gt)

    def decrypt_second_level(self, encrypted_key: SecondLevelSymmetricKey,
                             encrypted_message: bytes, secret_key: SecretKey) -> bytes:
        key = self.decrypt_second_level_key(encrypted_key, secret_key)
        return self.aead.decrypt(encrypted_message, key)

    # ---- decrypt (delegate, after proxy) -----------------------------------

    def decrypt_first_level_key(self, encrypted_key: FirstLevelSymmetricKey,
                                secret_key: SecretKey) -> bytes:
        if secret_key.second % self.order == 0:
            raise NonInvertibleScalar("secret_key.second has no inverse modulo the order")
        inv = pow(secret_key.second, -1, self.order)

        p = self.provider
        temp = p.gt_pow(encrypted_key.first, inv)                        # Z^(r a1)
        key_gt = p.gt_div(encrypted_key.second, temp)
        return self.derive_symmetric_key(key_gt)

    def decrypt_first_level(self, payload: FirstLevelEncryptionResponse,
                            secret_key: SecretKey) -> bytes:
        key = self.decrypt_first_level_key(payload.encrypted_key, secret_key)
        return self.aead.decrypt(payload.encrypted_message, key)
