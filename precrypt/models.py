# -*- coding: utf-8 -*-
"""
models.py  (keys and ciphertext structures of the PRE scheme)
-------------------------------------------------------------
  SecretKey                = (a1, a2)            scalars in Fr
  PublicKey                = (Z^a1, g2^a2)       GT x G2
  ReEncryptionKey A->B     = pk_B.second^(sk_A.first)   (a bare G2 point)
  SecondLevelSymmetricKey  = (g1^r, Z^(a1 r) * K)        G1 x GT
  FirstLevelSymmetricKey   = (Z^(a1 r b2), Z^(a1 r) * K) GT x GT

Instances are immutable.  Points are compared through their canonical
encoding since the curve library keeps projective coordinates.
"""

from __future__ import annotations

from dataclasses import dataclass

from precrypt import codec
from precrypt.bn254 import CURVE_ORDER, G1Point, G2Point, GTElement
from precrypt.errors import InvalidLength, InvalidScalar

SECRET_KEY_SIZE     = 2 * codec.SCALAR_SIZE
PUBLIC_KEY_SIZE     = codec.GT_SIZE + codec.G2_SIZE
SECOND_LEVEL_SIZE   = codec.G1_SIZE + codec.GT_SIZE
FIRST_LEVEL_SIZE    = 2 * codec.GT_SIZE


def _check_scalar(name: str, value: int) -> None:
    if not 0 <= value < CURVE_ORDER:
        raise InvalidScalar(f"{name} is outside [0, order)")


@dataclass(frozen=True)
class SecretKey:
    first: int    # drives the GT half of the public key and the re-encryption key
    second: int   # drives the G2 half; inverted on first-level decryption

    def __post_init__(self) -> None:
        _check_scalar("SecretKey.first", self.first)
        _check_scalar("SecretKey.second", self.second)

    def __repr__(self) -> str:
        return "SecretKey(<redacted>)"

    def to_bytes(self) -> bytes:
        return codec.scalar_to_bytes(self.first) + codec.scalar_to_bytes(self.second)

    @classmethod
    def from_bytes(cls, data: bytes) -> "SecretKey":
        if len(data) != SECRET_KEY_SIZE:
            raise InvalidLength("SecretKey", SECRET_KEY_SIZE, len(data))
        return cls(
            codec.scalar_from_bytes(data[:codec.SCALAR_SIZE]),
            codec.scalar_from_bytes(data[codec.SCALAR_SIZE:]),
        )


@dataclass(frozen=True, eq=False)
class PublicKey:
    first: GTElement
    second: G2Point

    def to_bytes(self) -> bytes:
        return codec.gt_to_bytes(self.first) + codec.g2_to_bytes(self.second)

    @classmethod
    def from_bytes(cls, data: bytes) -> "PublicKey":
        if len(data) != PUBLIC_KEY_SIZE:
            raise InvalidLength("PublicKey", PUBLIC_KEY_SIZE, len(data))
        return cls(
            first=codec.gt_from_bytes(data[:codec.GT_SIZE]),
            second=codec.g2_from_bytes(data[codec.GT_SIZE:]),
        )

    def __eq__(self, other: object) -> bool:
        return isinstance(other, PublicKey) and self.to_bytes() == other.to_bytes()

    def __hash__(self) -> int:
        return hash(self.to_bytes())


@dataclass(frozen=True)
class KeyPair:
    secret_key: SecretKey
    public_key: PublicKey


@dataclass(frozen=True, eq=False)
class SecondLevelSymmetricKey:
    first: G1Point      # g1^r
    second: GTElement   # pk_A.first^r * K

    def to_bytes(self) -> bytes:
        return codec.g1_to_bytes(self.first) + codec.gt_to_bytes(self.second)

    @classmethod
    def from_bytes(cls, data: bytes) -> "SecondLevelSymmetricKey":
        if len(data) != SECOND_LEVEL_SIZE:
            raise InvalidLength("SecondLevelSymmetricKey", SECOND_LEVEL_SIZE, len(data))
        return cls(
            first=codec.g1_from_bytes(data[:codec.G1_SIZE]),
            second=codec.gt_from_bytes(data[codec.G1_SIZE:]),
        )

    def __eq__(self, other: object) -> bool:
        return (isinstance(other, SecondLevelSymmetricKey)
                and self.to_bytes() == other.to_bytes())

    def __hash__(self) -> int:
        return hash(self.to_bytes())


@dataclass(frozen=True, eq=False)
class FirstLevelSymmetricKey:
    first: GTElement    # e(g1^r, rekey)
    second: GTElement   # passed through from the second-level key

    def to_bytes(self) -> bytes:
        return codec.gt_to_bytes(self.first) + codec.gt_to_bytes(self.second)

    @classmethod
    def from_bytes(cls, data: bytes) -> "FirstLevelSymmetricKey":
        if len(data) != FIRST_LEVEL_SIZE:
            raise InvalidLength("FirstLevelSymmetricKey", FIRST_LEVEL_SIZE, len(data))
        return cls(
            first=codec.gt_from_bytes(data[:codec.GT_SIZE]),
            second=codec.gt_from_bytes(data[codec.GT_SIZE:]),
        )

    def __eq__(self, other: object) -> bool:
        return (isinstance(other, FirstLevelSymmetricKey)
                and self.to_bytes() == other.to_bytes())

    def __hash__(self) -> int:
        return hash(self.to_bytes())


@dataclass(frozen=True)
class SecondLevelEncryptionResponse:
    encrypted_key: SecondLevelSymmetricKey
    encrypted_message: bytes   # nonce || AES-GCM ciphertext || tag


@dataclass(frozen=True)
class FirstLevelEncryptionResponse:
    encrypted_key: FirstLevelSymmetricKey
    encrypted_message: bytes
