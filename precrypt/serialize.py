# -*- coding: utf-8 -*-
"""
serialize.py  (JSON / base64 documents for keys and ciphertexts)
----------------------------------------------------------------
Key pair (same layout as the reference test data):

  {"PublicKey": {"First": b64(GT), "Second": b64(G2)},
   "SecretKey": {"First": hex, "Second": hex}}

Ciphertext bundle:

  {"scheme": "BN254-PRE", "level": 2,
   "encrypted_key": {"first": b64(G1), "second": b64(GT)},
   "encrypted_data": b64(nonce || ct || tag)}

Level-1 bundles carry two GT elements under "encrypted_key".
Re-encryption keys are stored as the bare base64 text of their G2 encoding.
"""

from __future__ import annotations

import base64
import binascii
import json
import os
from typing import Any, Dict, Union

from precrypt import codec
from precrypt.bn254 import G2Point
from precrypt.errors import InvalidEncoding
from precrypt.models import (
    FirstLevelEncryptionResponse,
    FirstLevelSymmetricKey,
    KeyPair,
    PublicKey,
    SecondLevelEncryptionResponse,
    SecondLevelSymmetricKey,
    SecretKey,
)

SCHEME = "BN254-PRE"

Response = Union[SecondLevelEncryptionResponse, FirstLevelEncryptionResponse]


# ============================================================
# JSON / base64 helpers
# ============================================================

def b64e(b: bytes) -> str:
    return base64.b64encode(b).decode("ascii")

def b64d(s: str) -> bytes:
    try:
        return base64.b64decode(s.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as e:
        raise InvalidEncoding(f"invalid base64: {e}") from e

def save_json(path: str, obj: Any) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, ensure_ascii=False, indent=2)

def load_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


# ============================================================
# Keys
# ============================================================

def dump_public_key(pk: PublicKey) -> Dict[str, Any]:
    return {
        "PublicKey": {
            "First":  b64e(codec.gt_to_bytes(pk.first)),
            "Second": b64e(codec.g2_to_bytes(pk.second)),
        },
    }

def dump_key_pair(kp: KeyPair) -> Dict[str, Any]:
    return {
        **dump_public_key(kp.public_key),
        "SecretKey": {
            "First":  f"{kp.secret_key.first:x}",
            "Second": f"{kp.secret_key.second:x}",
        },
    }

def load_key_pair(blob: Dict[str, Any]) -> KeyPair:
    try:
        pk, sk = blob["PublicKey"], blob["SecretKey"]
        first, second = int(sk["First"], 16), int(sk["Second"], 16)
        pk_first, pk_second = pk["First"], pk["Second"]
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidEncoding(f"malformed key pair document: {e}") from e
    return KeyPair(
        secret_key=SecretKey(first, second),
        public_key=PublicKey(
            first=codec.gt_from_bytes(b64d(pk_first)),
            second=codec.g2_from_bytes(b64d(pk_second)),
        ),
    )

def load_public_key(blob: Dict[str, Any]) -> PublicKey:
    try:
        pk = blob["PublicKey"]
        pk_first, pk_second = pk["First"], pk["Second"]
    except (KeyError, TypeError) as e:
        raise InvalidEncoding(f"malformed public key document: {e}") from e
    return PublicKey(
        first=codec.gt_from_bytes(b64d(pk_first)),
        second=codec.g2_from_bytes(b64d(pk_second)),
    )

def dump_re_key(re_key: G2Point) -> str:
    return b64e(codec.g2_to_bytes(re_key))

def load_re_key(text: str) -> G2Point:
    return codec.g2_from_bytes(b64d(text.strip()))


# ============================================================
# Ciphertext bundles
# ============================================================

def dump_response(resp: Response) -> Dict[str, Any]:
    key = resp.encrypted_key
    if isinstance(resp, SecondLevelEncryptionResponse):
        level = 2
        first = codec.g1_to_bytes(key.first)
    else:
        level = 1
        first = codec.gt_to_bytes(key.first)
    return {
        "scheme": SCHEME,
        "level":  level,
        "encrypted_key": {
            "first":  b64e(first),
            "second": b64e(codec.gt_to_bytes(key.second)),
        },
        "encrypted_data": b64e(resp.encrypted_message),
    }

def load_response(blob: Dict[str, Any]) -> Response:
    try:
        scheme, level = blob["scheme"], int(blob["level"])
        first = b64d(blob["encrypted_key"]["first"])
        second = codec.gt_from_bytes(b64d(blob["encrypted_key"]["second"]))
        data = b64d(blob["encrypted_data"])
    except InvalidEncoding:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidEncoding(f"malformed ciphertext bundle: {e}") from e
    if scheme != SCHEME:
        raise InvalidEncoding(f"unexpected scheme: {scheme}")

    if level == 2:
        return SecondLevelEncryptionResponse(
            encrypted_key=SecondLevelSymmetricKey(codec.g1_from_bytes(first), second),
            encrypted_message=data,
        )
    if level == 1:
        return FirstLevelEncryptionResponse(
            encrypted_key=FirstLevelSymmetricKey(codec.gt_from_bytes(first), second),
            encrypted_message=data,
        )
    raise InvalidEncoding(f"unknown ciphertext level: {level}")
