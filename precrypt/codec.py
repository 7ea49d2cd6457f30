# -*- coding: utf-8 -*-
"""
codec.py  (canonical byte encodings for Fr / G1 / G2 / GT)
----------------------------------------------------------
All encodings are fixed length, big-endian, uncompressed:

  scalar : 32 bytes
  G1     : X (32) || Y (32)                                      =  64 bytes
  G2     : X.c1 (32) || X.c0 (32) || Y.c1 (32) || Y.c0 (32)      = 128 bytes
  GT     : 12 limbs of 32 bytes, ordered by GT_LIMB_ORDER        = 384 bytes

The layout is shared with an independent gnark-crypto based implementation,
so byte order here is part of the wire format.  The two top bits of the
first byte of a G1/G2 encoding are a format tag; only 0b00 (uncompressed)
is produced or accepted.
"""

from __future__ import annotations

from typing import Optional, Tuple

from precrypt.bn254 import (
    CurvePairingProvider,
    G1Point,
    G2Point,
    GTElement,
    PointNotOnCurve,
    default_provider,
)
from precrypt.errors import (
    InvalidEncoding,
    InvalidLength,
    InvalidScalar,
    UnsupportedInfinityPoint,
)

FP_SIZE     = 32
SCALAR_SIZE = 32
G1_SIZE     = 2 * FP_SIZE
G2_SIZE     = 4 * FP_SIZE
GT_SIZE     = 12 * FP_SIZE

FORMAT_MASK  = 0b11 << 6
UNCOMPRESSED = 0b00 << 6


# ============================================================
# GT limb permutation
# ============================================================

# Tower coefficient names in natural construction order (index 6i + 2j + k).
GT_TOWER_NAMES: Tuple[str, ...] = tuple(
    f"c{i}.b{j}.a{k}" for i in range(2) for j in range(3) for k in range(2)
)

# Wire position -> tower index.  Highest coefficient first, i.e.
#   c1.b2.a1, c1.b2.a0, c1.b1.a1, ... , c0.b0.a1, c0.b0.a0
GT_LIMB_ORDER: Tuple[int, ...] = tuple(range(11, -1, -1))


def gt_wire_names() -> Tuple[str, ...]:
    """Coefficient names in the order they appear on the wire."""
    return tuple(GT_TOWER_NAMES[idx] for idx in GT_LIMB_ORDER)


# ============================================================
# Field element / scalar helpers
# ============================================================

def int_to_bytes(value: int, size: int = FP_SIZE) -> bytes:
    return value.to_bytes(size, "big")

def bytes_to_int(data: bytes) -> int:
    return int.from_bytes(data, "big")

def _fp_from_bytes(data: bytes, modulus: int, what: str) -> int:
    v = bytes_to_int(data)
    if v >= modulus:
        raise InvalidEncoding(f"{what}: field element is not canonical (>= p)")
    return v

def _check_len(data: bytes, expected: int, what: str) -> None:
    if len(data) != expected:
        raise InvalidLength(what, expected, len(data))

def _check_tag(data: bytes, what: str) -> None:
    if data[0] & FORMAT_MASK != UNCOMPRESSED:
        raise InvalidEncoding(f"{what}: expected uncompressed format tag")


def scalar_to_bytes(s: int) -> bytes:
    if s < 0 or s.bit_length() > 8 * SCALAR_SIZE:
        raise InvalidScalar(f"scalar does not fit in {SCALAR_SIZE} bytes")
    return int_to_bytes(s, SCALAR_SIZE)

def scalar_from_bytes(data: bytes) -> int:
    _check_len(data, SCALAR_SIZE, "scalar")
    return bytes_to_int(data)


# ============================================================
# G1
# ============================================================

def g1_to_bytes(p: G1Point, provider: Optional[CurvePairingProvider] = None) -> bytes:
    provider = provider or default_provider()
    aff = provider.g1_to_affine(p)
    if aff is None:
        return bytes(G1_SIZE)
    x, y = aff
    return int_to_bytes(x) + int_to_bytes(y)

def g1_from_bytes(data: bytes, provider: Optional[CurvePairingProvider] = None) -> G1Point:
    provider = provider or default_provider()
    _check_len(data, G1_SIZE, "G1 point")
    _check_tag(data, "G1 point")
    if not any(data):
        raise UnsupportedInfinityPoint("G1")

    q = provider.field_modulus
    x = _fp_from_bytes(data[0:32], q, "G1 point X")
    y = _fp_from_bytes(data[32:64], q, "G1 point Y")
    try:
        return provider.g1_from_affine(x, y)
    except PointNotOnCurve as e:
        raise InvalidEncoding(str(e)) from e


# ============================================================
# G2
# ============================================================

def g2_to_bytes(p: G2Point, provider: Optional[CurvePairingProvider] = None) -> bytes:
    provider = provider or default_provider()
    aff = provider.g2_to_affine(p)
    if aff is None:
        return bytes(G2_SIZE)
    (x0, x1), (y0, y1) = aff
    return int_to_bytes(x1) + int_to_bytes(x0) + int_to_bytes(y1) + int_to_bytes(y0)

def g2_from_bytes(data: bytes, provider: Optional[CurvePairingProvider] = None) -> G2Point:
    provider = provider or default_provider()
    _check_len(data, G2_SIZE, "G2 point")
    _check_tag(data, "G2 point")
    if not any(data):
        raise UnsupportedInfinityPoint("G2")

    q = provider.field_modulus
    x1 = _fp_from_bytes(data[0:32],   q, "G2 point X.c1")
    x0 = _fp_from_bytes(data[32:64],  q, "G2 point X.c0")
    y1 = _fp_from_bytes(data[64:96],  q, "G2 point Y.c1")
    y0 = _fp_from_bytes(data[96:128], q, "G2 point Y.c0")
    try:
        return provider.g2_from_affine((x0, x1), (y0, y1))
    except PointNotOnCurve as e:
        raise InvalidEncoding(str(e)) from e


# ============================================================
# GT (Fp12)
# ============================================================

def gt_to_bytes(e: GTElement, provider: Optional[CurvePairingProvider] = None) -> bytes:
    provider = provider or default_provider()
    tower = provider.gt_to_tower(e)
    return b"".join(int_to_bytes(tower[idx]) for idx in GT_LIMB_ORDER)

def gt_from_bytes(data: bytes, provider: Optional[CurvePairingProvider] = None) -> GTElement:
    provider = provider or default_provider()
    _check_len(data, GT_SIZE, "GT element")

    q = provider.field_modulus
    tower = [0] * 12
    for pos, idx in enumerate(GT_LIMB_ORDER):
        limb = data[pos * FP_SIZE:(pos + 1) * FP_SIZE]
        tower[idx] = _fp_from_bytes(limb, q, f"GT limb {GT_TOWER_NAMES[idx]}")
    return provider.gt_from_tower(tuple(tower))
