# -*- coding: utf-8 -*-
"""
bn254.py  (curve provider: G1 / G2 / GT arithmetic over BN254)
--------------------------------------------------------------
The protocol engine and the codec only talk to a CurvePairingProvider.
PyEccBN254 is the adapter over py_ecc's optimized alt_bn128 module.

Tower used for GT on the wire:

  Fp2  = Fp[u]  / (u^2 + 1)
  Fp6  = Fp2[v] / (v^3 - (9 + u))
  Fp12 = Fp6[w] / (w^2 - v)

py_ecc represents Fp12 as a flat polynomial in w modulo
w^12 - 18 w^6 + 82, where w^6 = 9 + u.  Substituting u = w^6 - 9 gives

  a0 + a1*u  at power w^m   ==   (a0 - 9 a1) w^m  +  a1 w^(m+6)

with m = i + 2j for the coefficient c_i.b_j of the tower.  to_tower /
from_tower apply that change of basis; "tower order" below always means
(c0.b0.a0, c0.b0.a1, c0.b1.a0, ..., c1.b2.a1), index 6i + 2j + k.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Tuple

from py_ecc.optimized_bn128 import (
    FQ, FQ2, FQ12,
    G1, G2,
    b, b2,
    curve_order,
    eq,
    is_inf,
    is_on_curve,
    multiply,
    normalize,
    pairing as ecc_pairing,
)

# --- type aliases (py_ecc points are projective tuples of field elements) ---
G1Point = Any
G2Point = Any
GTElement = Any

FIELD_MODULUS: int = FQ.field_modulus
CURVE_ORDER: int = curve_order

# BN parameter x (p and r are polynomials in x).
BN_X = 4965661367192848881

# gnark's final exponentiation computes the py_ecc result raised to
# 2x(6x^2 + 3x + 1).  Scaling every pairing by it keeps Z, public keys and
# proxy outputs byte-identical with that implementation.
_GT_EXP = 2 * BN_X * (6 * BN_X * BN_X + 3 * BN_X + 1) % CURVE_ORDER

# Fp12 coefficients in tower order.
TowerCoeffs = Tuple[int, ...]


class CurvePairingProvider(Protocol):
    """Everything the PRE core needs from a pairing library."""

    order: int
    field_modulus: int

    def g1_generator(self) -> G1Point: ...
    def g2_generator(self) -> G2Point: ...
    def pairing(self, p: G1Point, q: G2Point) -> GTElement: ...

    def g1_mul(self, p: G1Point, scalar: int) -> G1Point: ...
    def g2_mul(self, q: G2Point, scalar: int) -> G2Point: ...
    def g1_eq(self, p: G1Point, r: G1Point) -> bool: ...
    def g2_eq(self, q: G2Point, r: G2Point) -> bool: ...

    def gt_one(self) -> GTElement: ...
    def gt_pow(self, a: GTElement, e: int) -> GTElement: ...
    def gt_mul(self, a: GTElement, b: GTElement) -> GTElement: ...
    def gt_div(self, a: GTElement, b: GTElement) -> GTElement: ...

    def g1_to_affine(self, p: G1Point) -> Optional[Tuple[int, int]]: ...
    def g1_from_affine(self, x: int, y: int) -> G1Point: ...
    def g2_to_affine(self, q: G2Point) -> Optional[Tuple[Tuple[int, int], Tuple[int, int]]]: ...
    def g2_from_affine(self, x: Tuple[int, int], y: Tuple[int, int]) -> G2Point: ...
    def gt_to_tower(self, a: GTElement) -> TowerCoeffs: ...
    def gt_from_tower(self, coeffs: TowerCoeffs) -> GTElement: ...


class PointNotOnCurve(ValueError):
    """Raised by the from_affine constructors; the codec maps it to InvalidEncoding."""


def _int_of(x: Any) -> int:
    # optimized py_ecc stores plain ints, the reference module stores FQ objects
    if hasattr(x, "n"):
        return int(x.n)
    return int(x)


def _ints(coeffs) -> Tuple[int, ...]:
    return tuple(_int_of(c) for c in coeffs)


class PyEccBN254:
    """CurvePairingProvider backed by py_ecc.optimized_bn128."""

    order = CURVE_ORDER
    field_modulus = FIELD_MODULUS

    # ---- generators / pairing -------------------------------------------------

    def g1_generator(self) -> G1Point:
        return G1

    def g2_generator(self) -> G2Point:
        return G2

    def pairing(self, p: G1Point, q: G2Point) -> GTElement:
        # py_ecc takes (G2, G1)
        return ecc_pairing(q, p) ** _GT_EXP

    # ---- group operations -----------------------------------------------------

    def g1_mul(self, p: G1Point, scalar: int) -> G1Point:
        return multiply(p, scalar)

    def g2_mul(self, q: G2Point, scalar: int) -> G2Point:
        return multiply(q, scalar)

    def g1_eq(self, p: G1Point, r: G1Point) -> bool:
        return eq(p, r)

    def g2_eq(self, q: G2Point, r: G2Point) -> bool:
        return eq(q, r)

    def gt_one(self) -> GTElement:
        return FQ12.one()

    def gt_pow(self, a: GTElement, e: int) -> GTElement:
        if e < 0:
            raise ValueError("negative GT exponent")
        return a ** e

    def gt_mul(self, a: GTElement, other: GTElement) -> GTElement:
        return a * other

    def gt_div(self, a: GTElement, other: GTElement) -> GTElement:
        return a / other

    # ---- raw coordinates ------------------------------------------------------

    def g1_to_affine(self, p: G1Point) -> Optional[Tuple[int, int]]:
        if is_inf(p):
            return None
        x, y = normalize(p)
        return _int_of(x), _int_of(y)

    def g1_from_affine(self, x: int, y: int) -> G1Point:
        pt = (FQ(x), FQ(y), FQ.one())
        if not is_on_curve(pt, b):
            raise PointNotOnCurve("G1 point is not on the curve")
        return pt

    def g2_to_affine(self, q: G2Point) -> Optional[Tuple[Tuple[int, int], Tuple[int, int]]]:
        if is_inf(q):
            return None
        x, y = normalize(q)
        x0, x1 = _ints(x.coeffs)
        y0, y1 = _ints(y.coeffs)
        return (x0, x1), (y0, y1)

    def g2_from_affine(self, x: Tuple[int, int], y: Tuple[int, int]) -> G2Point:
        pt = (FQ2([x[0], x[1]]), FQ2([y[0], y[1]]), FQ2.one())
        if not is_on_curve(pt, b2):
            raise PointNotOnCurve("G2 point is not on the twist curve")
        # the twist has a large cofactor; only the r-torsion is a valid G2 element
        if not is_inf(multiply(pt, CURVE_ORDER)):
            raise PointNotOnCurve("G2 point is not in the prime-order subgroup")
        return pt

    def gt_to_tower(self, a: GTElement) -> TowerCoeffs:
        p = _ints(a.coeffs)
        q = FIELD_MODULUS
        out = [0] * 12
        for i in range(2):
            for j in range(3):
                m = i + 2 * j
                a1 = p[m + 6]
                a0 = (p[m] + 9 * a1) % q
                out[6 * i + 2 * j] = a0
                out[6 * i + 2 * j + 1] = a1
        return tuple(out)

    def gt_from_tower(self, coeffs: TowerCoeffs) -> GTElement:
        if len(coeffs) != 12:
            raise ValueError("Fp12 element needs 12 coefficients")
        q = FIELD_MODULUS
        p = [0] * 12
        for i in range(2):
            for j in range(3):
                m = i + 2 * j
                a0 = coeffs[6 * i + 2 * j]
                a1 = coeffs[6 * i + 2 * j + 1]
                p[m] = (a0 - 9 * a1) % q
                p[m + 6] = a1 % q
        return FQ12(p)


_DEFAULT_PROVIDER: Optional[PyEccBN254] = None


def default_provider() -> PyEccBN254:
    global _DEFAULT_PROVIDER
    if _DEFAULT_PROVIDER is None:
        _DEFAULT_PROVIDER = PyEccBN254()
    return _DEFAULT_PROVIDER
