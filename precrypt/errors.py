# -*- coding: utf-8 -*-
"""
errors.py  (typed failures raised by the PRE core)
--------------------------------------------------
Every boundary-facing function raises one of these instead of a bare
exception so callers can tell malformed input from an authentication
failure.  Input-shaped errors also derive from ValueError.

  PreError
   ├── InvalidKeySize         (ValueError)
   ├── InvalidScalar          (ValueError)
   ├── NonInvertibleScalar    (ValueError)
   ├── EmptyInputMaterial     (ValueError)
   ├── ValidationError        (ValueError)
   ├── InvalidEncoding        (ValueError)
   │    ├── InvalidLength
   │    └── UnsupportedInfinityPoint
   └── DecryptionFailed
"""

from __future__ import annotations

from typing import Optional


class PreError(Exception):
    """Base class for all errors raised by precrypt."""


class InvalidKeySize(PreError, ValueError):
    def __init__(self, size: int):
        super().__init__(f"Invalid key size: {size} (must be 16, 24, or 32 bytes)")
        self.size = size


class InvalidScalar(PreError, ValueError):
    """Scalar outside [0, order)."""


class NonInvertibleScalar(PreError, ValueError):
    """Scalar has no inverse modulo the group order (i.e. it is zero)."""


class EmptyInputMaterial(PreError, ValueError):
    """Key derivation was handed zero bytes of input keying material."""


class ValidationError(PreError, ValueError):
    """Upload rejected by the file-type / size policy."""


class InvalidEncoding(PreError, ValueError):
    """Malformed tag bits, non-canonical field element, or off-curve point."""


class InvalidLength(InvalidEncoding):
    def __init__(self, what: str, expected: int, actual: int,
                 detail: Optional[str] = None):
        msg = f"Invalid byte length for {what}: expected {expected}, got {actual}"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)
        self.what = what
        self.expected = expected
        self.actual = actual


class UnsupportedInfinityPoint(InvalidEncoding):
    def __init__(self, what: str = "point"):
        super().__init__(f"Infinity point not supported for {what}")
        self.what = what


class DecryptionFailed(PreError):
    """AEAD authentication failed or the envelope was truncated."""
