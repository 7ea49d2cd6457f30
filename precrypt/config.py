# -*- coding: utf-8 -*-
"""
config.py  (runtime settings)
-----------------------------
Environment variables:
  PRE_KEY_SIZE            AES key length in bytes (16 / 24 / 32, default 32)
  PRE_MAX_UPLOAD_SIZE     upload size limit in bytes (default 10 MiB)
  PRE_ALLOWED_FILE_TYPES  comma-separated MIME types accepted by validate()
  PRE_STORE_DIR           directory used by the local object store
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple

from precrypt.aead import KEY_SIZES
from precrypt.errors import InvalidKeySize

MAX_UPLOAD_SIZE = 10 * 1024 * 1024

# MIME type -> leading magic bytes
MAGIC_NUMBERS: Dict[str, bytes] = {
    "image/png":  b"\x89PNG",
    "image/jpeg": b"\xff\xd8\xff",
    "image/jpg":  b"\xff\xd8\xff",
    "image/gif":  b"GIF",
    "image/webp": b"RIFF",
    "image/bmp":  b"BM",
    "image/tiff": b"II",
}

DEFAULT_FILE_TYPES: Tuple[str, ...] = tuple(MAGIC_NUMBERS)


@dataclass(frozen=True)
class PreConfig:
    key_size: int = 32
    max_upload_size: int = MAX_UPLOAD_SIZE
    allowed_file_types: Tuple[str, ...] = DEFAULT_FILE_TYPES
    store_dir: str = "keys/store"
    magic_numbers: Dict[str, bytes] = field(default_factory=lambda: dict(MAGIC_NUMBERS))

    def __post_init__(self) -> None:
        if self.key_size not in KEY_SIZES:
            raise InvalidKeySize(self.key_size)
        if self.max_upload_size <= 0:
            raise ValueError("max_upload_size must be positive")
        unknown = [t for t in self.allowed_file_types if t not in self.magic_numbers]
        if unknown:
            raise ValueError(f"No magic number known for file types: {unknown}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PreConfig":
        env = os.environ if environ is None else environ
        kwargs = {}
        if env.get("PRE_KEY_SIZE"):
            kwargs["key_size"] = int(env["PRE_KEY_SIZE"])
        if env.get("PRE_MAX_UPLOAD_SIZE"):
            kwargs["max_upload_size"] = int(env["PRE_MAX_UPLOAD_SIZE"])
        if env.get("PRE_ALLOWED_FILE_TYPES"):
            kwargs["allowed_file_types"] = tuple(
                t.strip() for t in env["PRE_ALLOWED_FILE_TYPES"].split(",") if t.strip()
            )
        if env.get("PRE_STORE_DIR"):
            kwargs["store_dir"] = env["PRE_STORE_DIR"]
        return cls(**kwargs)
