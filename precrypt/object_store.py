# -*- coding: utf-8 -*-
"""
object_store.py  (local stand-in for the remote ciphertext store)
-----------------------------------------------------------------
Layout on disk:

  <root>/<object_id>/v1.json        second-level bundle as uploaded
  <root>/<object_id>/v2.json ...    later versions (e.g. re-encrypted copies)
  <root>/<object_id>/latest.json    {"latest_version": N}
"""

import json
import uuid
from pathlib import Path
from typing import Any, Dict, Optional


class FileObjectStore:

    def __init__(self, root_dir: str):
        self.root_dir = Path(root_dir)
        self.root_dir.mkdir(parents=True, exist_ok=True)

    def _obj_dir(self, object_id: str) -> Path:
        # object ids are uuid strings; anything else could escape root_dir
        try:
            canonical = str(uuid.UUID(object_id))
        except ValueError as e:
            raise ValueError(f"invalid object_id: {object_id!r}") from e
        return self.root_dir / canonical

    def latest_version(self, object_id: str) -> int:
        latest_path = self._obj_dir(object_id) / "latest.json"
        if not latest_path.exists():
            raise FileNotFoundError(f"latest.json not found for object_id={object_id}")
        return int(json.loads(latest_path.read_text(encoding="utf-8"))["latest_version"])

    def put(self, record: Dict[str, Any], object_id: Optional[str] = None) -> str:
        """Store record as the next version of object_id (a new object if None)."""
        if object_id is None:
            object_id = str(uuid.uuid4())
            version = 1
        else:
            version = self.latest_version(object_id) + 1

        obj_dir = self._obj_dir(object_id)
        obj_dir.mkdir(parents=True, exist_ok=True)

        ver_path = obj_dir / f"v{version}.json"
        ver_path.write_text(json.dumps(record, ensure_ascii=False, indent=2), encoding="utf-8")

        latest_path = obj_dir / "latest.json"
        latest_path.write_text(json.dumps({"latest_version": version}, ensure_ascii=False, indent=2), encoding="utf-8")
        return object_id

    def get(self, object_id: str, version: Optional[int] = None) -> Dict[str, Any]:
        if version is None:
            version = self.latest_version(object_id)

        ver_path = self._obj_dir(object_id) / f"v{int(version)}.json"
        if not ver_path.exists():
            raise FileNotFoundError(f"record not found: {ver_path}")
        return json.loads(ver_path.read_text(encoding="utf-8"))
