"""Cache management for incremental generation.

Manages the __ecgen_cache__/ directory, its manifest, and per-output
fingerprints so unchanged outputs are not rewritten (keeping build systems
that watch mtimes quiet).
"""
from __future__ import annotations

import hashlib
import json
import shutil
from pathlib import Path
from typing import Optional

from ecgen import __version__ as generator_version


CACHE_DIR_NAME = "__ecgen_cache__"
MANIFEST_NAME = "cache.json"
OUTPUTS_DIR = "outputs"


class CacheManager:
    """Tracks which outputs were produced from which fingerprint.

    Directory layout::

        __ecgen_cache__/
            cache.json                  -- manifest (generator version)
            outputs/
                <sha1 of path>.fingerprint
    """

    def __init__(self, project_root: Path, cache_dir: Optional[Path] = None) -> None:
        self.project_root = project_root
        self.cache_path = cache_dir or (project_root / CACHE_DIR_NAME)
        self.outputs_path = self.cache_path / OUTPUTS_DIR
        self._manifest: Optional[dict] = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def is_valid(self) -> bool:
        """Check whether the cache exists and was written by this version."""
        manifest = self._read_manifest()
        if manifest is None:
            return False
        return manifest.get("generator_version") == generator_version

    def ensure_dirs(self) -> None:
        self.outputs_path.mkdir(parents=True, exist_ok=True)

    def write_manifest(self) -> None:
        self.ensure_dirs()
        manifest = {"generator_version": generator_version}
        manifest_path = self.cache_path / MANIFEST_NAME
        manifest_path.write_text(json.dumps(manifest, indent=2), encoding="utf-8")
        self._manifest = manifest

    def wipe(self) -> None:
        """Remove the entire cache directory."""
        if self.cache_path.exists():
            shutil.rmtree(self.cache_path)
        self._manifest = None

    def prepare(self) -> None:
        """Wipe a stale cache and make sure a fresh manifest exists."""
        if not self.is_valid():
            self.wipe()
            self.write_manifest()

    def is_up_to_date(self, output: Path, fingerprint: str) -> bool:
        if not output.exists():
            return False
        return self._read_fingerprint(output) == fingerprint

    def record(self, output: Path, fingerprint: str) -> None:
        fp = self._fingerprint_path(output)
        fp.parent.mkdir(parents=True, exist_ok=True)
        fp.write_text(fingerprint, encoding="utf-8")

    def write_if_changed(self, output: Path, text: str, fingerprint: str) -> bool:
        """Write `text` unless the output is current; True if written."""
        if self.is_up_to_date(output, fingerprint):
            return False
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
        self.record(output, fingerprint)
        return True

    # ------------------------------------------------------------------
    # Fingerprint persistence (one sidecar per output path)
    # ------------------------------------------------------------------

    def _fingerprint_path(self, output: Path) -> Path:
        key = hashlib.sha1(str(output.resolve()).encode("utf-8")).hexdigest()
        return self.outputs_path / f"{key}.fingerprint"

    def _read_fingerprint(self, output: Path) -> Optional[str]:
        fp = self._fingerprint_path(output)
        return fp.read_text(encoding="utf-8").strip() if fp.exists() else None

    # ------------------------------------------------------------------
    # Manifest I/O
    # ------------------------------------------------------------------

    def _read_manifest(self) -> Optional[dict]:
        if self._manifest is not None:
            return self._manifest
        manifest_path = self.cache_path / MANIFEST_NAME
        if not manifest_path.exists():
            return None
        try:
            self._manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
            return self._manifest
        except (json.JSONDecodeError, OSError):
            return None
