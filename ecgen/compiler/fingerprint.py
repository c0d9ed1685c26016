"""Output fingerprints for incremental generation.

A fingerprint captures everything that affects one output file:
- generator version
- the settings that change generated text
- the source text (empty for the macro header, which has no source)
- the kind of output (declarations or macro header)

If the stored fingerprint matches and the file still exists, the file is
left untouched.
"""
from __future__ import annotations

import hashlib
import json
from typing import Optional

from ecgen import __version__ as generator_version
from ecgen.compiler.config import GeneratorConfig


def compute_fingerprint(kind: str, config: GeneratorConfig,
                        source: Optional[str] = None) -> str:
    """Hex SHA-256 digest over (version, kind, settings, source)."""
    hasher = hashlib.sha256()

    hasher.update(b"VERSION:")
    hasher.update(generator_version.encode())

    hasher.update(b"KIND:")
    hasher.update(kind.encode())

    # sort_keys keeps the digest stable across dict orderings
    hasher.update(b"SETTINGS:")
    hasher.update(json.dumps(config.settings(), sort_keys=True).encode())

    if source is not None:
        hasher.update(b"SOURCE:")
        hasher.update(source.encode("utf-8"))

    return hasher.hexdigest()
