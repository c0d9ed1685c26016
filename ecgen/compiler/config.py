"""ecgen.toml loading and validation."""
from __future__ import annotations

import re
import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional

from ecgen.backend.constants import DEFAULT_MACRO_NAME, DEFAULT_STRING_TYPE
from ecgen.dispatch.arity import DEFAULT_MAX_PAIRS, MAX_PAIRS_LIMIT
from ecgen.internals import errors as er

CONFIG_NAME = "ecgen.toml"

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# A C type spelling: words, spaces and pointer stars, e.g. "const char *".
STRING_TYPE_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_ ]*\**\s*$")


class ConfigError(Exception):
    def __init__(self, error: er.ErrorMessage, **kwargs) -> None:
        self.error = error
        super().__init__(f"{error.code}: {error.format(**kwargs)}")

    @property
    def code(self) -> str:
        return self.error.code


@dataclass(frozen=True)
class GeneratorConfig:
    macro_name: str = DEFAULT_MACRO_NAME
    max_pairs: int = DEFAULT_MAX_PAIRS
    prefix: str = ""
    string_type: str = DEFAULT_STRING_TYPE
    output: Optional[str] = None
    header: Optional[str] = None
    guard: Optional[str] = None

    def validate(self) -> None:
        if (isinstance(self.max_pairs, bool) or not isinstance(self.max_pairs, int)
                or not 1 <= self.max_pairs <= MAX_PAIRS_LIMIT):
            raise ConfigError(er.ERR.EG2001, value=self.max_pairs, limit=MAX_PAIRS_LIMIT)
        if not isinstance(self.macro_name, str) or not IDENTIFIER_PATTERN.match(self.macro_name):
            raise ConfigError(er.ERR.EG2002, key="macro_name", value=self.macro_name)
        if not isinstance(self.prefix, str) or (self.prefix and not IDENTIFIER_PATTERN.match(self.prefix)):
            raise ConfigError(er.ERR.EG2002, key="prefix", value=self.prefix)
        if self.guard is not None and (not isinstance(self.guard, str)
                                       or self.guard and not IDENTIFIER_PATTERN.match(self.guard)):
            raise ConfigError(er.ERR.EG2002, key="guard", value=self.guard)
        if not isinstance(self.string_type, str) or not STRING_TYPE_PATTERN.match(self.string_type):
            raise ConfigError(er.ERR.EG2003, value=self.string_type)
        for key in ("output", "header"):
            value = getattr(self, key)
            if value is not None and (not isinstance(value, str) or not value):
                raise ConfigError(er.ERR.EG2005, key=key, value=value)

    def with_overrides(self, **overrides) -> "GeneratorConfig":
        """Return a validated copy; `None` values leave the field unchanged."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        config = replace(self, **changes)
        config.validate()
        return config

    def settings(self) -> dict:
        """Values that affect generated text (for fingerprints)."""
        return {
            "macro_name": self.macro_name,
            "max_pairs": self.max_pairs,
            "prefix": self.prefix,
            "string_type": self.string_type,
            "guard": self.guard,
        }


def find_config(directory: Path) -> Optional[Path]:
    candidate = directory / CONFIG_NAME
    return candidate if candidate.is_file() else None


def load_config(path: Optional[Path] = None) -> GeneratorConfig:
    """Load and validate a config file; no path means defaults."""
    if path is None:
        return GeneratorConfig()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigError(er.ERR.EG2004, path=path, reason=e.strerror or e) from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(er.ERR.EG2004, path=path, reason=e) from e
    return _parse_config(data)


def load_config_from_string(text: str) -> GeneratorConfig:
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(er.ERR.EG2004, path="<string>", reason=e) from e
    return _parse_config(data)


def _parse_config(data: dict) -> GeneratorConfig:
    section = data.get("generator", {})
    if not isinstance(section, dict):
        raise ConfigError(er.ERR.EG2004, path=CONFIG_NAME, reason="[generator] must be a table")
    known = {f.name for f in fields(GeneratorConfig)}
    unknown = sorted(set(section) - known)
    if unknown:
        raise ConfigError(er.ERR.EG2004, path=CONFIG_NAME,
                          reason=f"unknown key(s) in [generator]: {', '.join(unknown)}")
    config = GeneratorConfig(**section)
    config.validate()
    return config
