# internals/errors.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from ecgen.internals.report import Span, Reporter


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class Category(str, Enum):
    GENERAL   = "general"
    ARITY     = "arity"
    NAME      = "name"
    PARSE     = "parse"
    CONFIG    = "config"
    IO        = "io"
    INTERNAL  = "internal"


@dataclass(frozen=True)
class ErrorMessage:
    code: str
    severity: Severity
    text: str
    category: Category = Category.GENERAL
    doc: str = ""

    def format(self, **kwargs) -> str:
        return _fmt(self.code, **kwargs)


REGISTRY: Dict[str, ErrorMessage] = {}

class _ErrorCatalog:
    def __init__(self, backing: Dict[str, ErrorMessage]) -> None:
        self._registry = backing

    def __getattr__(self, name: str) -> ErrorMessage:
        try:
            return self._registry[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __getitem__(self, code: str) -> ErrorMessage:
        return self._registry[code]

    def __contains__(self, code: str) -> bool:
        return code in self._registry


ERR = _ErrorCatalog(REGISTRY)

def emit(r: Reporter, em: ErrorMessage, span: Optional[Span], **kwargs) -> None:
    text = _fmt(em.code, **kwargs)
    if em.severity == Severity.ERROR:
        r.error(em.code, text, span)
    else:
        r.warn(em.code, text, span)

def raise_internal_error(code: str, **kwargs) -> None:
    """Raise a RuntimeError for internal generator errors.

    Internal errors (EG9xxx codes) indicate generator bugs, not problems in
    the user's declarations.

    Raises:
        RuntimeError: Always raises with formatted error message
    """
    text = _fmt(code, **kwargs)
    raise RuntimeError(f"{code}: {text}")


#
# --- Helpers
#

def _add(msg: ErrorMessage) -> None:
    if msg.code in REGISTRY:
        raise ValueError(f"duplicate error code {REGISTRY[msg.code]} in {msg}")
    REGISTRY[msg.code] = msg

def _get(code: str) -> ErrorMessage:
    try:
        return REGISTRY[code]
    except KeyError:
        raise KeyError(f"unknown error code: {code}")

def _fmt(code: str, **kwargs) -> str:
    msg = _get(code)
    try:
        return msg.text.format(**kwargs)
    except KeyError as key_error:
        missing = key_error.args[0]
        raise KeyError(f"missing text key '{missing}' for {code} "
                       f"(needed by: {msg.text!r})") from None

#
# --- Registry population
#

# Declaration shape (EG0001-EG0099)
_add(ErrorMessage("EG0001", Severity.ERROR,
    "no member was specified for this enum type",
    Category.ARITY, "The invocation carries a type name but no (name, message) pairs."))

_add(ErrorMessage("EG0002", Severity.ERROR,
    "argument count does not pair evenly into name/message tuples",
    Category.ARITY, "Every symbolic name must be followed by exactly one message."))

_add(ErrorMessage("EG0003", Severity.ERROR,
    "{count} argument(s) exceed the supported maximum of {limit} ({pairs} pair(s))",
    Category.ARITY, "Raise `max_pairs` in ecgen.toml or split the declaration."))

_add(ErrorMessage("EG0004", Severity.ERROR,
    "member name {name!r} at argument {index} is not a C identifier",
    Category.NAME, "Member names are pasted into identifiers and must match [A-Za-z_][A-Za-z0-9_]*."))

_add(ErrorMessage("EG0005", Severity.ERROR,
    "type name {name!r} is not a C identifier",
    Category.NAME, "Both spellings of the type name are pasted into identifiers."))

_add(ErrorMessage("EG0006", Severity.ERROR,
    "message at argument {index} must be a string literal, got {got!r}",
    Category.NAME, "Message positions hold string literals; identifiers go in name positions."))

# Source parsing (EG1001-EG1099)
_add(ErrorMessage("EG1001", Severity.ERROR,
    "syntax error: {detail}",
    Category.PARSE, "The source does not match the invocation grammar."))

_add(ErrorMessage("EG1002", Severity.ERROR,
    "unknown generator macro '{name}', expected '{expected}'",
    Category.PARSE, "Invocations must use the configured macro_name."))

_add(ErrorMessage("EG1003", Severity.WARNING,
    "source declares no invocations",
    Category.PARSE, "Nothing will be generated from this file."))

_add(ErrorMessage("EG1004", Severity.ERROR,
    "cannot read {path}: {reason}",
    Category.IO, "The source file could not be opened."))

_add(ErrorMessage("EG1005", Severity.ERROR,
    "cannot write {path}: {reason}",
    Category.IO, "The output file could not be written."))

# Configuration (EG2001-EG2099)
_add(ErrorMessage("EG2001", Severity.ERROR,
    "invalid max_pairs {value!r}, must be an integer between 1 and {limit}",
    Category.CONFIG, "The rule table ceiling is bounded."))

_add(ErrorMessage("EG2002", Severity.ERROR,
    "invalid {key} {value!r}, must be a C identifier",
    Category.CONFIG, "macro_name and prefix are pasted into identifiers."))

_add(ErrorMessage("EG2003", Severity.ERROR,
    "invalid string_type {value!r}",
    Category.CONFIG, "The table element type must be a non-empty C type spelling."))

_add(ErrorMessage("EG2004", Severity.ERROR,
    "cannot load {path}: {reason}",
    Category.CONFIG, "ecgen.toml is missing or is not valid TOML."))

_add(ErrorMessage("EG2005", Severity.ERROR,
    "invalid {key} {value!r}, must be a non-empty path string",
    Category.CONFIG, "output and header name files to write."))

# Internal (EG9001-EG9099)
_add(ErrorMessage("EG9001", Severity.ERROR,
    "no rule registered for {count} argument(s) in the {pass_name} pass",
    Category.INTERNAL, "The rule table was built with a gap."))

_add(ErrorMessage("EG9002", Severity.ERROR,
    "unexpected parse tree node '{node}'",
    Category.INTERNAL, "The AST builder met a node the grammar should not produce."))

_add(ErrorMessage("EG9003", Severity.ERROR,
    "table pass produced {slots} slot(s) for {members} enum member(s)",
    Category.INTERNAL, "Both passes must splice the same pair list."))

_add(ErrorMessage("EG9004", Severity.ERROR,
    "table designator '{designator}' does not match enum member '{member}'",
    Category.INTERNAL, "Both passes must splice the same pair list in the same order."))
