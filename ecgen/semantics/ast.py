# semantics/ast.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from ecgen.backend import c_literals
from ecgen.backend.constants import ENUM_SUFFIX, TABLE_SUFFIX
from ecgen.internals.report import Span

# === Source tokens ===

@dataclass(frozen=True)
class Ident:
    """Identifier argument as written at the call site."""
    text: str
    loc: Optional[Span] = None

    def __str__(self) -> str:
        return self.text

@dataclass(frozen=True)
class StringLit:
    """String literal argument.

    `value` is the decoded text; `raw` keeps the literal(s) as spelled in the
    source so generated C carries them unchanged.
    """
    value: str
    loc: Optional[Span] = None
    raw: Optional[str] = None

    def __str__(self) -> str:
        return self.value

# Anything the arity counter may see. Plain str is accepted from the Python API.
Arg = Union[Ident, StringLit, str]

# === Declarations ===

@dataclass(frozen=True)
class TypeSpec:
    lower: str                  # table/type base name, e.g. "hello"
    upper: str                  # member prefix, e.g. "HELLO"
    prefix: str = ""            # optional namespace prefix, e.g. "ya"

    @property
    def enum_name(self) -> str:
        return _prefixed(self.prefix.lower(), self.lower) + ENUM_SUFFIX

    @property
    def table_name(self) -> str:
        return _prefixed(self.prefix.lower(), self.lower) + TABLE_SUFFIX

    def member(self, name: str) -> str:
        return f"{_prefixed(self.prefix.upper(), self.upper)}_{name}"


def _prefixed(prefix: str, base: str) -> str:
    return f"{prefix}_{base}" if prefix else base

@dataclass(frozen=True)
class CodePair:
    name: str
    message: str
    name_span: Optional[Span] = None
    message_span: Optional[Span] = None
    literal: Optional[str] = None   # source spelling of the message

    @property
    def c_literal(self) -> str:
        return self.literal if self.literal is not None else c_literals.encode(self.message)

@dataclass(frozen=True)
class EnumMember:
    identifier: str
    ordinal: int

@dataclass(frozen=True)
class EnumDeclaration:
    name: str
    members: Tuple[EnumMember, ...]

    def __len__(self) -> int:
        return len(self.members)

    def ordinal_of(self, identifier: str) -> int:
        for m in self.members:
            if m.identifier == identifier:
                return m.ordinal
        raise KeyError(identifier)

    @property
    def identifiers(self) -> List[str]:
        return [m.identifier for m in self.members]

@dataclass(frozen=True)
class MessageTable:
    """Designated-index message table keyed by ordinal."""
    name: str
    string_type: str
    slots: Dict[int, str] = field(default_factory=dict)
    designators: Dict[int, str] = field(default_factory=dict)
    literals: Dict[int, str] = field(default_factory=dict)

    def __getitem__(self, ordinal: int) -> str:
        return self.slots[ordinal]

    def __len__(self) -> int:
        return max(self.slots) + 1 if self.slots else 0

    def dense(self, default: Optional[str] = None) -> List[Optional[str]]:
        """Positional view; indices never designated hold `default`."""
        return [self.slots.get(i, default) for i in range(len(self))]

# === Program structure ===

@dataclass
class Invocation:
    macro: str
    lower: Ident
    upper: Ident
    args: List[Arg]
    loc: Optional[Span] = None
    macro_span: Optional[Span] = None

@dataclass
class Program:
    invocations: List[Invocation]
    loc: Optional[Span] = None

@dataclass(frozen=True)
class GeneratedUnit:
    type_spec: TypeSpec
    pairs: Tuple[CodePair, ...]
    enum: EnumDeclaration
    table: MessageTable
    enum_source: str
    table_source: str

    @property
    def source(self) -> str:
        return f"{self.enum_source}\n{self.table_source}\n"
