"""Enumeration declaration emitter."""
from __future__ import annotations

from typing import Sequence

from ecgen.semantics.ast import EnumDeclaration, EnumMember, TypeSpec


class EnumEmitter:
    """Builds `enum <lower>_error_codes {...};` from the enum-pass splice.

    Ordinals are implicit: they follow declaration order starting at 0,
    exactly as a C compiler assigns them, so no `= N` is ever written.
    """

    def build(self, type_spec: TypeSpec, members: Sequence[str]) -> EnumDeclaration:
        return EnumDeclaration(
            name=type_spec.enum_name,
            members=tuple(EnumMember(ident, ordinal) for ordinal, ident in enumerate(members)),
        )

    def render(self, decl: EnumDeclaration) -> str:
        body = ", ".join(decl.identifiers)
        return f"enum {decl.name} {{{body}}};"

    def emit(self, type_spec: TypeSpec, members: Sequence[str]) -> tuple[EnumDeclaration, str]:
        decl = self.build(type_spec, members)
        return decl, self.render(decl)
