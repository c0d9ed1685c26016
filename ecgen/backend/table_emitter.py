"""Message table emitter (designated-index array)."""
from __future__ import annotations

from typing import Sequence, Tuple

from ecgen.backend.constants import DEFAULT_STRING_TYPE
from ecgen.internals import errors as er
from ecgen.semantics.ast import EnumDeclaration, MessageTable, TypeSpec

Slot = Tuple[str, str, str]   # (designator, message, C literal)


def declarator(string_type: str, name: str) -> str:
    """Join a C type spelling and a declarator name, `const char *` + `x` -> `const char *x`."""
    string_type = string_type.strip()
    if string_type.endswith("*"):
        return f"{string_type}{name}"
    return f"{string_type} {name}"


class TableEmitter:
    def __init__(self, string_type: str = DEFAULT_STRING_TYPE) -> None:
        self.string_type = string_type

    def build(self, type_spec: TypeSpec, slots: Sequence[Slot],
              enum: EnumDeclaration) -> MessageTable:
        """Place each slot at the ordinal its designator has in `enum`.

        Ordinals follow declaration order, so slot i must name member i;
        duplicate names are left in place for the C compiler to reject.
        """
        if len(slots) != len(enum):
            er.raise_internal_error("EG9003", slots=len(slots), members=len(enum))
        messages = {}
        designators = {}
        literals = {}
        for member, (designator, message, literal) in zip(enum.members, slots):
            if member.identifier != designator:
                er.raise_internal_error("EG9004", designator=designator, member=member.identifier)
            messages[member.ordinal] = message
            designators[member.ordinal] = designator
            literals[member.ordinal] = literal
        return MessageTable(
            name=type_spec.table_name,
            string_type=self.string_type,
            slots=messages,
            designators=designators,
            literals=literals,
        )

    def render(self, table: MessageTable) -> str:
        # literals are emitted as spelled at the call site, never re-encoded
        entries = ", ".join(
            f"[{table.designators[ordinal]}] = {table.literals[ordinal]}"
            for ordinal in sorted(table.slots)
        )
        return f"{declarator(table.string_type, table.name)}[] = {{{entries}}};"

    def emit(self, type_spec: TypeSpec, slots: Sequence[Slot],
             enum: EnumDeclaration) -> tuple[MessageTable, str]:
        table = self.build(type_spec, slots, enum)
        return table, self.render(table)
