"""Invocation facade: one declaration in, enum + message table out.

The same argument list is run through the enum-pass and table-pass rule
tables. Both expansions finish before anything is rendered, so a failing
invocation never yields an enum without its table or the reverse.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from ecgen.backend.enum_emitter import EnumEmitter
from ecgen.backend.table_emitter import TableEmitter
from ecgen.compiler.config import GeneratorConfig
from ecgen.dispatch.arity import ArityCounter
from ecgen.dispatch.exceptions import InvalidTypeName
from ecgen.dispatch.rules import IDENTIFIER, Pass, RuleTable
from ecgen.internals.report import Span
from ecgen.semantics.ast import Arg, GeneratedUnit, Invocation, TypeSpec


class Generator:
    def __init__(self, config: Optional[GeneratorConfig] = None) -> None:
        self.config = config or GeneratorConfig()
        self.counter = ArityCounter(self.config.max_pairs)
        self.enum_rules = RuleTable(Pass.ENUM, self.counter)
        self.table_rules = RuleTable(Pass.TABLE, self.counter)
        self.enum_emitter = EnumEmitter()
        self.table_emitter = TableEmitter(self.config.string_type)

    def type_spec(self, lower: str, upper: str,
                  lower_span: Optional[Span] = None,
                  upper_span: Optional[Span] = None) -> TypeSpec:
        for name, span in ((lower, lower_span), (upper, upper_span)):
            if not isinstance(name, str) or not IDENTIFIER.match(name):
                raise InvalidTypeName(span, name=name)
        return TypeSpec(lower=lower, upper=upper, prefix=self.config.prefix)

    def generate(self, lower: str, upper: str, args: Sequence[Arg]) -> GeneratedUnit:
        return self._expand(self.type_spec(lower, upper), list(args))

    def generate_invocation(self, invocation: Invocation) -> GeneratedUnit:
        lower, upper = invocation.lower, invocation.upper
        type_spec = self.type_spec(lower.text, upper.text, lower.loc, upper.loc)
        return self._expand(type_spec, list(invocation.args))

    def _expand(self, type_spec: TypeSpec, args: List[Arg]) -> GeneratedUnit:
        pairs, members = self.enum_rules.expand(type_spec, args)
        _, slots = self.table_rules.expand(type_spec, args)

        enum, enum_source = self.enum_emitter.emit(type_spec, members)
        table, table_source = self.table_emitter.emit(type_spec, slots, enum)
        return GeneratedUnit(
            type_spec=type_spec,
            pairs=pairs,
            enum=enum,
            table=table,
            enum_source=enum_source,
            table_source=table_source,
        )


def generate(lower: str, upper: str, *args: Arg,
             config: Optional[GeneratorConfig] = None) -> GeneratedUnit:
    """Generate one enum/table pair.

    >>> unit = generate("hello", "HELLO", "HI", "HI")
    >>> print(unit.source, end="")
    enum hello_error_codes {HELLO_HI};
    const char *hello_conversion_table[] = {[HELLO_HI] = "HI"};
    """
    return Generator(config).generate(lower, upper, args)


def render_units(units: Iterable[GeneratedUnit]) -> str:
    return "\n".join(unit.source for unit in units)
