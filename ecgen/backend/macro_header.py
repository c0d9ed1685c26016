"""Preprocessor header backend.

Emits a C header that performs the same arity dispatch as the Python
generator, but inside the C preprocessor, so C sources can write

    ECGEN(hello, HELLO, HI, "HI")

directly. The header is built from five macro families:

    <M>___ARGS__<p>_<n>     one rule per pass p and argument count n
    <M>___ARGS__<p>         the counter: picks the rule name that lands in
                            the slot after the last real argument
    <M>___DECLARE__<p>      wraps spliced pairs in the enum/table declaration
    <M>___GENERATOR__<p>    applies the selected rule to the arguments
    <M>                     the facade, expanding both generators in order

Error rules expand to a file-scope static_assert carrying the fixed message.
"""
from __future__ import annotations

from typing import List, Optional

from ecgen import __version__
from ecgen.backend import c_literals
from ecgen.backend.constants import (
    COUNT_SENTINEL,
    DEFAULT_MACRO_NAME,
    DEFAULT_STRING_TYPE,
    ENUM_SUFFIX,
    GENERATED_BANNER,
    NO_ARGS_TEXT,
    TABLE_SUFFIX,
    UNPARITY_TEXT,
)
from ecgen.backend.table_emitter import declarator
from ecgen.dispatch.arity import ArityCounter, DEFAULT_MAX_PAIRS
from ecgen.dispatch.rules import EmptyRule, Pass, RuleTable, UnparityRule

LOWER = "lowercase_name"
UPPER = "UPPERCASE_NAME"


class MacroHeaderEmitter:
    def __init__(self, macro_name: str = DEFAULT_MACRO_NAME,
                 max_pairs: int = DEFAULT_MAX_PAIRS,
                 prefix: str = "",
                 string_type: str = DEFAULT_STRING_TYPE,
                 guard: Optional[str] = None) -> None:
        self.macro = macro_name
        self.counter = ArityCounter(max_pairs)
        self.prefix = prefix
        self.string_type = string_type
        self.guard = guard or f"{macro_name.upper()}_H"

    # ------------------------------------------------------------------
    # Names
    # ------------------------------------------------------------------

    def rule_name(self, pass_: Pass, count: int) -> str:
        return f"{self.macro}___ARGS__{pass_.value}_{count}"

    def counter_name(self, pass_: Pass) -> str:
        return f"{self.macro}___ARGS__{pass_.value}"

    def generator_name(self, pass_: Pass) -> str:
        return f"{self.macro}___GENERATOR__{pass_.value}"

    def declare_name(self, pass_: Pass) -> str:
        return f"{self.macro}___DECLARE__{pass_.value}"

    @property
    def error_macro(self) -> str:
        return f"{self.macro}_ERROR"

    def _member_paste(self, param: str) -> str:
        if self.prefix:
            return f"{self.prefix.upper()}_ ## {UPPER} ## _ ## {param}"
        return f"{UPPER} ## _ ## {param}"

    def _type_paste(self, suffix: str) -> str:
        if self.prefix:
            return f"{self.prefix.lower()}_ ## {LOWER} ## {suffix}"
        return f"{LOWER} ## {suffix}"

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _preamble(self) -> List[str]:
        return [
            GENERATED_BANNER.format(version=__version__),
            f"#ifndef {self.guard}",
            f"#define {self.guard}",
            "",
            "#include <assert.h>",
            "",
            f"#define {self.error_macro}(message) static_assert(0, message);",
            f"#define {self.error_macro}_MESSAGE_UNPARITY "
            f"{c_literals.encode(f'{self.macro}: {UNPARITY_TEXT}')}",
            f"#define {self.error_macro}_MESSAGE_NO_ARGS "
            f"{c_literals.encode(f'{self.macro}: {NO_ARGS_TEXT}')}",
            "",
        ]

    def _splice(self, pass_: Pass, params: List[str]) -> str:
        names, messages = params[0::2], params[1::2]
        if pass_ is Pass.ENUM:
            return ", ".join(self._member_paste(n) for n in names)
        return ", ".join(
            f"[{self._member_paste(n)}] = {m}" for n, m in zip(names, messages)
        )

    def _rule(self, pass_: Pass, table: RuleTable, count: int) -> str:
        params = [f"_{i}" for i in range(count)]
        rule = table.rules[count]
        if isinstance(rule, EmptyRule):
            signature = f"{LOWER}, {UPPER}, ..."
            body = f"{self.error_macro}({self.error_macro}_MESSAGE_NO_ARGS)"
        elif isinstance(rule, UnparityRule):
            signature = ", ".join([LOWER, UPPER] + params)
            body = f"{self.error_macro}({self.error_macro}_MESSAGE_UNPARITY)"
        else:
            signature = ", ".join([LOWER, UPPER] + params)
            body = f"{self.declare_name(pass_)}({LOWER}, {self._splice(pass_, params)})"
        return f"#define {self.rule_name(pass_, count)}({signature}) {body}"

    def _pass_block(self, pass_: Pass) -> List[str]:
        table = RuleTable(pass_, self.counter)
        lines = [self._rule(pass_, table, n) for n in range(len(table))]
        slots = ", ".join(f"_{i}" for i in range(self.counter.ceiling + 1))
        lines.append(f"#define {self.counter_name(pass_)}({slots}, NAME, ...) NAME")
        lines.append("")
        return lines

    def _declarations(self) -> List[str]:
        enum_decl = f"enum {self._type_paste(ENUM_SUFFIX)}"
        table_decl = declarator(self.string_type, self._type_paste(TABLE_SUFFIX))
        return [
            f"#define {self.declare_name(Pass.ENUM)}({LOWER}, ...) {enum_decl} {{__VA_ARGS__}};",
            f"#define {self.declare_name(Pass.TABLE)}({LOWER}, ...) {table_decl}[] = {{__VA_ARGS__}};",
            "",
        ]

    def _generators(self) -> List[str]:
        gen_args = f"{LOWER}, {UPPER}, GEN, ..."
        call = f"GEN({LOWER}, {UPPER}, __VA_ARGS__)"
        return [
            f"#define {self.generator_name(p)}({gen_args}) {call}" for p in (Pass.ENUM, Pass.TABLE)
        ] + [""]

    def _dispatch(self, pass_: Pass) -> str:
        rules = ", ".join(self.rule_name(pass_, n) for n in self.counter.markers())
        selected = f"{self.counter_name(pass_)}({COUNT_SENTINEL}, ##__VA_ARGS__, {rules})"
        return f"{self.generator_name(pass_)}({LOWER}, {UPPER}, {selected}, __VA_ARGS__)"

    def _facade(self) -> List[str]:
        return [
            f"#define {self.macro}({LOWER}, {UPPER}, ...) "
            f"{self._dispatch(Pass.ENUM)} {self._dispatch(Pass.TABLE)}",
            "",
        ]

    def render(self) -> str:
        lines = self._preamble()
        lines += self._pass_block(Pass.ENUM)
        lines += self._pass_block(Pass.TABLE)
        lines += self._declarations()
        lines += self._generators()
        lines += self._facade()
        lines.append(f"#endif /* {self.guard} */")
        return "\n".join(lines) + "\n"
