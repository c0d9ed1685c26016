"""Source-file generation: parse, expand every invocation, render."""
from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional

from ecgen import __version__
from ecgen.backend.constants import GENERATED_BANNER
from ecgen.compiler.config import GeneratorConfig
from ecgen.compiler.facade import Generator, render_units
from ecgen.dispatch.exceptions import GenerationError
from ecgen.internals import errors as er
from ecgen.internals.parse_errors import handle_parse_exception
from ecgen.internals.parser import parse_to_ast
from ecgen.internals.report import Reporter
from ecgen.semantics.ast import GeneratedUnit, Program


class SourceGenerationError(Exception):
    """Raised by generate_source when any invocation failed."""

    def __init__(self, reporter: Reporter) -> None:
        self.reporter = reporter
        super().__init__(reporter.format(use_color=False, use_unicode=False))

    @property
    def codes(self) -> List[str]:
        return self.reporter.codes()


def generate_program(program: Program, reporter: Reporter,
                     config: GeneratorConfig, verbose: bool = False) -> List[GeneratedUnit]:
    """Expand every invocation, reporting each failure.

    All invocations are attempted so one run reports every broken
    declaration; callers must discard the result if reporter.has_errors.
    """
    generator = Generator(config)
    units: List[GeneratedUnit] = []

    if not program.invocations:
        er.emit(reporter, er.ERR.EG1003, None)

    for inv in program.invocations:
        if inv.macro != config.macro_name:
            er.emit(reporter, er.ERR.EG1002, inv.macro_span,
                    name=inv.macro, expected=config.macro_name)
            continue
        try:
            unit = generator.generate_invocation(inv)
        except GenerationError as e:
            if e.span is None:
                e.span = inv.loc
            e.report(reporter)
            continue
        if verbose:
            print(f"  - {unit.enum.name}: {len(unit.enum)} member(s)")
        units.append(unit)

    return units


def compile_source(src: str, reporter: Reporter, config: GeneratorConfig,
                   dump_parse: bool = False, dump_ast: bool = False,
                   verbose: bool = False) -> Optional[List[GeneratedUnit]]:
    """Parse and expand `src`; None when any error was reported."""
    try:
        program, _ = parse_to_ast(src, dump_parse=dump_parse)
    except Exception as exc:
        if handle_parse_exception(exc, reporter):
            return None
        raise

    if dump_ast:
        print(program)
        print()

    units = generate_program(program, reporter, config, verbose=verbose)
    if reporter.has_errors:
        return None
    return units


def generate_source(text: str, config: Optional[GeneratorConfig] = None,
                    filename: str = "<input>") -> str:
    """Render every invocation in `text` as C declarations.

    Raises:
        SourceGenerationError: if any invocation failed; nothing is returned.
    """
    reporter = Reporter(source=text, filename=filename)
    units = compile_source(text, reporter, config or GeneratorConfig())
    if units is None:
        raise SourceGenerationError(reporter)
    return render_units(units)


def include_guard(output: Path, config: GeneratorConfig) -> str:
    if config.guard:
        return config.guard
    stem = re.sub(r"[^A-Za-z0-9_]", "_", output.name).upper()
    return stem if not stem[:1].isdigit() else f"_{stem}"


def render_header(units: List[GeneratedUnit], output: Path, config: GeneratorConfig) -> str:
    guard = include_guard(output, config)
    lines = [
        GENERATED_BANNER.format(version=__version__),
        f"#ifndef {guard}",
        f"#define {guard}",
        "",
        render_units(units).rstrip("\n"),
        "",
        f"#endif /* {guard} */",
    ]
    return "\n".join(lines) + "\n"
