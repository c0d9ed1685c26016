"""Shared parse exception handling for the pipeline and CLI."""
from __future__ import annotations

from lark import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from ecgen.internals import errors as er
from ecgen.internals.report import Reporter, Span
from ecgen.semantics.ast_builder import MalformedLiteralError


def describe_unexpected(exc: UnexpectedInput) -> str:
    if isinstance(exc, UnexpectedEOF):
        return "unexpected end of input"
    if isinstance(exc, UnexpectedToken):
        expected = ", ".join(sorted(exc.expected)) if exc.expected else "nothing"
        if exc.token.type == "$END":
            return f"unexpected end of input, expected one of: {expected}"
        return f"unexpected {str(exc.token)!r}, expected one of: {expected}"
    if isinstance(exc, UnexpectedCharacters):
        return f"unexpected character {exc.char!r}"
    return str(exc).splitlines()[0]


def handle_parse_exception(exc: Exception, reporter: Reporter) -> bool:
    """Emit a diagnostic for a parse-time exception.

    Returns:
        True if the exception was handled, False otherwise.
    """
    if isinstance(exc, MalformedLiteralError):
        er.emit(reporter, er.ERR.EG1001, exc.span, detail=exc.detail)
        return True

    if isinstance(exc, UnexpectedInput):
        span = None
        line = getattr(exc, "line", -1)
        column = getattr(exc, "column", -1)
        if line is not None and line > 0 and column is not None and column > 0:
            span = Span(line, column, line, column + 1)
        er.emit(reporter, er.ERR.EG1001, span, detail=describe_unexpected(exc))
        return True

    return False
