"""Generation failures raised by the arity dispatcher.

Each exception is bound to one catalog entry in `ecgen.internals.errors` so
the CLI can report it through the same Reporter as parse errors, while API
callers get a plain exception carrying the code.
"""
from __future__ import annotations

from typing import Optional

from ecgen.internals import errors as er
from ecgen.internals.report import Span, Reporter


class GenerationError(Exception):
    """Base class: the invocation cannot be expanded, nothing is emitted."""

    error: er.ErrorMessage

    def __init__(self, span: Optional[Span] = None, **kwargs) -> None:
        self.span = span
        self.params = kwargs
        self.message = self.error.format(**kwargs)
        super().__init__(f"{self.error.code}: {self.message}")

    @property
    def code(self) -> str:
        return self.error.code

    def report(self, reporter: Reporter) -> None:
        er.emit(reporter, self.error, self.span, **self.params)


class EmptyDeclaration(GenerationError):
    error = er.ERR.EG0001


class UnparityError(GenerationError):
    error = er.ERR.EG0002


class UnsupportedArity(GenerationError):
    error = er.ERR.EG0003


class InvalidMemberName(GenerationError):
    error = er.ERR.EG0004


class InvalidTypeName(GenerationError):
    error = er.ERR.EG0005


class InvalidMessage(GenerationError):
    error = er.ERR.EG0006
