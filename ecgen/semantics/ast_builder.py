"""Builds ecgen AST nodes from the lark parse tree."""
from __future__ import annotations

from typing import List, Optional

from lark import Token, Tree

from ecgen.backend import c_literals
from ecgen.internals import errors as er
from ecgen.internals.report import Span, span_of
from ecgen.semantics.ast import Arg, Ident, Invocation, Program, StringLit


class MalformedLiteralError(Exception):
    """A string literal the grammar accepted but whose escapes are invalid."""

    def __init__(self, detail: str, span: Optional[Span]) -> None:
        super().__init__(detail)
        self.detail = detail
        self.span = span


class ASTBuilder:
    def build(self, tree: Tree) -> Program:
        assert isinstance(tree, Tree) and tree.data == "start"
        invocations = [self.parse_invocation(ch) for ch in tree.children
                       if isinstance(ch, Tree)]
        return Program(invocations=invocations, loc=span_of(tree))

    def parse_invocation(self, t: Tree) -> Invocation:
        """invocation: NAME "(" NAME "," NAME ("," arg)* ","? ")" ";"?"""
        if t.data != "invocation":
            er.raise_internal_error("EG9002", node=t.data)
        macro, lower, upper, *rest = t.children
        return Invocation(
            macro=str(macro),
            lower=Ident(str(lower), span_of(lower)),
            upper=Ident(str(upper), span_of(upper)),
            args=[self.parse_arg(a) for a in rest],
            loc=span_of(t),
            macro_span=span_of(macro),
        )

    def parse_arg(self, t: Tree) -> Arg:
        if t.data == "ident":
            tok = t.children[0]
            return Ident(str(tok), span_of(tok))
        if t.data == "string":
            raw = " ".join(str(tok) for tok in t.children)
            return StringLit(self._join_literals(t.children), span_of(t), raw=raw)
        er.raise_internal_error("EG9002", node=t.data)

    def _join_literals(self, tokens: List[Token]) -> str:
        """Adjacent literals concatenate, as in C."""
        parts = []
        for tok in tokens:
            try:
                parts.append(c_literals.decode(str(tok)))
            except ValueError as e:
                raise MalformedLiteralError(str(e), span_of(tok)) from e
        return "".join(parts)
