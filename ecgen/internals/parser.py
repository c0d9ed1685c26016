"""Lark parser setup and AST construction."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from lark import Lark

from ecgen.semantics.ast import Program
from ecgen.semantics.ast_builder import ASTBuilder

GRAMMAR_PATH = Path(__file__).parent.parent / "grammar.lark"

_parser: Optional[Lark] = None


def get_parser() -> Lark:
    global _parser
    if _parser is None:
        _parser = Lark.open(
            str(GRAMMAR_PATH),
            parser="lalr",
            lexer="basic",
            propagate_positions=True,
            maybe_placeholders=False,
        )
    return _parser


def parse_to_ast(src: str, dump_parse: bool = False) -> tuple[Program, object]:
    """Parse source text into an AST.

    Returns:
        Tuple of (ast, parse_tree).
    """
    tree = get_parser().parse(src)
    if dump_parse:
        print(tree.pretty())
    return ASTBuilder().build(tree), tree
