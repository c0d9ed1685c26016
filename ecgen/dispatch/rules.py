"""Rule table: one expansion rule per supported argument count.

Counts map onto three rule kinds:

- 0            -> EmptyRule     (EG0001)
- odd          -> UnparityRule  (EG0002)
- even, >= 2   -> splice rule   (pairs the arguments)

The enum pass and the table pass build separate tables from the same
counter, so both agree on every count and differ only in what a splice
produces: member identifiers for the enum, (designator, message, literal)
slots for the table.
"""
from __future__ import annotations

import re
from enum import Enum
from typing import Dict, List, Sequence, Tuple, Union

from ecgen.dispatch.arity import ArityCounter
from ecgen.dispatch.exceptions import (
    EmptyDeclaration,
    InvalidMemberName,
    InvalidMessage,
    UnparityError,
)
from ecgen.internals import errors as er
from ecgen.semantics.ast import Arg, CodePair, Ident, StringLit, TypeSpec

IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class Pass(Enum):
    ENUM = 0
    TABLE = 1


EnumSplice = List[str]
TableSplice = List[Tuple[str, str, str]]   # (designator, message, C literal)
Splice = Union[EnumSplice, TableSplice]


class Rule:
    def __init__(self, count: int) -> None:
        self.count = count

    def apply(self, type_spec: TypeSpec, args: Sequence[Arg]) -> Tuple[Tuple[CodePair, ...], Splice]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.count})"


class EmptyRule(Rule):
    def apply(self, type_spec, args):
        raise EmptyDeclaration(None)


class UnparityRule(Rule):
    def apply(self, type_spec, args):
        raise UnparityError(getattr(args[-1], "loc", None))


class SpliceRule(Rule):
    @property
    def pairs(self) -> int:
        return self.count // 2

    def apply(self, type_spec, args):
        pairs = pair_up(args)
        return pairs, self.splice(type_spec, pairs)

    def splice(self, type_spec: TypeSpec, pairs: Sequence[CodePair]) -> Splice:
        raise NotImplementedError


class EnumSpliceRule(SpliceRule):
    def splice(self, type_spec, pairs):
        return [type_spec.member(p.name) for p in pairs]


class TableSpliceRule(SpliceRule):
    def splice(self, type_spec, pairs):
        return [(type_spec.member(p.name), p.message, p.c_literal) for p in pairs]


_SPLICE_RULES = {
    Pass.ENUM: EnumSpliceRule,
    Pass.TABLE: TableSpliceRule,
}


def rule_for(pass_: Pass, count: int) -> Rule:
    if count == 0:
        return EmptyRule(count)
    if count % 2:
        return UnparityRule(count)
    return _SPLICE_RULES[pass_](count)


class RuleTable:
    def __init__(self, pass_: Pass, counter: ArityCounter) -> None:
        self.pass_ = pass_
        self.counter = counter
        self.rules: Dict[int, Rule] = {
            n: rule_for(pass_, n) for n in range(counter.ceiling + 1)
        }

    def __len__(self) -> int:
        return len(self.rules)

    def select(self, args: Sequence[Arg]) -> Rule:
        count = self.counter.select(args)
        try:
            return self.rules[count]
        except KeyError:
            er.raise_internal_error("EG9001", count=count, pass_name=self.pass_.name.lower())

    def expand(self, type_spec: TypeSpec, args: Sequence[Arg]) -> Tuple[Tuple[CodePair, ...], Splice]:
        return self.select(args).apply(type_spec, args)


def pair_up(args: Sequence[Arg]) -> Tuple[CodePair, ...]:
    """Group an even-length argument list into CodePairs, checking each slot."""
    pairs = []
    for index in range(0, len(args), 2):
        name_arg, message_arg = args[index], args[index + 1]
        pairs.append(CodePair(
            name=_member_name(name_arg, index),
            message=_message_text(message_arg, index + 1),
            name_span=getattr(name_arg, "loc", None),
            message_span=getattr(message_arg, "loc", None),
            literal=getattr(message_arg, "raw", None),
        ))
    return tuple(pairs)


def _member_name(arg: Arg, index: int) -> str:
    if isinstance(arg, StringLit):
        raise InvalidMemberName(arg.loc, name=arg.value, index=index)
    text = arg.text if isinstance(arg, Ident) else arg
    if not isinstance(text, str) or not IDENTIFIER.match(text):
        raise InvalidMemberName(getattr(arg, "loc", None), name=text, index=index)
    return text


def _message_text(arg: Arg, index: int) -> str:
    if isinstance(arg, Ident):
        raise InvalidMessage(arg.loc, index=index, got=arg.text)
    if isinstance(arg, StringLit):
        return arg.value
    if not isinstance(arg, str):
        raise InvalidMessage(None, index=index, got=arg)
    return arg
