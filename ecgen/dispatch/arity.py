"""Arity counter: maps a variadic argument list onto a rule selector.

Python sees the whole argument list, so the selector is simply its length,
bounded by the rule table ceiling. The descending marker sequence is still
exposed because the preprocessor header backend emits the positional
counting trick for C callers and must agree with this ceiling.
"""
from __future__ import annotations

from typing import List, Optional, Sequence

from ecgen.dispatch.exceptions import UnsupportedArity
from ecgen.internals.report import Span

DEFAULT_MAX_PAIRS = 4
MAX_PAIRS_LIMIT = 64


class ArityCounter:
    def __init__(self, max_pairs: int = DEFAULT_MAX_PAIRS) -> None:
        if not 1 <= max_pairs <= MAX_PAIRS_LIMIT:
            raise ValueError(f"max_pairs must be within 1..{MAX_PAIRS_LIMIT}, got {max_pairs}")
        self.max_pairs = max_pairs

    @property
    def max_args(self) -> int:
        """Largest argument count that can still form complete pairs."""
        return 2 * self.max_pairs

    @property
    def ceiling(self) -> int:
        """Largest count with a registered rule (one trailing odd slot)."""
        return self.max_args + 1

    def markers(self) -> List[int]:
        return list(range(self.ceiling, -1, -1))

    def select(self, args: Sequence[object]) -> int:
        count = len(args)
        if count > self.ceiling:
            raise UnsupportedArity(
                _span_at(args, self.max_args),
                count=count, limit=self.max_args, pairs=self.max_pairs,
            )
        return count


def _span_at(args: Sequence[object], index: int) -> Optional[Span]:
    if index < len(args):
        return getattr(args[index], "loc", None)
    return None
