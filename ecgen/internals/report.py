from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Any

from lark import Token

class C:
    """ANSI color/style escape codes."""
    RESET = "\x1b[0m"
    BOLD  = "\x1b[1m"
    DIM   = "\x1b[2m"
    RED   = "\x1b[31m"
    YELLOW = "\x1b[33m"
    CYAN  = "\x1b[36m"
    GRAY  = "\x1b[90m"

@dataclass(frozen=True)
class Span:
    line: int
    col: int
    end_line: int
    end_col: int

@dataclass
class Diagnostic:
    kind: str
    code: str
    message: str
    span: Optional[Span] = None
    filename: Optional[str] = None

def span_of(t: Any) -> Optional[Span]:
    """Best-effort source span for a lark Tree (via meta) or Token."""
    m = getattr(t, "meta", None)
    if m is not None and not getattr(m, "empty", True):
        return Span(m.line, m.column, m.end_line, m.end_column)
    if isinstance(t, Token):
        line = getattr(t, "line", None)
        col = getattr(t, "column", None)
        if line is not None and col is not None:
            end_line = getattr(t, "end_line", None)
            end_col = getattr(t, "end_column", None)
            return Span(line, col, end_line or line, end_col or col)
    return None


def _display_name(filename: str) -> str:
    try:
        rel = Path(filename).resolve().relative_to(Path.cwd())
        return f"./{rel}"
    except (ValueError, OSError):
        return Path(filename).name or filename


class Reporter:
    def __init__(self, source: Optional[str] = None, filename: str = "<input>") -> None:
        self.source = source
        self.filename = filename
        self.items: List[Diagnostic] = []

    def error(self, code: str, msg: str, span: Optional[Span]):
        self.items.append(Diagnostic("error", code, msg, span, filename=self.filename))

    def warn(self, code: str, msg: str, span: Optional[Span]):
        self.items.append(Diagnostic("warning", code, msg, span, filename=self.filename))

    @property
    def has_errors(self) -> bool:
        return any(d.kind == "error" for d in self.items)

    @property
    def has_warnings(self) -> bool:
        return any(d.kind == "warning" for d in self.items)

    def codes(self) -> List[str]:
        return [d.code for d in self.items]

    def format(self, use_color: bool = True, use_unicode: bool = True) -> str:
        """Render all diagnostics.

        use_color   → ANSI colorize location/kind/markers
        use_unicode → box-drawing guide around the source snippet
        """
        out: List[str] = []
        src_lines = self.source.splitlines() if self.source else []

        for d in self.items:
            filename = d.filename or self.filename
            if filename != "<input>":
                filename = _display_name(filename)
            loc = f"{filename}:{d.span.line}:{d.span.col}" if d.span else filename

            message = d.message if d.message.endswith('.') else f"{d.message}."

            if use_color:
                color = C.RED if d.kind == "error" else C.YELLOW
                kind = f"{C.BOLD}{color}{d.kind}{C.RESET}"
                head = f"{C.CYAN}{loc}{C.RESET}: {kind} [{C.DIM}{d.code}{C.RESET}]: {message}"
            else:
                color = ""
                head = f"{loc}: {d.kind} [{d.code}]: {message}"

            if d.span is None:
                out.append(head)
                continue

            line_idx = d.span.line - 1
            line_text = src_lines[line_idx] if 0 <= line_idx < len(src_lines) else ""
            start = max(1, d.span.col)
            if d.span.end_line == d.span.line:
                width = max(1, d.span.end_col - start)
            else:
                width = max(1, len(line_text) - start + 1)

            if use_unicode:
                bar, top, bottom, mark = "  │ ", "  ╭──┤ ", "  ╰", "┯"
            else:
                bar, top, bottom, mark = "  | ", "", "  `", "^"

            gray = (lambda s: f"{C.GRAY}{s}{C.RESET}") if use_color else (lambda s: s)
            reset = C.RESET if use_color else ""

            out.append(f"{gray(top)}{head}" if use_unicode else head)
            out.append(f"{gray(bar)}{line_text}")
            caret = " " * (start - 1) + mark + ("─" if use_unicode else "~") * (width - 1)
            out.append(f"{gray(bar)}{color}{caret}{reset}")
            if use_unicode:
                out.append(f"{gray(bottom + '─' * start)}{color}╯{reset}")

        return "\n".join(out)

    def print(self, stream=None, use_color: Optional[bool] = None, use_unicode: Optional[bool] = None) -> None:
        """Print diagnostics to `stream` (default: sys.stderr).

        Color and unicode are auto-enabled for a TTY unless NO_COLOR,
        NO_UNICODE or TERM=dumb say otherwise.
        """
        import os, sys
        stream = stream or sys.stderr

        is_tty = getattr(stream, "isatty", lambda: False)()
        dumb = os.getenv("TERM") == "dumb"
        if use_color is None:
            use_color = bool(is_tty and os.getenv("NO_COLOR") is None and not dumb)
        if use_unicode is None:
            use_unicode = bool(is_tty and os.getenv("NO_UNICODE") is None and not dumb)

        text = self.format(use_color=use_color, use_unicode=use_unicode)
        if text:
            print(text, file=stream)
