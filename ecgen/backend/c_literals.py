"""C string literal encoding and decoding."""
from __future__ import annotations

from typing import Dict

_SIMPLE_ESCAPES: Dict[str, str] = {
    "n": "\n", "t": "\t", "r": "\r", "a": "\a", "b": "\b", "f": "\f",
    "v": "\v", "\\": "\\", '"': '"', "'": "'", "?": "?",
}

_HEX_DIGITS = "0123456789abcdefABCDEF"

# \uXXXX and \UXXXXXXXX
_UNIVERSAL_WIDTH: Dict[str, int] = {"u": 4, "U": 8}

_ENCODE: Dict[str, str] = {
    "\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t", "\r": "\\r",
}


def encode(text: str) -> str:
    """Render `text` as a double-quoted C string literal."""
    out = ['"']
    for ch in text:
        if ch in _ENCODE:
            out.append(_ENCODE[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            out.append(f"\\{ord(ch):03o}")
        else:
            out.append(ch)
    out.append('"')
    return "".join(out)


def decode(literal: str) -> str:
    """Decode one double-quoted C string literal (quotes included).

    `\\x`, octal and universal-character escapes become the code point they
    name; unknown escapes are rejected.
    """
    if len(literal) < 2 or literal[0] != '"' or literal[-1] != '"':
        raise ValueError(f"not a string literal: {literal!r}")
    body = literal[1:-1]
    out = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch != "\\":
            out.append(ch)
            i += 1
            continue
        i += 1
        if i >= len(body):
            raise ValueError(f"dangling escape in {literal!r}")
        esc = body[i]
        if esc in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[esc])
            i += 1
        elif esc in "01234567":
            j = i
            while j < len(body) and j - i < 3 and body[j] in "01234567":
                j += 1
            out.append(chr(int(body[i:j], 8)))
            i = j
        elif esc == "x":
            j = i + 1
            while j < len(body) and body[j] in _HEX_DIGITS:
                j += 1
            if j == i + 1:
                raise ValueError(f"\\x without hex digits in {literal!r}")
            out.append(chr(int(body[i + 1:j], 16)))
            i = j
        elif esc in _UNIVERSAL_WIDTH:
            width = _UNIVERSAL_WIDTH[esc]
            digits = body[i + 1:i + 1 + width]
            if len(digits) != width or any(c not in _HEX_DIGITS for c in digits):
                raise ValueError(f"\\{esc} needs {width} hex digits in {literal!r}")
            out.append(chr(int(digits, 16)))
            i += 1 + width
        else:
            raise ValueError(f"unknown escape \\{esc} in {literal!r}")
    return "".join(out)
