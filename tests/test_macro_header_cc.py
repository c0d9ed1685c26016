"""Runs the generated macro header through a real C compiler."""
import os
import shutil
import subprocess

import pytest

from ecgen import generate_source
from ecgen.backend.macro_header import MacroHeaderEmitter

CC = os.environ.get("CC") or shutil.which("cc") or shutil.which("gcc") or shutil.which("clang")

pytestmark = pytest.mark.skipif(CC is None, reason="no C compiler available")

# ##__VA_ARGS__ comma elision is a GNU extension
CFLAGS = ["-std=gnu11"]


def _squash(text):
    return "".join(text.split())


def _write(tmp_path, body, emitter=None):
    emitter = emitter or MacroHeaderEmitter()
    (tmp_path / "ecgen.h").write_text(emitter.render(), encoding="utf-8")
    src = tmp_path / "main.c"
    src.write_text(f'#include "ecgen.h"\n{body}\n', encoding="utf-8")
    return src


def _cc(tmp_path, *args):
    return subprocess.run([CC, *CFLAGS, "-I", str(tmp_path), *args],
                          capture_output=True, text=True, cwd=tmp_path, timeout=60)


def _preprocess(tmp_path, invocation, emitter=None):
    src = _write(tmp_path, invocation, emitter)
    result = _cc(tmp_path, "-E", "-P", str(src))
    assert result.returncode == 0, result.stderr
    return _squash(result.stdout)


def _syntax_check(tmp_path, invocation, emitter=None):
    src = _write(tmp_path, invocation, emitter)
    return _cc(tmp_path, "-fsyntax-only", str(src))


def test_expansion(tmp_path):
    out = _preprocess(tmp_path, 'ECGEN(hello, HELLO, HI, "HI", BYE, "Bye")')
    assert "enumhello_error_codes{HELLO_HI,HELLO_BYE};" in out
    assert 'constchar*hello_conversion_table[]={[HELLO_HI]="HI",[HELLO_BYE]="Bye"};' in out


@pytest.mark.parametrize("invocation", [
    'ECGEN(hello, HELLO, HI, "HI")',
    'ECGEN(greet, GREET, BYE, "Good" " bye", HI, "\\x41\\377")',
    'ECGEN(four, FOUR, A, "a", B, "b", C, "c", D, "d")',
])
def test_matches_python_generator(tmp_path, invocation):
    assert _squash(generate_source(invocation)) in _preprocess(tmp_path, invocation)


def test_prefix_and_macro_name(tmp_path):
    emitter = MacroHeaderEmitter(macro_name="YA_ECGEN", max_pairs=2, prefix="ya")
    out = _preprocess(tmp_path, 'YA_ECGEN(hello, HELLO, HI, "HI")', emitter)
    assert "enumya_hello_error_codes{YA_HELLO_HI};" in out
    assert 'constchar*ya_hello_conversion_table[]={[YA_HELLO_HI]="HI"};' in out


def test_compiles_and_runs(tmp_path):
    src = _write(tmp_path, """
#include <string.h>

ECGEN(hello, HELLO, HI, "HI", BYE, "Bye")

int main(void)
{
    if (HELLO_HI != 0 || HELLO_BYE != 1)
        return 1;
    return strcmp(hello_conversion_table[HELLO_BYE], "Bye") != 0;
}
""")
    exe = tmp_path / "hello"
    result = _cc(tmp_path, "-o", str(exe), str(src))
    assert result.returncode == 0, result.stderr
    assert subprocess.run([str(exe)], timeout=60).returncode == 0


@pytest.mark.parametrize("invocation,text", [
    ("ECGEN(hello, HELLO)", "[No members]"),
    ("ECGEN(hello, HELLO, HI)", "[Argument unparity]"),
    ('ECGEN(hello, HELLO, HI, "HI", BYE)', "[Argument unparity]"),
])
def test_misuse_fails_with_fixed_message(tmp_path, invocation, text):
    result = _syntax_check(tmp_path, invocation)
    assert result.returncode != 0
    assert text in result.stderr


def test_over_ceiling_fails(tmp_path):
    args = ", ".join(f'E{i}, "e{i}"' for i in range(5))
    result = _syntax_check(tmp_path, f"ECGEN(big, BIG, {args})")
    assert result.returncode != 0


def test_raised_ceiling_compiles(tmp_path):
    args = ", ".join(f'E{i}, "e{i}"' for i in range(5))
    result = _syntax_check(tmp_path, f"ECGEN(big, BIG, {args})", MacroHeaderEmitter(max_pairs=5))
    assert result.returncode == 0, result.stderr
