"""Tests for the preprocessor header backend."""
import re

import pytest

from ecgen.backend.macro_header import MacroHeaderEmitter
from ecgen.dispatch.rules import Pass


@pytest.fixture
def header():
    return MacroHeaderEmitter().render()


def _defines(text):
    return {m.group(1): line for line in text.splitlines()
            for m in [re.match(r"#define (\w+)", line)] if m}


def test_guarded(header):
    lines = header.splitlines()
    assert lines[1:3] == ["#ifndef ECGEN_H", "#define ECGEN_H"]
    assert lines[-1] == "#endif /* ECGEN_H */"


def test_error_messages(header):
    defines = _defines(header)
    assert "static_assert(0, message);" in defines["ECGEN_ERROR"]
    assert '"ECGEN: [Argument unparity] Error code doesn\'t have its message pair."' \
        in defines["ECGEN_ERROR_MESSAGE_UNPARITY"]
    assert '"ECGEN: [No members] No member was specified for this enum type."' \
        in defines["ECGEN_ERROR_MESSAGE_NO_ARGS"]


def test_one_rule_per_count_and_pass(header):
    defines = _defines(header)
    for p in (0, 1):
        for n in range(10):
            assert f"ECGEN___ARGS__{p}_{n}" in defines
        assert f"ECGEN___ARGS__{p}_10" not in defines


def test_rule_bodies(header):
    defines = _defines(header)
    assert defines["ECGEN___ARGS__0_0"].endswith("ECGEN_ERROR(ECGEN_ERROR_MESSAGE_NO_ARGS)")
    assert defines["ECGEN___ARGS__1_3"].endswith("ECGEN_ERROR(ECGEN_ERROR_MESSAGE_UNPARITY)")
    assert defines["ECGEN___ARGS__0_2"] == (
        "#define ECGEN___ARGS__0_2(lowercase_name, UPPERCASE_NAME, _0, _1) "
        "ECGEN___DECLARE__0(lowercase_name, UPPERCASE_NAME ## _ ## _0)"
    )
    assert defines["ECGEN___ARGS__1_2"] == (
        "#define ECGEN___ARGS__1_2(lowercase_name, UPPERCASE_NAME, _0, _1) "
        "ECGEN___DECLARE__1(lowercase_name, [UPPERCASE_NAME ## _ ## _0] = _1)"
    )


def test_counter_has_a_slot_per_rule(header):
    counter = _defines(header)["ECGEN___ARGS__0"]
    assert counter.startswith("#define ECGEN___ARGS__0(_0, _1, _2, _3, _4, _5, _6, _7, _8, _9, NAME, ...)")


def test_facade_lists_rules_descending(header):
    facade = _defines(header)["ECGEN"]
    rules = ", ".join(f"ECGEN___ARGS__0_{n}" for n in range(9, -1, -1))
    assert f'ECGEN___ARGS__0("empty", ##__VA_ARGS__, {rules})' in facade
    assert facade.index("ECGEN___GENERATOR__0") < facade.index("ECGEN___GENERATOR__1")


def test_declarations_use_type_names(header):
    defines = _defines(header)
    assert "enum lowercase_name ## _error_codes {__VA_ARGS__};" in defines["ECGEN___DECLARE__0"]
    assert "const char *lowercase_name ## _conversion_table[] = {__VA_ARGS__};" \
        in defines["ECGEN___DECLARE__1"]


def test_errors_stay_outside_declarations(header):
    defines = _defines(header)
    for name in ("ECGEN___ARGS__0_0", "ECGEN___ARGS__1_3"):
        assert "DECLARE" not in defines[name]
    assert defines["ECGEN___GENERATOR__0"].endswith(") GEN(lowercase_name, UPPERCASE_NAME, __VA_ARGS__)")


def test_options():
    emitter = MacroHeaderEmitter(macro_name="YA_ECGEN", max_pairs=2, prefix="ya")
    text = emitter.render()
    defines = _defines(text)
    assert "#ifndef YA_ECGEN_H" in text
    assert "YA_ECGEN___ARGS__0_5" in defines
    assert "YA_ECGEN___ARGS__0_6" not in defines
    assert "YA_ ## UPPERCASE_NAME ## _ ## _0" in defines["YA_ECGEN___ARGS__0_2"]
    assert "ya_ ## lowercase_name ## _error_codes" in defines["YA_ECGEN___DECLARE__0"]


def test_names():
    emitter = MacroHeaderEmitter()
    assert emitter.rule_name(Pass.TABLE, 4) == "ECGEN___ARGS__1_4"
    assert emitter.counter_name(Pass.ENUM) == "ECGEN___ARGS__0"
    assert emitter.generator_name(Pass.TABLE) == "ECGEN___GENERATOR__1"
    assert emitter.declare_name(Pass.ENUM) == "ECGEN___DECLARE__0"


def test_rendering_is_stable():
    assert MacroHeaderEmitter().render() == MacroHeaderEmitter().render()
