"""Tests for the invocation facade (enum + table generation)."""
import pytest

from ecgen import generate
from ecgen.compiler.config import GeneratorConfig
from ecgen.compiler.facade import Generator, render_units
from ecgen.dispatch.exceptions import (
    EmptyDeclaration,
    GenerationError,
    InvalidMemberName,
    InvalidMessage,
    InvalidTypeName,
    UnparityError,
    UnsupportedArity,
)
from ecgen.semantics.ast import Ident, StringLit


def _pairs(n):
    args = []
    for i in range(n):
        args += [f"E{i}", f"message {i}"]
    return args


class TestSinglePair:
    def test_hello(self):
        unit = generate("hello", "HELLO", "HI", "HI")
        assert unit.enum_source == "enum hello_error_codes {HELLO_HI};"
        assert unit.table_source == 'const char *hello_conversion_table[] = {[HELLO_HI] = "HI"};'

    def test_ordinals_and_lookup(self):
        unit = generate("hello", "HELLO", "HI", "HI")
        assert unit.enum.ordinal_of("HELLO_HI") == 0
        assert unit.table[0] == "HI"
        assert len(unit.table) == 1

    def test_source_is_enum_then_table(self):
        unit = generate("hello", "HELLO", "HI", "HI")
        assert unit.source == unit.enum_source + "\n" + unit.table_source + "\n"


class TestMultiplePairs:
    def test_two_pairs_keep_declaration_order(self):
        unit = generate("net", "NET", "TIMEOUT", "Timed out", "REFUSED", "Connection refused")
        assert unit.enum.identifiers == ["NET_TIMEOUT", "NET_REFUSED"]
        assert unit.table.dense() == ["Timed out", "Connection refused"]

    def test_two_pairs_ordinals(self):
        unit = generate("hello", "HELLO", "A", "msg-a", "B", "msg-b")
        assert [(m.identifier, m.ordinal) for m in unit.enum.members] == [("HELLO_A", 0), ("HELLO_B", 1)]
        assert unit.table[0] == "msg-a"
        assert unit.table[1] == "msg-b"

    def test_three_pairs(self):
        unit = generate("t", "T", *_pairs(3))
        assert [m.ordinal for m in unit.enum.members] == [0, 1, 2]
        assert unit.table_source == (
            'const char *t_conversion_table[] = '
            '{[T_E0] = "message 0", [T_E1] = "message 1", [T_E2] = "message 2"};'
        )

    def test_four_pairs_is_the_default_limit(self):
        unit = generate("t", "T", *_pairs(4))
        assert len(unit.enum) == 4
        assert len(unit.pairs) == 4

    def test_table_entry_matches_member_ordinal(self):
        unit = generate("t", "T", *_pairs(4))
        for member in unit.enum.members:
            index = int(member.identifier[len("T_E"):])
            assert unit.table[member.ordinal] == f"message {index}"
            assert unit.table.designators[member.ordinal] == member.identifier


class TestFailures:
    def test_no_members(self):
        with pytest.raises(EmptyDeclaration) as exc:
            generate("hello", "HELLO")
        assert exc.value.code == "EG0001"

    @pytest.mark.parametrize("count", [1, 3, 5, 7, 9])
    def test_odd_counts(self, count):
        args = _pairs(5)[:count]
        with pytest.raises(UnparityError) as exc:
            generate("hello", "HELLO", *args)
        assert exc.value.code == "EG0002"

    def test_five_pairs_exceed_default(self):
        with pytest.raises(UnsupportedArity) as exc:
            generate("t", "T", *_pairs(5))
        assert exc.value.code == "EG0003"
        assert exc.value.params == {"count": 10, "limit": 8, "pairs": 4}

    def test_raised_max_pairs(self):
        unit = generate("t", "T", *_pairs(5), config=GeneratorConfig(max_pairs=5))
        assert len(unit.enum) == 5

    def test_member_name_must_be_identifier(self):
        with pytest.raises(InvalidMemberName):
            generate("t", "T", "not valid", "msg")

    def test_member_name_cannot_be_string_literal(self):
        with pytest.raises(InvalidMemberName):
            generate("t", "T", StringLit("HI"), StringLit("HI"))

    def test_message_cannot_be_identifier(self):
        with pytest.raises(InvalidMessage):
            generate("t", "T", Ident("HI"), Ident("HI"))

    @pytest.mark.parametrize("lower,upper", [("", "T"), ("t", "9T"), ("t-x", "T")])
    def test_type_names_must_be_identifiers(self, lower, upper):
        with pytest.raises(InvalidTypeName):
            generate(lower, upper, "A", "a")

    def test_failures_are_generation_errors(self):
        with pytest.raises(GenerationError, match="EG0001"):
            generate("t", "T")


class TestOptions:
    def test_prefix(self):
        unit = generate("hello", "HELLO", "HI", "HI", config=GeneratorConfig(prefix="ya"))
        assert unit.enum_source == "enum ya_hello_error_codes {YA_HELLO_HI};"
        assert unit.table_source.startswith("const char *ya_hello_conversion_table[]")
        assert "[YA_HELLO_HI]" in unit.table_source

    def test_string_type(self):
        unit = generate("t", "T", "A", "a", config=GeneratorConfig(string_type="string_t"))
        assert unit.table_source.startswith("string_t t_conversion_table[] = ")

    def test_messages_are_escaped(self):
        unit = generate("t", "T", "A", 'say "hi"\n')
        assert unit.table_source.endswith('{[T_A] = "say \\"hi\\"\\n"};')


def test_generation_is_deterministic():
    gen = Generator()
    first = gen.generate("t", "T", _pairs(3))
    second = gen.generate("t", "T", _pairs(3))
    assert first == second
    assert render_units([first]) == render_units([second])


def test_render_units_joins_with_blank_line():
    a = generate("a", "A", "X", "x")
    b = generate("b", "B", "Y", "y")
    assert render_units([a, b]) == a.source + "\n" + b.source
