"""Tests for ecgen.toml loading and validation."""
import pytest

from ecgen.compiler.config import (
    CONFIG_NAME,
    ConfigError,
    GeneratorConfig,
    find_config,
    load_config,
    load_config_from_string,
)


def test_defaults():
    config = load_config(None)
    assert config == GeneratorConfig()
    assert config.macro_name == "ECGEN"
    assert config.max_pairs == 4
    assert config.string_type == "const char *"


def test_load_generator_table():
    config = load_config_from_string("""
[generator]
macro_name = "YA_ECGEN"
max_pairs = 8
prefix = "ya"
output = "include/errors.h"
""")
    assert config.macro_name == "YA_ECGEN"
    assert config.max_pairs == 8
    assert config.prefix == "ya"
    assert config.output == "include/errors.h"


def test_missing_table_means_defaults():
    assert load_config_from_string('[other]\nx = 1\n') == GeneratorConfig()


@pytest.mark.parametrize("body,code", [
    ("max_pairs = 0", "EG2001"),
    ("max_pairs = 65", "EG2001"),
    ('max_pairs = "4"', "EG2001"),
    ("max_pairs = true", "EG2001"),
    ('macro_name = "9BAD"', "EG2002"),
    ('prefix = "has space"', "EG2002"),
    ('guard = "A-B"', "EG2002"),
    ('string_type = "char[4]"', "EG2003"),
    ('colour = "red"', "EG2004"),
    ("prefix = 5", "EG2002"),
    ("guard = 1", "EG2002"),
    ("macro_name = 3", "EG2002"),
    ("string_type = 7", "EG2003"),
    ("output = 5", "EG2005"),
    ('header = ""', "EG2005"),
    ("header = [\"a.h\"]", "EG2005"),
])
def test_invalid_values(body, code):
    with pytest.raises(ConfigError) as exc:
        load_config_from_string(f"[generator]\n{body}\n")
    assert exc.value.code == code


def test_malformed_toml():
    with pytest.raises(ConfigError) as exc:
        load_config_from_string("[generator\n")
    assert exc.value.code == "EG2004"


def test_overrides_skip_none_and_revalidate():
    config = GeneratorConfig(prefix="ya")
    assert config.with_overrides(prefix=None, max_pairs=6) == GeneratorConfig(prefix="ya", max_pairs=6)
    with pytest.raises(ConfigError):
        config.with_overrides(max_pairs=100)


def test_settings_exclude_output_paths():
    settings = GeneratorConfig(output="a.h", header="b.h").settings()
    assert "output" not in settings and "header" not in settings


def test_find_and_load_file(tmp_path):
    assert find_config(tmp_path) is None
    path = tmp_path / CONFIG_NAME
    path.write_text('[generator]\nprefix = "ya"\n', encoding="utf-8")
    assert find_config(tmp_path) == path
    assert load_config(path).prefix == "ya"


def test_unreadable_file(tmp_path):
    with pytest.raises(ConfigError) as exc:
        load_config(tmp_path / "missing.toml")
    assert exc.value.code == "EG2004"


def test_generator_must_be_a_table():
    with pytest.raises(ConfigError) as exc:
        load_config_from_string("generator = 3\n")
    assert exc.value.code == "EG2004"
    assert "must be a table" in str(exc.value)
