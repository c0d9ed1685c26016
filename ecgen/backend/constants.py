"""Spellings shared by the C backends."""

ENUM_SUFFIX = "_error_codes"
TABLE_SUFFIX = "_conversion_table"

DEFAULT_MACRO_NAME = "ECGEN"
DEFAULT_STRING_TYPE = "const char *"

# Argument used to keep __VA_ARGS__ non-empty ahead of the counted list.
COUNT_SENTINEL = '"empty"'

# Fixed diagnostics carried by the preprocessor header; they mirror
# EG0001/EG0002 in ecgen.internals.errors.
NO_ARGS_TEXT = "[No members] No member was specified for this enum type."
UNPARITY_TEXT = "[Argument unparity] Error code doesn't have its message pair."

GENERATED_BANNER = "/* Generated by ecgen {version}. Do not edit. */"
