"""Bracket text parsing and editing."""

from withholding.parsing.brackets_text import (
    check_bracket_table,
    dump_brackets,
    parse_brackets,
    try_parse_brackets,
)
from withholding.parsing.editor import BracketEditor

__all__ = [
    "BracketEditor",
    "check_bracket_table",
    "dump_brackets",
    "parse_brackets",
    "try_parse_brackets",
]
