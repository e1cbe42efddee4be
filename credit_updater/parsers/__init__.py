from credit_updater.parsers.character_parser import (
    fix_missing_brackets,
    parse_bracketed_text,
    parse_characters,
    split_entry,
    split_on_outer_semicolons,
)
from credit_updater.parsers.credit_parser import (
    parse_credit_names,
    prepare_name,
    split_credit_names,
)

__all__ = [
    "fix_missing_brackets",
    "parse_bracketed_text",
    "parse_characters",
    "split_entry",
    "split_on_outer_semicolons",
    "parse_credit_names",
    "prepare_name",
    "split_credit_names",
]
