"""
Credit Field Parser

Creator credit fields (script, pencils, inks, colors, letters, editing) are
semicolon-separated name lists with annotations:

    Stan Lee (plot); Jack Kirby [as Jacob Kurtzberg]; Steve Ditko ?

Annotations are stripped so the bare name can be matched against
gcd_creator_name_detail.
"""
import re
from typing import List, Optional

from credit_updater.parsers.character_parser import split_on_outer_semicolons
from credit_updater.utils.text import cleanup

_PARENTHETICAL = re.compile(r"\s*\([^)]*\)\s*")
_BRACKETED = re.compile(r"\s*\[[^\]]*\]\s*")
_QUESTION_MARK = re.compile(r"\s*\?\s*")


def split_credit_names(field: Optional[str]) -> List[str]:
    """Split a credit field into raw name entries. None yields []."""
    if not field:
        return []
    return split_on_outer_semicolons(field)


def prepare_name(name: str) -> str:
    """
    Remove parentheticals, bracketed text, and question marks.

    >>> prepare_name("Jack Kirby [as Jacob Kurtzberg] (signed)")
    'Jack Kirby'
    """
    name = _PARENTHETICAL.sub(" ", name)
    name = _BRACKETED.sub(" ", name)
    name = _QUESTION_MARK.sub(" ", name)
    return cleanup(name)


def parse_credit_names(field: Optional[str]) -> List[str]:
    """Split and clean a credit field, dropping entries left empty."""
    names = []
    for raw in split_credit_names(field):
        name = prepare_name(raw)
        if name:
            names.append(name)
    return names
