"""
Character Field Parser

Turns the free-text `characters` field of a GCD story into Individual and
Team values. The field is a semicolon-separated list of entries shaped like

    name [alter ego or team members] (appearance notes)

where both the bracketed and the parenthetical parts are optional, and team
member lists may themselves contain semicolons and nested brackets:

    Batman [Bruce Wayne] (cameo); Justice League [Superman [Clark Kent]; Flash]

Parsing never raises. Malformed input degrades to fewer (or no) entities.
"""
import re
from typing import List, Optional, Tuple

from credit_updater.models.characters import Character, Individual, Team
from credit_updater.utils.text import cleanup

# name, then bracket text up to the last "]", then paren text up to the last ")"
_ENTRY_PATTERN = re.compile(
    r"^([^\[(]*)(?:\[(.*)(?=\]))?(?:[^(]+)?(?:\((.*)(?=\)))?",
    re.DOTALL,
)


def parse_characters(characters: Optional[str]) -> List[Character]:
    """
    Parse a characters field into an ordered list of Individual/Team.

    Entries with an empty name are dropped.
    """
    if not characters or not characters.strip():
        return []

    fixed = fix_missing_brackets(characters)
    parsed: List[Character] = []

    for entry in split_on_outer_semicolons(fixed):
        name, bracketed, notes = split_entry(entry)
        if not name:
            continue

        alter_ego, membership = parse_bracketed_text(bracketed)
        if membership is not None:
            parsed.append(Team(name=name, members=membership, appearance_notes=notes))
        else:
            parsed.append(Individual(name=name, alter_ego=alter_ego, appearance_notes=notes))

    return parsed


def fix_missing_brackets(text: str) -> str:
    """
    Close team-member brackets that upstream data forgot to close.

    Inside a member's own bracket (depth 2) the first semicolon is taken as
    part of that member ("Superman [Clark Kent; Kal-L]"); a second one before
    the bracket closes means the "]" was missing, so one is inserted before
    it. Brackets still open at the end are closed. Only depth 2 is repaired,
    and parentheses are never touched.
    """
    fixed: List[str] = []
    depth = 0
    semicolon_seen = False

    for char in text:
        if char == "[":
            depth += 1
        elif char == "]":
            if depth > 0:
                depth -= 1
                semicolon_seen = False
        elif char == ";" and depth == 2:
            if not semicolon_seen:
                semicolon_seen = True
            else:
                fixed.append("]")
                depth -= 1
                semicolon_seen = False
        fixed.append(char)

    fixed.append("]" * depth)
    return "".join(fixed)


def split_on_outer_semicolons(text: str) -> List[str]:
    """
    Split on semicolons that are not inside brackets or parentheses.

    Pieces are trimmed; empty pieces are dropped. A stray closer drives the
    depth negative, which still counts as top level.
    """
    pieces: List[str] = []
    depth = 0
    start = 0

    for i, char in enumerate(text):
        if char in "([":
            depth += 1
        elif char in ")]":
            depth -= 1
        elif char == ";" and depth <= 0:
            piece = text[start:i].strip()
            if piece:
                pieces.append(piece)
            start = i + 1

    piece = text[start:].strip()
    if piece:
        pieces.append(piece)
    return pieces


def split_entry(entry: str) -> Tuple[str, Optional[str], Optional[str]]:
    """
    Split one entry into (name, bracketed text, appearance notes).

    >>> split_entry("Batman [Bruce [Thomas] (Wayne)] (cameo)")
    ('Batman', 'Bruce [Thomas] (Wayne)', 'cameo')
    """
    match = _ENTRY_PATTERN.match(entry)
    if match is None:
        return entry.strip(), None, None

    name = (match.group(1) or "").strip()
    bracketed = (match.group(2) or "").strip() or None
    notes = (match.group(3) or "").strip() or None
    return name, bracketed, notes


def parse_bracketed_text(bracketed: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """
    Classify bracketed text as (alter_ego, None) or (None, membership).

    More than one top-level piece means a team member list, kept verbatim.
    A single piece is an alter ego with whitespace normalized.
    """
    if bracketed is None:
        return None, None

    pieces = split_on_outer_semicolons(bracketed)
    if len(pieces) > 1:
        return None, bracketed
    if pieces:
        return cleanup(pieces[0]), None
    return None, None
