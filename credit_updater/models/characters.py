"""
Parsed entities and the records written for them.

These are plain values: the parser produces Individual/Team, the
extractors turn them into Appearance and StoryCredit rows.
"""
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Union


@dataclass(frozen=True)
class Individual:
    """A single character, optionally with an alter ego."""
    name: str
    alter_ego: Optional[str] = None
    appearance_notes: Optional[str] = None


@dataclass(frozen=True)
class Team:
    """A team; members is the raw bracketed member list."""
    name: str
    members: str
    appearance_notes: Optional[str] = None


Character = Union[Individual, Team]


@dataclass(frozen=True)
class Appearance:
    """A character appearing in a story. id 0 means not yet persisted."""
    story_id: int
    character_id: int
    details: Optional[str] = None
    notes: Optional[str] = None
    membership: Optional[str] = None
    id: int = 0


class CreditType(IntEnum):
    """gcd_credit_type ids for the six story credit text fields."""
    SCRIPT = 1
    PENCILS = 2
    INKS = 3
    COLORS = 4
    LETTERS = 5
    EDITING = 6

    @property
    def field_name(self) -> str:
        """Matching gcd_story column, e.g. 'script'."""
        return self.name.lower()


@dataclass(frozen=True)
class StoryCredit:
    story_id: int
    creator_id: int  # gcd_creator_name_detail.id
    credit_type_id: int
    id: int = 0
