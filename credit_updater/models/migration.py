"""
Migration Tables

Relational rows extracted from gcd_story text fields:
- m_character: one row per distinct (name, alter_ego, publisher_id)
- m_character_appearance: a character appearing in a story
- m_story_credit: a creator name credited on a story

issue_id / series_id are left NULL here and filled by the migration SQL
that runs after extraction.
"""
from sqlalchemy import Column, Integer, String, Text, ForeignKey, Index

from credit_updater.core.database import Base, TARGET_SCHEMA_KEY

NAME_MAX_LENGTH = 255


class MCharacter(Base):
    __tablename__ = "m_character"
    __table_args__ = (
        Index("ix_m_character_lookup", "name", "publisher_id"),
        {"schema": TARGET_SCHEMA_KEY},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(NAME_MAX_LENGTH), nullable=False)
    alter_ego = Column(String(NAME_MAX_LENGTH), nullable=True)
    publisher_id = Column(Integer, nullable=False)


class MCharacterAppearance(Base):
    __tablename__ = "m_character_appearance"
    __table_args__ = {"schema": TARGET_SCHEMA_KEY}

    id = Column(Integer, primary_key=True, autoincrement=True)
    details = Column(Text, nullable=True)  # appearance notes, e.g. "cameo"
    character_id = Column(Integer, ForeignKey(f"{TARGET_SCHEMA_KEY}.m_character.id"), nullable=False)
    story_id = Column(Integer, nullable=False, index=True)
    notes = Column(Text, nullable=True)
    membership = Column(Text, nullable=True)  # raw team member list
    issue_id = Column(Integer, nullable=True)
    series_id = Column(Integer, nullable=True)


class MStoryCredit(Base):
    __tablename__ = "m_story_credit"
    __table_args__ = (
        Index("ix_m_story_credit_lookup", "creator_id", "story_id", "credit_type_id"),
        {"schema": TARGET_SCHEMA_KEY},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    creator_id = Column(Integer, nullable=False)  # gcd_creator_name_detail.id
    credit_type_id = Column(Integer, nullable=False)
    story_id = Column(Integer, nullable=False)
    issue_id = Column(Integer, nullable=True)
    series_id = Column(Integer, nullable=True)
