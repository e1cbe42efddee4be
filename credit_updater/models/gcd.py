"""
GCD Source Tables

The subset of the Grand Comics Database dump read by the update tasks.
Only the columns the story queries and credit lookups touch are mapped.

migrate_stories has the same shape as gcd_story; it holds the stories of an
incoming dump that still need extracting.
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey

from credit_updater.core.database import Base, SOURCE_SCHEMA_KEY


class GcdPublisher(Base):
    __tablename__ = "gcd_publisher"
    __table_args__ = {"schema": SOURCE_SCHEMA_KEY}

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)


class GcdSeries(Base):
    __tablename__ = "gcd_series"
    __table_args__ = {"schema": SOURCE_SCHEMA_KEY}

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    publisher_id = Column(Integer, ForeignKey(f"{SOURCE_SCHEMA_KEY}.gcd_publisher.id"), nullable=False)


class GcdIssue(Base):
    __tablename__ = "gcd_issue"
    __table_args__ = {"schema": SOURCE_SCHEMA_KEY}

    id = Column(Integer, primary_key=True)
    number = Column(String(50))
    series_id = Column(Integer, ForeignKey(f"{SOURCE_SCHEMA_KEY}.gcd_series.id"), nullable=False)


class _StoryColumns:
    """Columns shared by gcd_story and migrate_stories."""
    id = Column(Integer, primary_key=True)
    title = Column(String(255), default="")
    issue_id = Column(Integer, nullable=False, index=True)

    # Free-text fields parsed by the extractors
    characters = Column(Text, default="")
    script = Column(Text, default="")
    pencils = Column(Text, default="")
    inks = Column(Text, default="")
    colors = Column(Text, default="")
    letters = Column(Text, default="")
    editing = Column(Text, default="")

    deleted = Column(Boolean, default=False)


class GcdStory(_StoryColumns, Base):
    __tablename__ = "gcd_story"
    __table_args__ = {"schema": SOURCE_SCHEMA_KEY}


class MigrateStory(_StoryColumns, Base):
    __tablename__ = "migrate_stories"
    __table_args__ = {"schema": SOURCE_SCHEMA_KEY}


class GcdCreatorNameDetail(Base):
    """A name a creator has been credited under."""
    __tablename__ = "gcd_creator_name_detail"
    __table_args__ = {"schema": SOURCE_SCHEMA_KEY}

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False, index=True)
    creator_id = Column(Integer)


class GcdStoryCredit(Base):
    """Relational credits that already exist in the dump."""
    __tablename__ = "gcd_story_credit"
    __table_args__ = {"schema": SOURCE_SCHEMA_KEY}

    id = Column(Integer, primary_key=True)
    creator_id = Column(Integer, nullable=False)  # gcd_creator_name_detail.id
    credit_type_id = Column(Integer, nullable=False)
    story_id = Column(Integer, nullable=False, index=True)
    deleted = Column(Boolean, default=False)
