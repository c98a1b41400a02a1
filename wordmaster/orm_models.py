"""
SQLAlchemy ORM models for the vocabulary trainer.

These models are internal to the database layer. The public interface
uses the Word dataclass from word.py.
"""

from sqlalchemy import Boolean, Float, Integer, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from wordmaster.constants import DEFAULT_DIFFICULTY, INITIAL_EASE_FACTOR, INITIAL_INTERVAL_DAYS
from wordmaster.word import Word


class Base(DeclarativeBase):
    pass


class WordORM(Base):
    """SQLAlchemy model for words table."""

    __tablename__ = "words"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    word: Mapped[str] = mapped_column(Text, nullable=False)
    phonetic: Mapped[str] = mapped_column(Text, default="")
    pronunciation: Mapped[str] = mapped_column(Text, default="")
    definition: Mapped[str] = mapped_column(Text, default="")
    example: Mapped[str] = mapped_column(Text, default="")
    translation: Mapped[str] = mapped_column(Text, default="")
    image_url: Mapped[str] = mapped_column(Text, default="")
    difficulty: Mapped[int] = mapped_column(Integer, default=DEFAULT_DIFFICULTY)
    last_reviewed: Mapped[int] = mapped_column(Integer, default=0)
    next_review: Mapped[int] = mapped_column(Integer, default=0, index=True)
    review_count: Mapped[int] = mapped_column(Integer, default=0)
    ease_factor: Mapped[float] = mapped_column(Float, default=INITIAL_EASE_FACTOR)
    interval: Mapped[int] = mapped_column(Integer, default=INITIAL_INTERVAL_DAYS)
    learned: Mapped[bool] = mapped_column(Boolean, default=False)
    mastered: Mapped[bool] = mapped_column(Boolean, default=False)


class IdSequenceORM(Base):
    """Highest id ever handed out, so deleted ids are never reused."""

    __tablename__ = "id_sequence"

    name: Mapped[str] = mapped_column(Text, primary_key=True)
    last_value: Mapped[int] = mapped_column(Integer, default=0)


def word_orm_to_dataclass(orm: WordORM) -> Word:
    """Convert a WordORM instance to a Word dataclass."""
    return Word(
        id=orm.id,
        word=orm.word,
        phonetic=orm.phonetic or "",
        pronunciation=orm.pronunciation or "",
        definition=orm.definition or "",
        example=orm.example or "",
        translation=orm.translation or "",
        image_url=orm.image_url or "",
        difficulty=orm.difficulty or DEFAULT_DIFFICULTY,
        last_reviewed=orm.last_reviewed or 0,
        next_review=orm.next_review or 0,
        review_count=orm.review_count or 0,
        ease_factor=orm.ease_factor if orm.ease_factor is not None else INITIAL_EASE_FACTOR,
        interval=orm.interval or INITIAL_INTERVAL_DAYS,
        learned=bool(orm.learned),
        mastered=bool(orm.mastered),
    )


def word_dataclass_to_orm(word: Word) -> WordORM:
    """Convert a Word dataclass to a WordORM instance."""
    orm = WordORM(id=word.id)
    copy_word_to_orm(word, orm)
    return orm


def copy_word_to_orm(word: Word, orm: WordORM) -> None:
    """Overwrite every non-identity column of ``orm`` from ``word``."""
    orm.word = word.word
    orm.phonetic = word.phonetic
    orm.pronunciation = word.pronunciation
    orm.definition = word.definition
    orm.example = word.example
    orm.translation = word.translation
    orm.image_url = word.image_url
    orm.difficulty = word.difficulty
    orm.last_reviewed = word.last_reviewed
    orm.next_review = word.next_review
    orm.review_count = word.review_count
    orm.ease_factor = word.ease_factor
    orm.interval = word.interval
    orm.learned = word.learned
    orm.mastered = word.mastered
