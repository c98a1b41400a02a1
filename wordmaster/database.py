"""
Database operations for the vocabulary trainer.

Uses SQLAlchemy ORM for database access. The public API uses the Word
dataclass from word.py, with conversion to/from ORM models handled internally.

Writes are serialised through a single module-level lock; the scheduler in
sm2.py never touches the database itself.
"""

import threading
from dataclasses import replace
from typing import Callable, Dict, Iterable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wordmaster.db_engine import get_engine, get_session
from wordmaster.errors import StoreIOError, WordNotFound
from wordmaster.orm_models import (
    Base,
    IdSequenceORM,
    WordORM,
    copy_word_to_orm,
    word_dataclass_to_orm,
    word_orm_to_dataclass,
)
from wordmaster.sm2 import Clock, apply_review, current_epoch, log_review_update
from wordmaster.word import ImportResult, LearningStats, Word, create_word, normalise_headword
from util.logging_util import setup_logger

logger = setup_logger(__name__)

WORD_ID_SEQUENCE = "words"

_write_lock = threading.Lock()


def init_db():
    """Initialize the database schema."""
    try:
        Base.metadata.create_all(get_engine())
    except SQLAlchemyError as e:
        logger.error(f"Could not initialise the database: {e}")
        raise StoreIOError(str(e)) from e


def _get_sequence(session: Session) -> IdSequenceORM:
    sequence = session.get(IdSequenceORM, WORD_ID_SEQUENCE)
    if sequence is None:
        max_id = session.execute(select(func.max(WordORM.id))).scalar() or 0
        sequence = IdSequenceORM(name=WORD_ID_SEQUENCE, last_value=max_id)
        session.add(sequence)
    return sequence


def _allocate_id(session: Session) -> int:
    sequence = _get_sequence(session)
    sequence.last_value += 1
    return sequence.last_value


def next_id() -> int:
    """The id the next added word will receive."""
    with get_session() as session:
        last_value = _get_sequence(session).last_value
        max_id = session.execute(select(func.max(WordORM.id))).scalar() or 0
        session.rollback()
        return max(last_value, max_id) + 1


def add_word(fields: Dict, clock: Clock = current_epoch) -> Word:
    """Add a new word with default scheduling state. Returns the stored Word."""
    headword = fields.get("word")
    if not isinstance(headword, str) or not headword.strip():
        raise ValueError("A word needs a non-empty headword")

    with _write_lock, get_session() as session:
        word = create_word(fields, _allocate_id(session), clock())
        session.add(word_dataclass_to_orm(word))

    logger.info(f"Added word '{word.word}' with id {word.id}")
    return word


def put_word(word: Word) -> Word:
    """Insert or fully replace a word by id.

    A word without an id gets the next one from the sequence.
    """
    with _write_lock, get_session() as session:
        sequence = _get_sequence(session)
        if word.id is None:
            sequence.last_value += 1
            word = replace(word, id=sequence.last_value)
        elif word.id > sequence.last_value:
            sequence.last_value = word.id

        orm = session.get(WordORM, word.id)
        if orm is None:
            session.add(word_dataclass_to_orm(word))
        else:
            copy_word_to_orm(word, orm)

    return word


def get_word(word_id: int) -> Word:
    """Get a word by id, raising WordNotFound if it doesn't exist."""
    with get_session() as session:
        orm = session.get(WordORM, word_id)
        if orm is None:
            raise WordNotFound(word_id)
        return word_orm_to_dataclass(orm)


def find_word_by_headword(text: str) -> Optional[Word]:
    """Find a word by headword, ignoring case and surrounding whitespace."""
    key = normalise_headword(text)
    with get_session() as session:
        stmt = select(WordORM).order_by(WordORM.id)
        for orm in session.execute(stmt).scalars():
            if normalise_headword(orm.word) == key:
                return word_orm_to_dataclass(orm)
    return None


def list_words() -> List[Word]:
    """Get all words in insertion order."""
    with get_session() as session:
        stmt = select(WordORM).order_by(WordORM.id)
        orms = session.execute(stmt).scalars().all()
        return [word_orm_to_dataclass(orm) for orm in orms]


def filter_words(predicate: Callable[[Word], bool]) -> List[Word]:
    """Get all words matching ``predicate``, in insertion order."""
    return [word for word in list_words() if predicate(word)]


def update_word(word: Word):
    """Overwrite an existing word with the given record."""
    with _write_lock, get_session() as session:
        orm = session.get(WordORM, word.id)
        if orm is None:
            raise WordNotFound(word.id)
        copy_word_to_orm(word, orm)


def delete_word(word_id: int):
    with _write_lock, get_session() as session:
        orm = session.get(WordORM, word_id)
        if orm is None:
            raise WordNotFound(word_id)
        session.delete(orm)

    logger.info(f"Deleted word {word_id}")


def count_words() -> int:
    """Count total number of words."""
    with get_session() as session:
        return session.execute(select(func.count(WordORM.id))).scalar()


def review_word(word_id: int, quality: int, clock: Clock = current_epoch) -> Word:
    """Apply a review to a stored word and persist the result."""
    with _write_lock, get_session() as session:
        orm = session.get(WordORM, word_id)
        if orm is None:
            raise WordNotFound(word_id)
        word = word_orm_to_dataclass(orm)
        reviewed = apply_review(word, quality, clock)
        copy_word_to_orm(reviewed, orm)

    log_review_update(logger, word, reviewed, quality)
    return reviewed


def get_words_for_review(clock: Clock = current_epoch) -> List[Word]:
    """Get learned, unmastered words that are due, earliest first."""
    now = clock()
    with get_session() as session:
        stmt = (
            select(WordORM)
            .where(
                WordORM.learned.is_(True),
                WordORM.mastered.is_(False),
                WordORM.next_review <= now,
            )
            .order_by(WordORM.next_review.asc(), WordORM.id.asc())
        )
        orms = session.execute(stmt).scalars().all()
        return [word_orm_to_dataclass(orm) for orm in orms]


def get_new_words_to_learn(limit: int) -> List[Word]:
    """Get up to ``limit`` words that haven't been reviewed yet."""
    if limit <= 0:
        return []

    with get_session() as session:
        stmt = (
            select(WordORM)
            .where(WordORM.learned.is_(False))
            .order_by(WordORM.id.asc())
            .limit(limit)
        )
        orms = session.execute(stmt).scalars().all()
        return [word_orm_to_dataclass(orm) for orm in orms]


def get_learning_stats(clock: Clock = current_epoch) -> LearningStats:
    now = clock()
    with get_session() as session:
        total = session.execute(select(func.count(WordORM.id))).scalar()
        learned = session.execute(
            select(func.count(WordORM.id)).where(WordORM.learned.is_(True))
        ).scalar()
        mastered = session.execute(
            select(func.count(WordORM.id)).where(WordORM.mastered.is_(True))
        ).scalar()
        to_review = session.execute(
            select(func.count(WordORM.id)).where(
                WordORM.learned.is_(True),
                WordORM.mastered.is_(False),
                WordORM.next_review <= now,
            )
        ).scalar()

    return LearningStats(
        total=total,
        learned=learned,
        mastered=mastered,
        to_review=to_review,
        new=total - learned,
    )


def import_words(records: Iterable[Dict], clock: Clock = current_epoch) -> ImportResult:
    """Add a batch of word records, resetting any review state they carry.

    Records whose headword is empty, or already present (ignoring case and
    surrounding whitespace) in the database or earlier in the batch, are
    skipped and reported in the result. So are entries that aren't dicts or
    whose fields don't validate; the rest of the batch is still imported.
    """
    result = ImportResult()
    now = clock()

    with _write_lock, get_session() as session:
        existing = session.execute(select(WordORM.word)).scalars().all()
        seen = {normalise_headword(headword) for headword in existing}

        for record in records:
            if not isinstance(record, dict):
                result.skipped.append((str(record), "invalid record"))
                continue

            headword = record.get("word")
            if not isinstance(headword, str) or not headword.strip():
                result.skipped.append((str(headword or ""), "missing headword"))
                continue

            key = normalise_headword(headword)
            if key in seen:
                result.skipped.append((headword, "duplicate"))
                continue

            try:
                word = create_word(record, None, now)
            except (TypeError, ValueError) as e:
                logger.warning(f"Skipping '{headword}': {e}")
                result.skipped.append((headword, "invalid record"))
                continue

            word = replace(word, id=_allocate_id(session))
            session.add(word_dataclass_to_orm(word))
            seen.add(key)
            result.imported.append(word)

    logger.info(f"Imported {result.n_imported} words (skipped {result.n_skipped})")
    return result
