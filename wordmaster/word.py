"""
Data models for the vocabulary trainer.
"""

from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional, Tuple

from wordmaster.constants import (
    DEFAULT_DIFFICULTY,
    INITIAL_EASE_FACTOR,
    INITIAL_INTERVAL_DAYS,
    MAX_DIFFICULTY,
    MIN_DIFFICULTY,
    SECONDS_PER_DAY,
)

LEXICAL_FIELDS = (
    "word",
    "phonetic",
    "pronunciation",
    "definition",
    "example",
    "translation",
    "image_url",
    "difficulty",
)

# Attribute name -> key used in exported/imported JSON word lists
JSON_KEYS = {
    "id": "id",
    "word": "word",
    "phonetic": "phonetic",
    "pronunciation": "pronunciation",
    "definition": "definition",
    "example": "example",
    "translation": "translation",
    "image_url": "imageUrl",
    "difficulty": "difficulty",
    "last_reviewed": "lastReviewed",
    "next_review": "nextReview",
    "review_count": "reviewCount",
    "ease_factor": "easeFactor",
    "interval": "interval",
    "learned": "learned",
    "mastered": "mastered",
}


@dataclass
class Word:
    """A vocabulary entry together with its review scheduling state."""

    word: str
    id: Optional[int] = None
    phonetic: str = ""
    pronunciation: str = ""
    definition: str = ""
    example: str = ""
    translation: str = ""
    image_url: str = ""
    difficulty: int = DEFAULT_DIFFICULTY
    last_reviewed: int = 0
    next_review: int = 0
    review_count: int = 0
    ease_factor: float = INITIAL_EASE_FACTOR
    interval: int = INITIAL_INTERVAL_DAYS
    learned: bool = False
    mastered: bool = False

    def to_json_dict(self) -> Dict:
        """Serialise to the camelCase record shape used in word list files."""
        return {JSON_KEYS[name]: value for name, value in asdict(self).items()}


@dataclass
class ImportResult:
    """Outcome of importing a batch of word records."""
    imported: List[Word] = field(default_factory=list)
    skipped: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def n_imported(self) -> int:
        return len(self.imported)

    @property
    def n_skipped(self) -> int:
        return len(self.skipped)


@dataclass
class LearningStats:
    total: int
    learned: int
    mastered: int
    to_review: int
    new: int

    def as_dict(self) -> Dict[str, int]:
        return {
            "total": self.total,
            "learned": self.learned,
            "mastered": self.mastered,
            "toReview": self.to_review,
            "new": self.new,
        }


def normalise_headword(text: str) -> str:
    """Key used to detect duplicate words on import."""
    return text.strip().lower()


def _lookup(fields: Dict, name: str):
    """Read a lexical field given either its attribute or JSON name."""
    if name in fields:
        return fields[name]
    return fields.get(JSON_KEYS[name])


def parse_difficulty(value) -> int:
    """Coerce a difficulty rating to an int in 1-5.

    A missing, empty or zero value means the default rating. Anything else
    that isn't a whole number in range raises ValueError.
    """
    if isinstance(value, (bool, float)):
        raise ValueError(f"Difficulty must be a whole number, got {value!r}")
    if value is None or value == "" or value == 0:
        return DEFAULT_DIFFICULTY

    difficulty = int(value)
    if not MIN_DIFFICULTY <= difficulty <= MAX_DIFFICULTY:
        raise ValueError(
            f"Difficulty must be between {MIN_DIFFICULTY} and {MAX_DIFFICULTY}, got {difficulty}"
        )
    return difficulty


def create_word(fields: Dict, word_id: Optional[int], now: int) -> Word:
    """Build a fresh Word from lexical fields with default scheduling state.

    Any review-state keys present in ``fields`` are ignored, so imported
    records always start from scratch.
    """
    lexical = {}
    for name in LEXICAL_FIELDS:
        value = _lookup(fields, name)
        if value is not None:
            lexical[name] = value

    lexical["difficulty"] = parse_difficulty(lexical.get("difficulty"))

    return Word(
        id=word_id,
        last_reviewed=now,
        next_review=now + SECONDS_PER_DAY,
        review_count=0,
        ease_factor=INITIAL_EASE_FACTOR,
        interval=INITIAL_INTERVAL_DAYS,
        learned=False,
        mastered=False,
        **lexical,
    )
