"""
Moving word lists in and out of the database.

Word list files are JSON documents of the form ``{"words": [...]}`` where
each entry uses the camelCase record keys (``imageUrl``, ``nextReview``...).
Dictionary spreadsheets exported as CSV can be converted into that format
with ``convert_dictionary_csv``.
"""

import csv
import json
from pathlib import Path
from typing import Dict, List

from wordmaster.constants import EXAMPLE_WORDS_PATH
from wordmaster.database import import_words, list_words
from wordmaster.sm2 import Clock, current_epoch
from wordmaster.word import ImportResult
from util.logging_util import setup_logger

logger = setup_logger(__name__)

# Columns of the dictionary spreadsheet, after the header row
CSV_COLUMNS = [
    "id",
    "word",
    "en_phonetic",
    "us_phonetic",
    "desc",
    "en_pronunciation",
    "us_pronunciation",
    "svg_url",
]


def load_word_list(path: Path) -> List[Dict]:
    """Read the word records from a JSON word list file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get("words"), list):
        return data["words"]

    raise ValueError(f"{path} is not a word list: expected a 'words' array")


def write_word_list(records: List[Dict], path: Path):
    with open(path, "w", encoding="utf-8") as f:
        json.dump({"words": records}, f, indent=2, ensure_ascii=False)


def import_word_file(path: Path, clock: Clock = current_epoch) -> ImportResult:
    records = load_word_list(path)
    logger.info(f"Importing {len(records)} records from {path}")
    return import_words(records, clock)


def export_words(path: Path) -> int:
    """Write every stored word to a JSON word list. Returns the word count."""
    words = list_words()
    write_word_list([word.to_json_dict() for word in words], path)
    logger.info(f"Exported {len(words)} words to {path}")
    return len(words)


def convert_dictionary_csv(csv_path: Path) -> List[Dict]:
    """Turn a dictionary spreadsheet export into importable word records."""
    records = []
    with open(csv_path, "r", encoding="utf-8", newline="") as f:
        reader = csv.reader(f)
        next(reader, None)  # header

        for line_number, row in enumerate(reader, start=2):
            if len(row) < len(CSV_COLUMNS):
                logger.warning(f"Skipping short row {line_number} in {csv_path}")
                continue

            columns = dict(zip(CSV_COLUMNS, row))
            records.append({
                "word": columns["word"],
                "phonetic": f"UK: {columns['en_phonetic']}, US: {columns['us_phonetic']}",
                "definition": columns["desc"],
                "example": "",
                "translation": "",
                "imageUrl": columns["svg_url"],
            })
            logger.debug(f"Processed word: {columns['word']}")

    return records


def import_example_words(clock: Clock = current_epoch) -> ImportResult:
    """Import the bundled starter word list."""
    return import_word_file(EXAMPLE_WORDS_PATH, clock)
