#!/usr/bin/env python3
"""Command-line front end for the vocabulary trainer.

Usage:
    python -m wordmaster.cli init
    python -m wordmaster.cli add serendipity --definition "a happy accident"
    python -m wordmaster.cli review 3 5
    python -m wordmaster.cli due
    python -m wordmaster.cli import words.json
    python -m wordmaster.cli convert-csv dictionary.csv words.json
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from wordmaster import database, transfer
from wordmaster.config import load_settings
from wordmaster.errors import WordMasterError
from wordmaster.media import MediaCache
from wordmaster.word import Word
from util.logging_util import set_level, setup_logger

logger = setup_logger(__name__)

COMMANDS_WITHOUT_DATABASE = {"init", "convert-csv", "pronounce", "image"}


def _format_epoch(epoch: int) -> str:
    return datetime.fromtimestamp(epoch).strftime("%Y-%m-%d %H:%M")


def _format_word_line(word: Word) -> str:
    status = "mastered" if word.mastered else "learned" if word.learned else "new"
    return f"{word.id:>5}  {word.word:<24} {status:<9} next {_format_epoch(word.next_review)}"


def _print_word(word: Word):
    print(f"#{word.id} {word.word} {word.phonetic}".rstrip())
    for label, value in [
        ("Definition", word.definition),
        ("Example", word.example),
        ("Translation", word.translation),
    ]:
        if value:
            print(f"  {label}: {value}")
    print(
        f"  Ease {word.ease_factor:.2f}, interval {word.interval}d, "
        f"reviews {word.review_count}, next review {_format_epoch(word.next_review)}"
    )


def _print_words(words: List[Word], empty_message: str):
    if not words:
        print(empty_message)
        return
    for word in words:
        print(_format_word_line(word))


def cmd_init(args):
    database.init_db()
    print("Database ready.")


def cmd_add(args):
    word = database.add_word({
        "word": args.word,
        "phonetic": args.phonetic,
        "definition": args.definition,
        "example": args.example,
        "translation": args.translation,
        "difficulty": args.difficulty,
    })
    print(f"Added '{word.word}' with id {word.id}")


def cmd_list(args):
    _print_words(database.list_words(), "No words yet. Add some first!")


def cmd_show(args):
    _print_word(database.get_word(args.id))


def cmd_delete(args):
    database.delete_word(args.id)
    print(f"Deleted word {args.id}")


def cmd_review(args):
    word = database.review_word(args.id, args.quality)
    _print_word(word)
    if word.mastered:
        print("  Mastered!")


def cmd_due(args):
    _print_words(database.get_words_for_review(), "Nothing to review right now.")


def cmd_new(args):
    limit = args.limit if args.limit is not None else load_settings().new_words_per_session
    _print_words(database.get_new_words_to_learn(limit), "No new words to learn.")


def cmd_stats(args):
    for key, value in database.get_learning_stats().as_dict().items():
        print(f"{key:>9}: {value}")


def _print_import_result(result):
    print(f"Imported {result.n_imported} words, skipped {result.n_skipped}")
    for headword, reason in result.skipped:
        print(f"  skipped '{headword}': {reason}")


def cmd_import(args):
    _print_import_result(transfer.import_word_file(args.path))


def cmd_seed(args):
    _print_import_result(transfer.import_example_words())


def cmd_export(args):
    count = transfer.export_words(args.path)
    print(f"Exported {count} words to {args.path}")


def cmd_convert_csv(args):
    records = transfer.convert_dictionary_csv(args.csv_path)
    transfer.write_word_list(records, args.output)
    print(f"Successfully processed {len(records)} words and saved to {args.output}")


def _media_cache() -> MediaCache:
    settings = load_settings()
    return MediaCache(
        settings.audio_dir,
        settings.image_dir,
        timeout=settings.request_timeout,
        pixabay_api_key=settings.pixabay_api_key,
    )


def cmd_pronounce(args):
    print(_media_cache().get_pronunciation_path(args.word))


def cmd_image(args):
    cache = _media_cache()
    if args.url:
        print(cache.save_image_from_url(args.word, args.url))
    else:
        print(cache.get_image_path(args.word))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wordmaster", description="Spaced-repetition vocabulary trainer")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init", help="Create the database").set_defaults(func=cmd_init)

    add_parser = subparsers.add_parser("add", help="Add a word")
    add_parser.add_argument("word")
    add_parser.add_argument("--phonetic", default="")
    add_parser.add_argument("--definition", default="")
    add_parser.add_argument("--example", default="")
    add_parser.add_argument("--translation", default="")
    add_parser.add_argument("--difficulty", type=int, choices=range(1, 6), default=1)
    add_parser.set_defaults(func=cmd_add)

    subparsers.add_parser("list", help="List all words").set_defaults(func=cmd_list)

    show_parser = subparsers.add_parser("show", help="Show one word")
    show_parser.add_argument("id", type=int)
    show_parser.set_defaults(func=cmd_show)

    delete_parser = subparsers.add_parser("delete", help="Delete a word")
    delete_parser.add_argument("id", type=int)
    delete_parser.set_defaults(func=cmd_delete)

    review_parser = subparsers.add_parser("review", help="Record a review (quality 0-5)")
    review_parser.add_argument("id", type=int)
    review_parser.add_argument("quality", type=int)
    review_parser.set_defaults(func=cmd_review)

    subparsers.add_parser("due", help="Words due for review").set_defaults(func=cmd_due)

    new_parser = subparsers.add_parser("new", help="Words not learned yet")
    new_parser.add_argument("--limit", type=int, default=None)
    new_parser.set_defaults(func=cmd_new)

    subparsers.add_parser("stats", help="Learning statistics").set_defaults(func=cmd_stats)

    import_parser = subparsers.add_parser("import", help="Import a JSON word list")
    import_parser.add_argument("path", type=Path)
    import_parser.set_defaults(func=cmd_import)

    subparsers.add_parser("seed", help="Import the bundled example words").set_defaults(func=cmd_seed)

    export_parser = subparsers.add_parser("export", help="Export all words to JSON")
    export_parser.add_argument("path", type=Path)
    export_parser.set_defaults(func=cmd_export)

    convert_parser = subparsers.add_parser("convert-csv", help="Convert a dictionary CSV to a word list")
    convert_parser.add_argument("csv_path", type=Path)
    convert_parser.add_argument("output", type=Path)
    convert_parser.set_defaults(func=cmd_convert_csv)

    pronounce_parser = subparsers.add_parser("pronounce", help="Fetch pronunciation audio")
    pronounce_parser.add_argument("word")
    pronounce_parser.set_defaults(func=cmd_pronounce)

    image_parser = subparsers.add_parser("image", help="Fetch or set a word image")
    image_parser.add_argument("word")
    image_parser.add_argument("--url", default=None)
    image_parser.set_defaults(func=cmd_image)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        set_level(logging.DEBUG)

    try:
        if args.command not in COMMANDS_WITHOUT_DATABASE:
            database.init_db()
        args.func(args)
    except (WordMasterError, ValueError, OSError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
