import logging
import math
import time
from dataclasses import replace
from typing import Callable

from wordmaster.constants import (
    INITIAL_INTERVAL_DAYS,
    MASTERY_MIN_INTERVAL_DAYS,
    MASTERY_MIN_QUALITY,
    MASTERY_MIN_REVIEWS,
    MAX_QUALITY,
    MIN_EASE_FACTOR,
    MIN_QUALITY,
    PASSING_QUALITY,
    SECOND_INTERVAL_DAYS,
    SECONDS_PER_DAY,
)
from wordmaster.errors import InvalidQuality
from wordmaster.word import Word

Clock = Callable[[], int]


def current_epoch() -> int:
    return int(time.time())


def validate_quality(quality: int) -> int:

    if isinstance(quality, bool) or not isinstance(quality, int):
        raise InvalidQuality(quality)
    if not MIN_QUALITY <= quality <= MAX_QUALITY:
        raise InvalidQuality(quality)

    return quality


def round_half_away_from_zero(value: float) -> int:

    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def get_new_ease_factor(ease_factor: float, quality: int) -> float:

    shortfall = MAX_QUALITY - quality
    new_ease_factor = ease_factor + (0.1 - shortfall * (0.08 + shortfall * 0.02))

    return max(new_ease_factor, MIN_EASE_FACTOR)


def get_new_interval(quality: int, review_count: int, interval: int, ease_factor: float) -> int:
    """Days until the next review.

    ``review_count`` already includes the review being applied, while
    ``interval`` and ``ease_factor`` are the values from before it.
    """

    if quality < PASSING_QUALITY:
        return INITIAL_INTERVAL_DAYS

    match review_count:
        case 1:
            return INITIAL_INTERVAL_DAYS
        case 2:
            return SECOND_INTERVAL_DAYS
        case _:
            return max(round_half_away_from_zero(interval * ease_factor), INITIAL_INTERVAL_DAYS)


def is_mastered(quality: int, review_count: int, interval: int) -> bool:
    return (
        quality >= MASTERY_MIN_QUALITY
        and review_count >= MASTERY_MIN_REVIEWS
        and interval >= MASTERY_MIN_INTERVAL_DAYS
    )


def apply_review(word: Word, quality: int, clock: Clock = current_epoch) -> Word:
    """Return a copy of ``word`` rescheduled after a review of the given quality.

    The input word is left untouched. Mastery is sticky: once set, later
    failed reviews reset the interval but keep ``mastered`` true.
    """

    quality = validate_quality(quality)
    now = clock()

    review_count = word.review_count + 1
    new_interval = get_new_interval(quality, review_count, word.interval, word.ease_factor)

    return replace(
        word,
        review_count=review_count,
        last_reviewed=now,
        ease_factor=get_new_ease_factor(word.ease_factor, quality),
        interval=new_interval,
        next_review=now + new_interval * SECONDS_PER_DAY,
        learned=True,
        mastered=word.mastered or is_mastered(quality, review_count, new_interval),
    )


def log_review_update(logger: logging.Logger, before: Word, after: Word, quality: int):

    logger.info(f"Reviewed '{after.word}' (id={after.id}) with quality {quality}")
    logger.debug(
        f"  ease factor {before.ease_factor:.2f} -> {after.ease_factor:.2f}, "
        f"interval {before.interval} -> {after.interval} days, "
        f"reviews {before.review_count} -> {after.review_count}"
    )
    if after.mastered and not before.mastered:
        logger.info(f"  '{after.word}' is now mastered")
