"""
Constants for the vocabulary trainer.
"""

from pathlib import Path

MODULE_ROOT = Path(__file__).parent

DB_NAME = "wordmaster.db"

DEFAULT_DATA_DIR = Path.home() / ".wordmaster"
DATA_DIR_ENV_VAR = "WORDMASTER_DATA_DIR"
SETTINGS_FILENAME = "settings.yaml"

SECONDS_PER_DAY = 24 * 60 * 60

# SM-2 scheduling parameters
INITIAL_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
INITIAL_INTERVAL_DAYS = 1
SECOND_INTERVAL_DAYS = 6
MIN_QUALITY = 0
MAX_QUALITY = 5
PASSING_QUALITY = 3

# A word counts as mastered once all of these are met on a single review
MASTERY_MIN_QUALITY = 4
MASTERY_MIN_REVIEWS = 5
MASTERY_MIN_INTERVAL_DAYS = 30

DEFAULT_DIFFICULTY = 1
MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5
DEFAULT_NEW_WORDS_PER_SESSION = 10

REQUEST_TIMEOUT_SECONDS = 10

PRONUNCIATION_URL_TEMPLATES = [
    "https://dict.youdao.com/dictvoice?audio={word}&type=1",
    "https://api.dictionaryapi.dev/api/v2/entries/en/{word}",
    "https://translate.google.com/translate_tts?ie=UTF-8&q={word}&tl=en&client=tw-ob",
]

IMAGE_SEARCH_URL_TEMPLATE = (
    "https://pixabay.com/api/?key={api_key}&q={word}&image_type=photo&per_page=3"
)
PLACEHOLDER_IMAGE_URL_TEMPLATE = "https://via.placeholder.com/400x300.jpg?text={word}"
DEMO_PIXABAY_API_KEY = "no_api_key_demo_mode"

EXAMPLE_WORDS_PATH = MODULE_ROOT / "data" / "example_words.json"
