"""
Fetching and caching pronunciation audio and word images.

Files are cached on disk under the configured audio and image directories,
keyed by the lowercased, trimmed word.
"""

import base64
from pathlib import Path
from typing import Dict, Optional

import requests

from wordmaster.constants import (
    DEMO_PIXABAY_API_KEY,
    IMAGE_SEARCH_URL_TEMPLATE,
    PLACEHOLDER_IMAGE_URL_TEMPLATE,
    PRONUNCIATION_URL_TEMPLATES,
    REQUEST_TIMEOUT_SECONDS,
)
from wordmaster.errors import MediaDownloadError
from util.logging_util import setup_logger

logger = setup_logger(__name__)


def normalise_media_key(word: str) -> str:
    """Cache file stem for ``word``. Must name a file directly inside the cache dir."""
    key = word.strip().lower()
    if not key:
        raise ValueError("word cannot be empty")
    if "/" in key or "\\" in key:
        raise ValueError(f"word cannot be used as a file name: {word!r}")
    return key


class MediaCache:
    """Downloads media for words on demand and keeps it on disk."""

    def __init__(
        self,
        audio_dir: Path,
        image_dir: Path,
        session: Optional[requests.Session] = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        pixabay_api_key: str = DEMO_PIXABAY_API_KEY,
    ):
        self.audio_dir = Path(audio_dir)
        self.image_dir = Path(image_dir)
        self.audio_dir.mkdir(parents=True, exist_ok=True)
        self.image_dir.mkdir(parents=True, exist_ok=True)
        self.session = session or requests.Session()
        self.timeout = timeout
        self.pixabay_api_key = pixabay_api_key
        self._data_urls: Dict[str, str] = {}

    def _download(self, url: str, file_path: Path):
        """Save the body at ``url`` to ``file_path``, leaving nothing behind on failure."""
        response = self.session.get(url, timeout=self.timeout)
        if response.status_code != 200:
            raise MediaDownloadError(
                f"Failed to download {url}: status code {response.status_code}"
            )

        try:
            file_path.write_bytes(response.content)
        except OSError:
            file_path.unlink(missing_ok=True)
            raise

    def get_pronunciation_path(self, word: str) -> Path:
        """Path to the cached mp3 for ``word``, downloading it if needed."""
        key = normalise_media_key(word)
        file_path = self.audio_dir / f"{key}.mp3"
        if file_path.exists():
            return file_path

        last_error: Optional[Exception] = None
        for template in PRONUNCIATION_URL_TEMPLATES:
            url = template.format(word=key)
            try:
                self._download(url, file_path)
            except (requests.RequestException, MediaDownloadError, OSError) as e:
                logger.warning(f"Pronunciation source failed for '{key}': {e}")
                last_error = e
                continue
            logger.info(f"Downloaded pronunciation for '{key}'")
            return file_path

        raise MediaDownloadError(f"All pronunciation sources failed: {last_error}")

    def get_pronunciation_data_url(self, word: str) -> str:
        """The pronunciation as a base64 ``data:`` URL, memoised per word."""
        if word in self._data_urls:
            return self._data_urls[word]

        file_path = self.get_pronunciation_path(word)
        encoded = base64.b64encode(file_path.read_bytes()).decode("ascii")
        data_url = f"data:audio/mp3;base64,{encoded}"

        self._data_urls[word] = data_url
        return data_url

    def _image_file(self, key: str) -> Path:
        return self.image_dir / f"{key}.jpg"

    def get_image_path(self, word: str) -> Path:
        key = normalise_media_key(word)
        file_path = self._image_file(key)
        if file_path.exists():
            return file_path

        search_url = IMAGE_SEARCH_URL_TEMPLATE.format(api_key=self.pixabay_api_key, word=key)
        try:
            response = self.session.get(search_url, timeout=self.timeout)
        except requests.RequestException as e:
            raise MediaDownloadError(f"Image search failed for '{key}': {e}") from e
        if response.status_code != 200:
            raise MediaDownloadError(
                f"Failed to search image: status code {response.status_code}"
            )

        hits = response.json().get("hits", [])
        if hits:
            image_url = hits[0]["webformatURL"]
        else:
            logger.info(f"No images found for '{key}', using placeholder")
            image_url = PLACEHOLDER_IMAGE_URL_TEMPLATE.format(word=key)

        try:
            self._download(image_url, file_path)
        except requests.RequestException as e:
            raise MediaDownloadError(f"Image download failed for '{key}': {e}") from e

        return file_path

    def get_image_url(self, word: str) -> str:
        """Relative URL under which the front end serves the word's image."""
        return f"/images/{self.get_image_path(word).name}"

    def save_image_from_url(self, word: str, image_url: str) -> str:
        """Store the image at ``image_url`` as the word's image."""
        file_path = self._image_file(normalise_media_key(word))
        try:
            self._download(image_url, file_path)
        except requests.RequestException as e:
            raise MediaDownloadError(f"Image download failed for '{word}': {e}") from e
        return f"/images/{file_path.name}"
