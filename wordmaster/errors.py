"""
Exceptions raised by the vocabulary trainer.
"""


class WordMasterError(Exception):
    pass


class InvalidQuality(WordMasterError, ValueError):
    """Review quality outside the 0-5 range."""

    def __init__(self, quality):
        super().__init__(f"Review quality must be an integer from 0 to 5, got {quality!r}")
        self.quality = quality


class WordNotFound(WordMasterError, LookupError):
    def __init__(self, word_id):
        super().__init__(f"Word {word_id} not found")
        self.word_id = word_id


class StoreIOError(WordMasterError):
    """The underlying database operation failed."""


class MediaDownloadError(WordMasterError):
    pass
