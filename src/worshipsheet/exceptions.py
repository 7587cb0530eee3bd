class WorshipSheetError(Exception):
    """Base exception for worshipsheet."""


class FetchError(WorshipSheetError):
    """Raised when an HTTP request to the song API fails."""

    def __init__(self, url: str, status_code: int):
        self.url = url
        self.status_code = status_code
        super().__init__(f"HTTP {status_code} fetching {url}")


class ParseError(WorshipSheetError):
    """Raised when the song API answers with a body that is not JSON."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Parse error for {url}: {reason}")


class SongNotFoundError(WorshipSheetError):
    """Raised when no song record exists for the given id."""

    def __init__(self, song_id: str):
        self.song_id = song_id
        super().__init__(f"Song not found: {song_id}")


class SongValidationError(WorshipSheetError):
    """Raised when a song record is missing fields or has invalid values."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Validation error: {reason}")


class UnsupportedSourceError(WorshipSheetError):
    """Raised when no song source matches the given location."""

    def __init__(self, location: str):
        self.location = location
        super().__init__(f"No song source found for: {location}")


class ReadOnlySourceError(WorshipSheetError):
    """Raised when a mutation is attempted on a read-only song source."""

    def __init__(self, location: str):
        self.location = location
        super().__init__(f"Song source is read-only: {location}")
