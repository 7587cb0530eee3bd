from abc import ABC, abstractmethod

from ..exceptions import ReadOnlySourceError
from ..models import Song


class SongSource(ABC):
    """Abstract base class for places song records are read from."""

    def __init__(self, location: str):
        self.location = location

    @classmethod
    @abstractmethod
    def can_handle(cls, location: str) -> bool:
        """Return True if this source can serve songs from *location*."""

    @abstractmethod
    def list_songs(
        self,
        language: str | None = None,
        category: str | None = None,
        difficulty: str | None = None,
        query: str | None = None,
    ) -> list[Song]:
        """Return songs matching every given filter, sorted by title.

        ``language`` and ``difficulty`` match exactly, ``category`` must be
        one of the song's categories and ``query`` is a case-insensitive
        substring of the title.
        """

    @abstractmethod
    def get_song(self, song_id: str) -> Song:
        """Return one song and count a view of it.

        Raises SongNotFoundError if no song has this id.
        """

    @abstractmethod
    def latest(self, limit: int = 5) -> list[Song]:
        """Return the most recently created songs, newest first."""

    @abstractmethod
    def popular(self, limit: int = 5) -> list[Song]:
        """Return the most viewed songs, most viewed first."""

    # Admin operations; sources that cannot write leave these as they are.

    def create_song(self, data: dict) -> Song:
        raise ReadOnlySourceError(self.location)

    def update_song(self, song_id: str, data: dict) -> Song:
        raise ReadOnlySourceError(self.location)

    def delete_song(self, song_id: str) -> None:
        raise ReadOnlySourceError(self.location)
