"""Read-only client for the song HTTP API.

Endpoints (relative to the base URL):

    GET /api/songs?language=&category=&difficulty=&q=   list, sorted by title
    GET /api/songs/<id>                                 one song, counts a view
    GET /api/latest?limit=N                             newest first
    GET /api/popular?limit=N                            most viewed first

Responses are JSON song records (see :meth:`Song.from_dict`).  Creating and
editing songs needs an admin token and is not exposed here.
"""

import httpx

from ..exceptions import FetchError, ParseError, SongNotFoundError
from ..log import log
from ..models import Song
from .base import SongSource


class ApiSongSource(SongSource):
    """Song source backed by a remote worship song API."""

    def __init__(self, location: str, timeout: float = 15):
        super().__init__(location.rstrip("/"))
        self.timeout = timeout

    @classmethod
    def can_handle(cls, location: str) -> bool:
        return location.startswith(("http://", "https://"))

    def list_songs(
        self,
        language: str | None = None,
        category: str | None = None,
        difficulty: str | None = None,
        query: str | None = None,
    ) -> list[Song]:
        params = {"language": language, "category": category, "difficulty": difficulty, "q": query}
        data = self._get("/api/songs", {k: v for k, v in params.items() if v})
        return [Song.from_dict(record) for record in data]

    def get_song(self, song_id: str) -> Song:
        try:
            return Song.from_dict(self._get(f"/api/songs/{song_id}"))
        except FetchError as exc:
            if exc.status_code == 404:
                raise SongNotFoundError(song_id) from exc
            raise

    def latest(self, limit: int = 5) -> list[Song]:
        return [Song.from_dict(r) for r in self._get("/api/latest", {"limit": limit})]

    def popular(self, limit: int = 5) -> list[Song]:
        return [Song.from_dict(r) for r in self._get("/api/popular", {"limit": limit})]

    def _get(self, path: str, params: dict | None = None):
        url = f"{self.location}{path}"
        log.debug("api_request", url=url, params=params)
        try:
            resp = httpx.get(url, params=params, follow_redirects=True, timeout=self.timeout)
        except httpx.RequestError as exc:
            raise FetchError(url, 0) from exc
        if resp.status_code != 200:
            raise FetchError(url, resp.status_code)
        try:
            return resp.json()
        except ValueError as exc:
            raise ParseError(url, "response is not JSON") from exc
