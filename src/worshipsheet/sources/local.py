"""Song records kept in a local JSON file.

File layout: a JSON array of song records using the same camelCase field
names as the HTTP API::

    [
      {
        "_id": "5f0c...",
        "title": "Arise and Sing",
        "primaryLanguage": "english",
        "lyricVariants": [{"language": "english", "script": "original", "body": "..."}],
        "chordSets": [{"difficulty": "easy", "key": "C", "body": "C  F  G\\n..."}],
        "views": 3,
        "createdAt": "2024-05-01T10:00:00+00:00",
        ...
      }
    ]

A missing file is treated as an empty store.  Every write replaces the whole
file through a temporary sibling so readers never see a half-written array.
"""

import json
import os
import uuid
from datetime import datetime, timezone
from pathlib import Path

from ..exceptions import SongNotFoundError, SongValidationError
from ..log import log
from ..models import Song
from .base import SongSource


class LocalSongSource(SongSource):
    """Read/write song store backed by a JSON file."""

    def __init__(self, location: str):
        super().__init__(location)
        self.path = Path(location)

    @classmethod
    def can_handle(cls, location: str) -> bool:
        return not location.startswith(("http://", "https://"))

    def list_songs(
        self,
        language: str | None = None,
        category: str | None = None,
        difficulty: str | None = None,
        query: str | None = None,
    ) -> list[Song]:
        songs = [Song.from_dict(r) for r in self._read()]
        if language:
            songs = [s for s in songs if s.primary_language == language]
        if category:
            songs = [s for s in songs if category in s.categories]
        if difficulty:
            songs = [s for s in songs if s.difficulty == difficulty]
        if query:
            needle = query.lower()
            songs = [s for s in songs if needle in s.title.lower()]
        return sorted(songs, key=lambda s: s.title)

    def get_song(self, song_id: str, count_view: bool = True) -> Song:
        records = self._read()
        index = _find(records, song_id)
        song = Song.from_dict(records[index])
        if count_view:
            song.views += 1
            records[index]["views"] = song.views
            self._write(records)
        return song

    def latest(self, limit: int = 5) -> list[Song]:
        songs = [Song.from_dict(r) for r in self._read()]
        return sorted(songs, key=lambda s: s.created_at or "", reverse=True)[:limit]

    def popular(self, limit: int = 5) -> list[Song]:
        songs = [Song.from_dict(r) for r in self._read()]
        return sorted(songs, key=lambda s: s.views, reverse=True)[:limit]

    def create_song(self, data: dict) -> Song:
        now = _now()
        song = Song.from_dict(data)
        song.id = uuid.uuid4().hex
        song.views = 0
        song.created_at = now
        song.updated_at = now

        records = self._read()
        records.append(song.to_dict())
        self._write(records)
        log.info("song_created", song_id=song.id, title=song.title)
        return song

    def update_song(self, song_id: str, data: dict) -> Song:
        """Replace the fields given in *data*, leaving the others as stored."""
        if not isinstance(data, dict):
            raise SongValidationError("song update must be an object")
        records = self._read()
        index = _find(records, song_id)
        merged = {**records[index], **data}
        merged["_id"] = song_id
        merged["createdAt"] = records[index].get("createdAt")
        merged["updatedAt"] = _now()
        song = Song.from_dict(merged)

        records[index] = song.to_dict()
        self._write(records)
        log.info("song_updated", song_id=song_id)
        return song

    def delete_song(self, song_id: str) -> None:
        records = self._read()
        del records[_find(records, song_id)]
        self._write(records)
        log.info("song_deleted", song_id=song_id)

    # -----------------------------------------------------------------------
    # File access
    # -----------------------------------------------------------------------

    def _read(self) -> list[dict]:
        if not self.path.exists():
            return []
        try:
            records = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise SongValidationError(f"{self.path} is not valid JSON: {exc}") from exc
        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            raise SongValidationError(f"{self.path} must contain a JSON array of songs")
        return records

    def _write(self, records: list[dict]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(records, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
        os.replace(tmp, self.path)
        log.debug("store_written", path=str(self.path), songs=len(records))


def _find(records: list[dict], song_id: str) -> int:
    for i, record in enumerate(records):
        if record.get("_id") == song_id:
            return i
    raise SongNotFoundError(song_id)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()
