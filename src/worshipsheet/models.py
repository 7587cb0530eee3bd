from dataclasses import dataclass, field
from typing import Any

from .exceptions import SongValidationError

# Canonical pitch-class names, index == semitones above C.
PITCH_CLASSES = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")

FLAT_TO_SHARP = {
    "Db": "C#",
    "Eb": "D#",
    "Gb": "F#",
    "Ab": "G#",
    "Bb": "A#",
}

LANGUAGES = ("english", "tamil", "kannada", "hindi", "telugu", "malayalam", "other")
SCRIPTS = ("original", "transliteration")
CHORD_DIFFICULTIES = ("easy", "advanced")
SONG_DIFFICULTIES = ("easy", "advanced", "mixed")


@dataclass(frozen=True)
class ParsedChord:
    """A chord token split into root, suffix and optional slash bass.

    Example: "Dbmaj7/F" -> root "C#", suffix "maj7", bass ParsedChord("F", "").
    ``root`` is None when the token does not start with a recognisable note.
    """

    root: str | None
    suffix: str
    bass: "ParsedChord | None" = None
    bass_text: str | None = None  # verbatim text after the first "/"


@dataclass(frozen=True)
class ChordMatch:
    """Location of one chord token within a single line."""

    offset: int
    length: int
    text: str


@dataclass(frozen=True)
class Segment:
    """A piece of a chord-chart line, either plain text or a chord."""

    text: str
    is_chord: bool = False


@dataclass
class LyricVariant:
    """Lyrics in one language and script.

    Tamil lyrics may exist twice: once in Tamil script ("original") and once
    romanised ("transliteration", shown as Tanglish).
    """

    language: str
    body: str
    script: str = "original"


@dataclass
class ChordSet:
    """One complete chord chart at a given difficulty and key."""

    difficulty: str
    key: str
    body: str
    language: str | None = None  # absent on records created before tagging


@dataclass
class Song:
    """A song record as stored by the admin boundary."""

    title: str
    primary_language: str
    artist: str | None = None
    categories: list[str] = field(default_factory=list)
    difficulty: str = "mixed"
    tags: list[str] = field(default_factory=list)
    lyric_variants: list[LyricVariant] = field(default_factory=list)
    chord_sets: list[ChordSet] = field(default_factory=list)
    is_tamil_with_tanglish: bool = False
    is_kannada_with_english: bool = False
    youtube_url: str | None = None
    ppt_urls: dict[str, str] = field(default_factory=dict)  # english/tamil/kannada
    views: int = 0
    id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def secondary_script_enabled(self) -> bool:
        """True when the song offers a second script for its own language."""
        if self.primary_language == "tamil":
            return self.is_tamil_with_tanglish
        if self.primary_language == "kannada":
            return self.is_kannada_with_english
        return False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Song":
        """Build a Song from a JSON-shaped record (camelCase field names).

        Raises SongValidationError if required fields are missing, a field has
        the wrong JSON type, or an enumerated field has an unknown value.
        """
        if not isinstance(data, dict):
            raise SongValidationError("song record must be an object")

        title = _text("title", data.get("title"))
        if not title:
            raise SongValidationError("title is required")
        primary_language = data.get("primaryLanguage")
        _check_choice("primaryLanguage", primary_language, LANGUAGES)
        difficulty = data.get("difficulty") or "mixed"
        _check_choice("difficulty", difficulty, SONG_DIFFICULTIES)

        return cls(
            title=title,
            primary_language=primary_language,
            artist=_text("artist", data.get("artist")),
            categories=_text_list("categories", data.get("categories")),
            difficulty=difficulty,
            tags=_text_list("tags", data.get("tags")),
            lyric_variants=[_lyric_variant(v) for v in _list("lyricVariants", data.get("lyricVariants"))],
            chord_sets=[_chord_set(c) for c in _list("chordSets", data.get("chordSets"))],
            is_tamil_with_tanglish=bool(data.get("isTamilWithTanglish", False)),
            is_kannada_with_english=bool(data.get("isKannadaWithEnglish", False)),
            youtube_url=_text("youtubeUrl", data.get("youtubeUrl")),
            ppt_urls=_ppt_urls(data.get("pptUrls")),
            views=_count("views", data.get("views")),
            id=_text("_id", data.get("_id") or data.get("id")),
            created_at=_text("createdAt", data.get("createdAt")),
            updated_at=_text("updatedAt", data.get("updatedAt")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-shaped record for this song."""
        data: dict[str, Any] = {
            "_id": self.id,
            "title": self.title,
            "artist": self.artist,
            "primaryLanguage": self.primary_language,
            "categories": list(self.categories),
            "difficulty": self.difficulty,
            "tags": list(self.tags),
            "lyricVariants": [
                {"language": v.language, "script": v.script, "body": v.body}
                for v in self.lyric_variants
            ],
            "chordSets": [_chord_set_dict(c) for c in self.chord_sets],
            "isTamilWithTanglish": self.is_tamil_with_tanglish,
            "isKannadaWithEnglish": self.is_kannada_with_english,
            "youtubeUrl": self.youtube_url,
            "pptUrls": dict(self.ppt_urls),
            "views": self.views,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
        return {k: v for k, v in data.items() if v is not None}


@dataclass
class RenderedSong:
    """Display-ready output of one render pass over a song."""

    lyrics: str | None  # None when the song has no lyric variants
    chord_set: ChordSet | None
    chord_lines: list[list[Segment]] = field(default_factory=list)
    offset: int = 0
    key: str | None = None  # chord-set key after transposition


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _check_choice(name: str, value: Any, choices: tuple[str, ...]) -> None:
    if value not in choices:
        raise SongValidationError(f"{name} must be one of {', '.join(choices)} (got {value!r})")


def _text(name: str, value: Any) -> str | None:
    """Return *value* stripped, or None when it is absent or blank."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise SongValidationError(f"{name} must be a string (got {value!r})")
    return value.strip() or None


def _body(name: str, value: Any) -> str:
    # Chart bodies are column-aligned, so they are never stripped
    if not value:
        raise SongValidationError(f"{name} is required")
    if not isinstance(value, str):
        raise SongValidationError(f"{name} must be a string (got {value!r})")
    return value


def _list(name: str, value: Any) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise SongValidationError(f"{name} must be an array (got {value!r})")
    return value


def _text_list(name: str, value: Any) -> list[str]:
    items = _list(name, value)
    for item in items:
        if not isinstance(item, str):
            raise SongValidationError(f"{name} must contain only strings (got {item!r})")
    return list(items)


def _count(name: str, value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, bool):
        raise SongValidationError(f"{name} must be a number (got {value!r})")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise SongValidationError(f"{name} must be a number (got {value!r})") from exc


def _ppt_urls(value: Any) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise SongValidationError(f"pptUrls must be an object (got {value!r})")
    urls = {}
    for language, url in value.items():
        url = _text(f"pptUrls.{language}", url)
        if url:
            urls[language] = url
    return urls


def _lyric_variant(data: Any) -> LyricVariant:
    if not isinstance(data, dict):
        raise SongValidationError(f"lyric variant must be an object (got {data!r})")
    language = _body("lyric variant language", data.get("language"))
    body = _body("lyric variant body", data.get("body"))
    script = data.get("script") or "original"
    _check_choice("script", script, SCRIPTS)
    return LyricVariant(language=language, body=body, script=script)


def _chord_set(data: Any) -> ChordSet:
    if not isinstance(data, dict):
        raise SongValidationError(f"chord set must be an object (got {data!r})")
    difficulty = data.get("difficulty")
    _check_choice("chord set difficulty", difficulty, CHORD_DIFFICULTIES)
    key = _body("chord set key", data.get("key"))
    body = _body("chord set body", data.get("body"))
    language = _text("chord set language", data.get("language"))
    return ChordSet(difficulty=difficulty, key=key, body=body, language=language)


def _chord_set_dict(chord_set: ChordSet) -> dict[str, Any]:
    data = {"difficulty": chord_set.difficulty, "key": chord_set.key, "body": chord_set.body}
    if chord_set.language:
        data["language"] = chord_set.language
    return data

