"""Pick the lyric variant and chord set to show for a song and script mode.

Songs in Tamil or Kannada can carry a second script (Tanglish, or Kannada
lyrics written in English letters).  The viewer toggles between the two and
both the lyrics and the chord chart follow the toggle.

Chord sets were not always tagged with a language.  For untagged records the
selector falls back on position: with two or more untagged sets the first
belongs to the primary script and the second to the secondary one.
"""

from enum import Enum

from .chords import highlight_line, normalize_offset, transpose_chord, transpose_text
from .log import log
from .models import ChordSet, LyricVariant, RenderedSong, Song

# Chord-set language tag used for the secondary script of each language.
_SECONDARY_TAGS = {
    "tamil": "tanglish",
    "kannada": "english",
}

# Toggle labels shown to the viewer: (original, secondary).
_MODE_LABELS = {
    "tamil": ("Tamil", "English (Tanglish)"),
    "kannada": ("Kannada", "English"),
}


class ScriptMode(Enum):
    ORIGINAL = "original"
    SECONDARY = "secondary"

    @classmethod
    def parse(cls, text: str) -> "ScriptMode":
        """Accept ``original``/``secondary`` or the language-specific names.

        ``tamil`` and ``kannada`` mean the original script; ``tanglish``,
        ``english`` and ``transliteration`` mean the secondary one.
        """
        name = text.strip().lower()
        if name in ("original", "tamil", "kannada"):
            return cls.ORIGINAL
        if name in ("secondary", "tanglish", "english", "transliteration"):
            return cls.SECONDARY
        raise ValueError(f"Unknown script mode: {text!r}")


def mode_labels(song: Song) -> tuple[str, str] | None:
    """Return the toggle labels for *song*, or None if it has one script."""
    if not song.secondary_script_enabled:
        return None
    return _MODE_LABELS[song.primary_language]


def select_lyrics(song: Song, mode: ScriptMode = ScriptMode.ORIGINAL) -> LyricVariant | None:
    """Return the lyric variant to display, or None if the song has none.

    Lookup order:
      1. exact language + script (transliteration only in secondary mode of a
         two-script song)
      2. first variant in the primary language
      3. first variant of any language
    """
    if not song.lyric_variants:
        return None

    script = "original"
    if song.secondary_script_enabled and mode is ScriptMode.SECONDARY:
        script = "transliteration"

    for variant in song.lyric_variants:
        if variant.language == song.primary_language and variant.script == script:
            return variant
    for variant in song.lyric_variants:
        if variant.language == song.primary_language:
            return variant
    return song.lyric_variants[0]


def select_chord_set(song: Song, mode: ScriptMode = ScriptMode.ORIGINAL) -> ChordSet | None:
    """Return the chord set to display, or None if the song has none."""
    if not song.chord_sets:
        return None
    if not song.secondary_script_enabled:
        return song.chord_sets[0]

    secondary = mode is ScriptMode.SECONDARY
    target = _SECONDARY_TAGS[song.primary_language] if secondary else song.primary_language
    for chord_set in song.chord_sets:
        if chord_set.language == target:
            return chord_set

    untagged = [c for c in song.chord_sets if not c.language]
    if len(untagged) >= 2:
        log.debug("chord_set_positional_fallback", song_id=song.id, mode=mode.value)
        return untagged[1 if secondary else 0]
    if untagged:
        return untagged[0]
    return song.chord_sets[0]


def render_song(song: Song, mode: ScriptMode = ScriptMode.ORIGINAL, offset: int = 0) -> RenderedSong:
    """Run one full render pass: select, transpose, then highlight.

    *offset* is folded into ``[-11, 11]`` before use.  Missing lyrics or
    chords are reported as None / an empty line list, never as an error.
    """
    offset = normalize_offset(offset)
    variant = select_lyrics(song, mode)
    chord_set = select_chord_set(song, mode)

    chord_lines = []
    key = None
    if chord_set is not None:
        body = transpose_text(chord_set.body, offset)
        chord_lines = [highlight_line(line) for line in body.split("\n")]
        key = transpose_chord(chord_set.key, offset) if offset else chord_set.key

    return RenderedSong(
        lyrics=variant.body if variant else None,
        chord_set=chord_set,
        chord_lines=chord_lines,
        offset=offset,
        key=key,
    )
