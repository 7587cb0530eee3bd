import pytest

from worshipsheet.models import ChordSet, LyricVariant, Segment, Song
from worshipsheet.selector import (
    ScriptMode,
    mode_labels,
    render_song,
    select_chord_set,
    select_lyrics,
)

ORIGINAL = ScriptMode.ORIGINAL
SECONDARY = ScriptMode.SECONDARY


def _chords(key: str, language: str | None = None) -> ChordSet:
    return ChordSet(difficulty="easy", key=key, body=f"{key}  F", language=language)


def _tamil_song(**kwargs) -> Song:
    defaults = dict(
        title="Yesuve",
        primary_language="tamil",
        is_tamil_with_tanglish=True,
        lyric_variants=[
            LyricVariant(language="tamil", script="original", body="இயேசுவே"),
            LyricVariant(language="tamil", script="transliteration", body="Yesuve"),
        ],
    )
    defaults.update(kwargs)
    return Song(**defaults)


def _kannada_song(**kwargs) -> Song:
    defaults = dict(title="Yesu", primary_language="kannada", is_kannada_with_english=True)
    defaults.update(kwargs)
    return Song(**defaults)


# ---------------------------------------------------------------------------
# ScriptMode
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("text", ["original", "Tamil", "kannada"])
def test_parse_original_mode(text):
    assert ScriptMode.parse(text) is ORIGINAL


@pytest.mark.parametrize("text", ["secondary", "tanglish", "English", "transliteration"])
def test_parse_secondary_mode(text):
    assert ScriptMode.parse(text) is SECONDARY


def test_parse_unknown_mode():
    with pytest.raises(ValueError):
        ScriptMode.parse("hindi")


def test_mode_labels():
    assert mode_labels(_tamil_song()) == ("Tamil", "English (Tanglish)")
    assert mode_labels(_kannada_song()) == ("Kannada", "English")
    assert mode_labels(Song(title="x", primary_language="english")) is None


# ---------------------------------------------------------------------------
# select_lyrics
# ---------------------------------------------------------------------------


def test_lyrics_secondary_mode_picks_transliteration():
    assert select_lyrics(_tamil_song(), SECONDARY).body == "Yesuve"


def test_lyrics_original_mode_picks_original_script():
    assert select_lyrics(_tamil_song(), ORIGINAL).body == "இயேசுவே"


def test_lyrics_secondary_ignored_without_flag():
    song = _tamil_song(is_tamil_with_tanglish=False)
    assert select_lyrics(song, SECONDARY).body == "இயேசுவே"


def test_lyrics_original_found_even_when_listed_second():
    song = _tamil_song(lyric_variants=[
        LyricVariant(language="tamil", script="transliteration", body="Yesuve"),
        LyricVariant(language="tamil", script="original", body="இயேசுவே"),
    ])
    assert select_lyrics(song, ORIGINAL).body == "இயேசுவே"


def test_lyrics_fall_back_to_language_match():
    song = _tamil_song(lyric_variants=[
        LyricVariant(language="english", body="Jesus"),
        LyricVariant(language="tamil", body="இயேசுவே"),
    ])
    assert select_lyrics(song, SECONDARY).body == "இயேசுவே"


def test_lyrics_fall_back_to_first_variant():
    song = Song(
        title="x",
        primary_language="hindi",
        lyric_variants=[LyricVariant(language="english", body="first"),
                        LyricVariant(language="tamil", body="second")],
    )
    assert select_lyrics(song).body == "first"


def test_lyrics_none_when_no_variants():
    assert select_lyrics(_tamil_song(lyric_variants=[]), SECONDARY) is None


# ---------------------------------------------------------------------------
# select_chord_set
# ---------------------------------------------------------------------------


def test_chords_single_language_song_uses_first_set():
    song = Song(title="x", primary_language="english", chord_sets=[_chords("C"), _chords("G")])
    assert select_chord_set(song, SECONDARY).key == "C"


def test_chords_none_when_no_sets():
    assert select_chord_set(_tamil_song(), SECONDARY) is None
    assert select_chord_set(Song(title="x", primary_language="english")) is None


def test_chords_tagged_secondary():
    song = _tamil_song(chord_sets=[_chords("C", "tamil"), _chords("G", "tanglish")])
    assert select_chord_set(song, SECONDARY).key == "G"
    assert select_chord_set(song, ORIGINAL).key == "C"


def test_chords_kannada_tag_is_english():
    song = _kannada_song(chord_sets=[_chords("D", "english"), _chords("A", "kannada")])
    assert select_chord_set(song, SECONDARY).key == "D"
    assert select_chord_set(song, ORIGINAL).key == "A"


def test_chords_untagged_positional_fallback():
    song = _kannada_song(chord_sets=[_chords("C"), _chords("G")])
    assert select_chord_set(song, SECONDARY) is song.chord_sets[1]
    assert select_chord_set(song, ORIGINAL) is song.chord_sets[0]


def test_chords_positional_fallback_counts_untagged_only():
    song = _tamil_song(chord_sets=[_chords("E", "hindi"), _chords("C"), _chords("G")])
    assert select_chord_set(song, SECONDARY).key == "G"
    assert select_chord_set(song, ORIGINAL).key == "C"


def test_chords_single_untagged_used_for_both_modes():
    song = _tamil_song(chord_sets=[_chords("E", "hindi"), _chords("C")])
    assert select_chord_set(song, SECONDARY).key == "C"
    assert select_chord_set(song, ORIGINAL).key == "C"


def test_chords_no_match_and_no_untagged_uses_first():
    song = _tamil_song(chord_sets=[_chords("E", "hindi"), _chords("F", "telugu")])
    assert select_chord_set(song, SECONDARY).key == "E"


def test_selection_is_deterministic():
    song = _kannada_song(chord_sets=[_chords("C"), _chords("G")])
    for mode in (ORIGINAL, SECONDARY):
        assert select_chord_set(song, mode) is select_chord_set(song, mode)
        assert select_lyrics(song, mode) == select_lyrics(song, mode)
        assert render_song(song, mode, 3) == render_song(song, mode, 3)


# ---------------------------------------------------------------------------
# render_song
# ---------------------------------------------------------------------------


def test_render_song_transposes_and_highlights():
    song = _tamil_song(chord_sets=[ChordSet(difficulty="easy", key="C", body="C    G\nYesuve")])
    rendered = render_song(song, SECONDARY, 2)
    assert rendered.lyrics == "Yesuve"
    assert rendered.offset == 2
    assert rendered.key == "D"
    assert rendered.chord_lines == [
        [Segment("D", is_chord=True), Segment("    "), Segment("A", is_chord=True)],
        [Segment("Yesuve")],
    ]


def test_render_song_normalises_offset():
    song = _tamil_song(chord_sets=[_chords("C")])
    rendered = render_song(song, ORIGINAL, 14)
    assert rendered.offset == 2
    assert rendered.key == "D"


def test_render_song_zero_offset_keeps_key_spelling():
    song = _tamil_song(chord_sets=[_chords("Bb")])
    assert render_song(song, ORIGINAL, 0).key == "Bb"


def test_render_song_without_chords_or_lyrics():
    rendered = render_song(Song(title="x", primary_language="english"), ORIGINAL, 5)
    assert rendered.lyrics is None
    assert rendered.chord_set is None
    assert rendered.chord_lines == []
    assert rendered.key is None
