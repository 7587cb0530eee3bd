"""Chord parsing, transposition and highlighting for monospaced chord charts.

Chord charts are plain text with chord names space-aligned above the lyric
they belong to::

    C              F              G
    Arise and sing, lift your voice

The pipeline used when a chart is displayed:

  1. find_chords(): (offset, length, text) of every chord token in a line
  2. transpose_chord(): shift one chord name by N semitones
  3. transpose_line(): transpose every token in a line, keeping columns
  4. highlight_line(): split a line into plain / chord segments

None of these functions raise: text that does not look like a chord is passed
through untouched.
"""

import re

from .models import FLAT_TO_SHARP, PITCH_CLASSES, ChordMatch, ParsedChord, Segment

# ---------------------------------------------------------------------------
# Regexes
# ---------------------------------------------------------------------------

# A chord token inside a line of text.
# Handles:
#   Plain and accidentals:  C, C#, Bb, F#m
#   One quality marker:     Am, Cmaj7, Bdim, Eaug, Dsus4, Gadd9
#   Slash chords:           G/B, Am7/G, D/F#m
# "#" counts as part of the word on both sides, so "C#" is one token.
CHORD_TOKEN_RE = re.compile(
    r"(?<![\w#])"
    r"[A-G][#b]?"
    r"(?:maj|m|dim|aug|sus|add)?"
    r"\d*"
    r"(?:/[A-G][#b]?\w*)?"
    r"(?![\w#])"
)

# Root note at the start of a chord name; everything after it is the suffix.
_ROOT_RE = re.compile(r"^([A-G][#b]?)(.*)$", re.DOTALL)


# ---------------------------------------------------------------------------
# Chord token model
# ---------------------------------------------------------------------------


def parse_chord(token: str) -> ParsedChord:
    """Split *token* into a normalised root, its suffix and an optional bass.

    Flat roots are respelled as sharps (``Db`` -> ``C#``).  Only the first
    ``/`` separates the bass; anything after a second ``/`` stays in the bass
    suffix.  Tokens that do not start with a known note come back with
    ``root=None`` and the whole token as the suffix.
    """
    main, sep, bass_text = token.partition("/")
    root, suffix = _split_root(main)
    if root is None:
        return ParsedChord(root=None, suffix=token)
    if not sep:
        return ParsedChord(root=root, suffix=suffix)

    bass_root, bass_suffix = _split_root(bass_text)
    bass = ParsedChord(root=bass_root, suffix=bass_suffix) if bass_root else None
    return ParsedChord(root=root, suffix=suffix, bass=bass, bass_text=bass_text)


def _split_root(text: str) -> tuple[str | None, str]:
    m = _ROOT_RE.match(text)
    if not m:
        return None, text
    root = FLAT_TO_SHARP.get(m.group(1), m.group(1))
    if root not in PITCH_CLASSES:
        # Cb, Fb, E#, B# have no entry in the twelve-name table
        return None, text
    return root, m.group(2)


# ---------------------------------------------------------------------------
# Transposition
# ---------------------------------------------------------------------------


def transpose_chord(chord: str, steps: int) -> str:
    """Return *chord* shifted by *steps* semitones (negative = down).

    The suffix is kept verbatim and output roots always use sharps::

        transpose_chord("G/B", 2)    == "A/C#"
        transpose_chord("Bb", 1)     == "B"
        transpose_chord("Hello", 3)  == "Hello"
    """
    if not chord or not chord.strip():
        return chord

    parsed = parse_chord(chord)
    if parsed.root is None:
        return chord

    result = _shift(parsed.root, steps) + parsed.suffix
    if parsed.bass_text is None:
        return result
    if parsed.bass is None:
        # Bass text is not a note (e.g. lowercase "D/f#"); keep it as written
        return f"{result}/{parsed.bass_text}"
    return f"{result}/{_shift(parsed.bass.root, steps)}{parsed.bass.suffix}"


def _shift(root: str, steps: int) -> str:
    index = PITCH_CLASSES.index(root)
    return PITCH_CLASSES[(index + steps) % len(PITCH_CLASSES)]


# ---------------------------------------------------------------------------
# Line tokenizer
# ---------------------------------------------------------------------------


def find_chords(line: str) -> list[ChordMatch]:
    """Return every chord-shaped token in *line*, left to right.

    The match is permissive: a lyric word such as ``A`` or ``Am`` is reported
    as a chord too.
    """
    return [
        ChordMatch(offset=m.start(), length=len(m.group()), text=m.group())
        for m in CHORD_TOKEN_RE.finditer(line)
    ]


# ---------------------------------------------------------------------------
# Line transposer
# ---------------------------------------------------------------------------


def transpose_line(line: str, steps: int) -> str:
    """Transpose every chord token in *line*, keeping chords in their columns.

    Tokens are replaced from the right so earlier offsets stay valid.  A
    replacement shorter than the original is padded with spaces to the
    original width; a longer one is inserted whole and pushes the rest of the
    line to the right.

    Example::

        transpose_line("C    F    G", 2)  == "D    G    A"
        transpose_line("E  A", 1)         == "F  A#"
    """
    if steps == 0 or not line.strip():
        return line

    result = line
    for match in reversed(find_chords(line)):
        replacement = transpose_chord(match.text, steps).ljust(match.length)
        end = match.offset + match.length
        result = result[: match.offset] + replacement + result[end:]
    return result


def transpose_text(text: str, steps: int) -> str:
    """Apply :func:`transpose_line` to every line of a chord chart body."""
    if steps == 0:
        return text
    return "\n".join(transpose_line(line, steps) for line in text.split("\n"))


# ---------------------------------------------------------------------------
# Highlighter
# ---------------------------------------------------------------------------


def highlight_line(line: str) -> list[Segment]:
    """Split *line* into alternating plain-text and chord segments.

    Joining the segment texts gives back *line* exactly.  A line without
    chords comes back as a single plain segment (even when empty).
    """
    segments: list[Segment] = []
    last = 0
    for match in find_chords(line):
        if match.offset > last:
            segments.append(Segment(line[last : match.offset]))
        segments.append(Segment(match.text, is_chord=True))
        last = match.offset + match.length

    if last < len(line):
        segments.append(Segment(line[last:]))

    return segments or [Segment(line)]


# ---------------------------------------------------------------------------
# Transpose offset
# ---------------------------------------------------------------------------


def normalize_offset(steps: int) -> int:
    """Fold *steps* into ``[-11, 11]`` keeping its sign (12 -> 0, -13 -> -1)."""
    folded = abs(steps) % len(PITCH_CLASSES)
    return folded if steps >= 0 else -folded


def format_offset(steps: int) -> str:
    """Display form of a transpose offset: ``"+1"``, ``"-2"``, ``"0"``."""
    steps = normalize_offset(steps)
    return f"+{steps}" if steps > 0 else str(steps)
