"""Transposer: shifts a chord's root and re-spells it in a notation system."""

from chordbook.chord_parser import parse_chord
from chordbook.notes import SEMITONES_PER_OCTAVE, Notation, note_name


def transpose_index(index: int, offset: int) -> int:
    """Shift a pitch class by any signed offset, landing in 0-11."""
    return (index + offset) % SEMITONES_PER_OCTAVE


def transpose_chord(
    text: str,
    offset: int,
    notation: Notation = Notation.LETTER,
) -> str:
    """
    Transpose a chord symbol and render it in the requested notation.

    Only the root changes: it is re-derived from the note table rather than
    string-edited, and the quality suffix is appended untouched.

    Args:
        text:     Chord symbol as typed by the user.
        offset:   Semitones to shift by; any integer, including < -12.
        notation: Letter names or solfège for the output root.

    Returns:
        Display string, e.g. transpose_chord("Am7", 3) == "Cm7".
    """
    parsed = parse_chord(text)
    root = note_name(transpose_index(parsed.root_index, offset), notation)
    return f"{root}{parsed.quality}"


def canonicalize(text: str, notation: Notation = Notation.LETTER) -> str:
    """Re-spell a chord's root canonically without moving it."""
    return transpose_chord(text, 0, notation)
