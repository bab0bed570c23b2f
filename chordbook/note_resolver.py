"""Note-set resolver: expands a chord symbol into absolute pitch classes."""

import numpy as np

from chordbook.chord_parser import parse_chord
from chordbook.chord_qualities import lookup_quality
from chordbook.notes import SEMITONES_PER_OCTAVE
from chordbook.transposer import transpose_index


def get_chord_notes(text: str, offset: int = 0) -> list[int]:
    """
    Pitch classes sounded by a (transposed) chord.

    Intervals are reduced mod 12 here and only here. The result follows the
    quality's interval order with duplicates collapsed, so "Am" gives
    [9, 0, 4]. Unknown qualities resolve as a major triad.

    Args:
        text:   Chord symbol as typed by the user.
        offset: Transposition in semitones (any integer).

    Returns:
        Ordered list of distinct pitch classes 0-11.
    """
    parsed = parse_chord(text)
    root = transpose_index(parsed.root_index, offset)
    intervals = lookup_quality(parsed.quality).intervals

    notes: list[int] = []
    for interval in intervals:
        pitch_class = (root + interval) % SEMITONES_PER_OCTAVE
        if pitch_class not in notes:
            notes.append(pitch_class)
    return notes


def notes_chroma(notes: list[int]) -> np.ndarray:
    """12-bin membership mask for pitch classes that are already resolved."""
    chroma = np.zeros(SEMITONES_PER_OCTAVE)
    chroma[notes] = 1.0
    return chroma


def chord_chroma(text: str, offset: int = 0) -> np.ndarray:
    """
    12-bin chroma vector for a chord: 1.0 at each active pitch class.

    This is the membership mask the keyboard diagrams light keys from.
    """
    return notes_chroma(get_chord_notes(text, offset))
