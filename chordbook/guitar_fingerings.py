"""Curated guitar fingerings for standard tuning (E A D G B e)."""

from types import MappingProxyType
from typing import Mapping

STRING_COUNT = 6

MUTED = -1

#: Returned when no fingering can be resolved at all.
ALL_MUTED: tuple[int, ...] = (MUTED,) * STRING_COUNT

# One entry per string, low E first: -1 muted, 0 open, n > 0 fret number.
GUITAR_FINGERINGS: Mapping[str, tuple[int, ...]] = MappingProxyType({
    # Open and first-position triads
    "C": (-1, 3, 2, 0, 1, 0),
    "Cm": (-1, 3, 5, 5, 4, 3),
    "D": (-1, -1, 0, 2, 3, 2),
    "Dm": (-1, -1, 0, 2, 3, 1),
    "E": (0, 2, 2, 1, 0, 0),
    "Em": (0, 2, 2, 0, 0, 0),
    "F": (1, 3, 3, 2, 1, 1),
    "Fm": (1, 3, 3, 1, 1, 1),
    "G": (3, 2, 0, 0, 0, 3),
    "Gm": (3, 5, 5, 3, 3, 3),
    "A": (-1, 0, 2, 2, 2, 0),
    "Am": (-1, 0, 2, 2, 1, 0),
    "B": (-1, 2, 4, 4, 4, 2),
    "Bm": (-1, 2, 4, 4, 3, 2),
    # Sharp roots as E- and A-shape barres
    "C#": (-1, 4, 6, 6, 6, 4),
    "C#m": (-1, 4, 6, 6, 5, 4),
    "D#": (-1, 6, 8, 8, 8, 6),
    "D#m": (-1, 6, 8, 8, 7, 6),
    "F#": (2, 4, 4, 3, 2, 2),
    "F#m": (2, 4, 4, 2, 2, 2),
    "G#": (4, 6, 6, 5, 4, 4),
    "G#m": (4, 6, 6, 4, 4, 4),
    "A#": (-1, 1, 3, 3, 3, 1),
    "A#m": (-1, 1, 3, 3, 2, 1),
    # 7ths
    "C7": (-1, 3, 2, 3, 1, 0),
    "D7": (-1, -1, 0, 2, 1, 2),
    "E7": (0, 2, 0, 1, 0, 0),
    "G7": (3, 2, 0, 0, 0, 1),
    "A7": (-1, 0, 2, 0, 2, 0),
    "B7": (-1, 2, 1, 2, 0, 2),
    "Am7": (-1, 0, 2, 0, 1, 0),
    "Em7": (0, 2, 2, 0, 3, 0),
    "Dm7": (-1, -1, 0, 2, 1, 1),
    "Cmaj7": (-1, 3, 2, 0, 0, 0),
    "Fmaj7": (-1, -1, 3, 2, 1, 0),
})


def get_fingering(name: str) -> tuple[int, ...] | None:
    """Exact-name table lookup; None when the chord is not curated."""
    return GUITAR_FINGERINGS.get(name)
