"""Unit tests for pitch-class resolution."""

import numpy as np

from chordbook.note_resolver import chord_chroma, get_chord_notes


def test_c_major() -> None:
    assert get_chord_notes("C", 0) == [0, 4, 7]


def test_a_minor_in_interval_order() -> None:
    assert get_chord_notes("Am", 0) == [9, 0, 4]


def test_transposed_chord() -> None:
    assert get_chord_notes("Am", 3) == [0, 3, 7]
    assert get_chord_notes("C", -1) == [11, 3, 6]


def test_ninth_reduced_to_pitch_class() -> None:
    assert get_chord_notes("C9") == [0, 4, 7, 10, 2]


def test_unknown_quality_resolves_as_major() -> None:
    assert get_chord_notes("Dxyz") == [2, 6, 9]


def test_unparseable_text_resolves_as_c_major() -> None:
    assert get_chord_notes("???") == [0, 4, 7]
    assert get_chord_notes("", 2) == [2, 6, 9]


def test_chroma_marks_active_pitch_classes() -> None:
    chroma = chord_chroma("G7")
    assert chroma.shape == (12,)
    assert np.flatnonzero(chroma).tolist() == [2, 5, 7, 11]
    assert chroma.sum() == 4.0
