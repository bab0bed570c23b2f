"""Unit tests for the note table."""

import pytest

from chordbook.notes import NOTES, Notation, note_index, note_info, note_name, white_keys


def test_indices_are_contiguous() -> None:
    assert [note.index for note in NOTES] == list(range(12))


def test_exactly_five_black_keys() -> None:
    black = [note.letter for note in NOTES if note.is_black]
    assert black == ["C#", "D#", "F#", "G#", "A#"]


def test_white_keys_in_keyboard_order() -> None:
    assert [note.letter for note in white_keys()] == ["C", "D", "E", "F", "G", "A", "B"]


def test_note_info_wraps_index() -> None:
    assert note_info(12).letter == "C"
    assert note_info(-1).letter == "B"


@pytest.mark.parametrize(
    ("name", "expected"),
    [("C", 0), ("c#", 1), ("Db", 1), ("DO#", 1), ("Reb", 1), ("Sol", 7), ("sib", 10), ("Si", 11)],
)
def test_note_index_accepts_letters_and_solfege(name: str, expected: int) -> None:
    assert note_index(name) == expected


def test_note_index_unknown_name() -> None:
    assert note_index("H") is None
    assert note_index("") is None


def test_note_name_in_each_notation() -> None:
    assert note_name(8) == "G#"
    assert note_name(8, Notation.SOLFEGE) == "Sol#"


def test_notation_from_accented_name() -> None:
    assert Notation.from_name("solfège") is Notation.SOLFEGE
    assert Notation.from_name("Letter") is Notation.LETTER
