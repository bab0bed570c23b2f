"""Note table: semitone index ↔ letter / solfège names and key colour."""

from dataclasses import dataclass
from enum import Enum

SEMITONES_PER_OCTAVE = 12


class Notation(str, Enum):
    """Naming system used when a pitch class is displayed."""

    LETTER = "letter"
    SOLFEGE = "solfege"

    @classmethod
    def from_name(cls, name: str) -> "Notation":
        """Parse a notation name, accepting the accented ``solfège`` spelling."""
        normalized = name.strip().lower().replace("è", "e")
        return cls(normalized)


@dataclass(frozen=True)
class NoteInfo:
    """
    One of the twelve chromatic pitch classes.

    Attributes:
        index:    Pitch class, 0=C ... 11=B.
        letter:   Letter name using sharps, e.g. "C#".
        solfege:  Fixed-do solfège name using sharps, e.g. "Do#".
        is_black: True for the five black keys of a piano octave.
    """

    index: int
    letter: str
    solfege: str
    is_black: bool

    def name(self, notation: Notation) -> str:
        return self.solfege if notation is Notation.SOLFEGE else self.letter


NOTES: tuple[NoteInfo, ...] = (
    NoteInfo(0, "C", "Do", False),
    NoteInfo(1, "C#", "Do#", True),
    NoteInfo(2, "D", "Re", False),
    NoteInfo(3, "D#", "Re#", True),
    NoteInfo(4, "E", "Mi", False),
    NoteInfo(5, "F", "Fa", False),
    NoteInfo(6, "F#", "Fa#", True),
    NoteInfo(7, "G", "Sol", False),
    NoteInfo(8, "G#", "Sol#", True),
    NoteInfo(9, "A", "La", False),
    NoteInfo(10, "A#", "La#", True),
    NoteInfo(11, "B", "Si", False),
)

#: Flat spellings accepted on input. Output always uses the sharp names above.
FLAT_NAMES: dict[str, int] = {
    "Db": 1, "Eb": 3, "Gb": 6, "Ab": 8, "Bb": 10,
    "Reb": 1, "Mib": 3, "Solb": 6, "Lab": 8, "Sib": 10,
}

_NAME_TO_INDEX: dict[str, int] = {
    **{note.letter.lower(): note.index for note in NOTES},
    **{note.solfege.lower(): note.index for note in NOTES},
    **{name.lower(): index for name, index in FLAT_NAMES.items()},
}


def note_info(index: int) -> NoteInfo:
    """Return the NoteInfo for a semitone index, wrapping into 0-11."""
    return NOTES[index % SEMITONES_PER_OCTAVE]


def note_index(name: str) -> int | None:
    """
    Inverse lookup: semitone index for a letter or solfège name.

    Matching is case-insensitive ("c#", "DO#", "sib" all resolve).

    Returns:
        The pitch class 0-11, or None if the name is not in the table.
    """
    return _NAME_TO_INDEX.get(name.strip().lower())


def note_name(index: int, notation: Notation = Notation.LETTER) -> str:
    """Display name of a pitch class in the requested notation."""
    return note_info(index).name(notation)


def white_keys() -> list[NoteInfo]:
    return [note for note in NOTES if not note.is_black]
