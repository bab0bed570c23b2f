"""ChordView: everything a diagram or label needs for one chord, per render."""

from dataclasses import dataclass

from chordbook.chord_parser import parse_chord
from chordbook.chord_qualities import CHORD_QUALITIES, find_quality
from chordbook.display_settings import DisplaySettings
from chordbook.guitar_lookup import GuitarShape, resolve_guitar_shape
from chordbook.note_resolver import get_chord_notes
from chordbook.notes import Notation, note_name
from chordbook.transposer import transpose_chord


@dataclass(frozen=True)
class ChordView:
    """
    Derived display values for one chord symbol under some settings.

    Attributes:
        source:       The chord text as stored in the song.
        display_name: Transposed name in the requested notation.
        guitar_name:  Transposed name in letter form (fingering lookup key).
        quality_name: Name of the recognized quality, or None when the
                      suffix is unknown and the chord falls back to major.
        notes:        Active pitch classes for the keyboard.
        shape:        Resolved guitar fingering and barre.
    """

    source: str
    display_name: str
    guitar_name: str
    quality_name: str | None
    notes: list[int]
    shape: GuitarShape

    @property
    def quality_recognized(self) -> bool:
        return self.quality_name is not None


def build_chord_view(text: str, settings: DisplaySettings) -> ChordView:
    """Run one chord symbol through the parser, transposer and both resolvers."""
    offset = settings.transposition
    guitar_name = transpose_chord(text, offset, Notation.LETTER)
    quality = find_quality(parse_chord(text).quality)

    return ChordView(
        source=text,
        display_name=transpose_chord(text, offset, settings.notation),
        guitar_name=guitar_name,
        quality_name=CHORD_QUALITIES[quality].name if quality is not None else None,
        notes=get_chord_notes(text, offset),
        shape=resolve_guitar_shape(guitar_name),
    )


def library_views(root_index: int, settings: DisplaySettings) -> list[ChordView]:
    """
    One view per known quality built on a single root.

    The root is taken as given; the settings' transposition is not applied,
    only its notation.
    """
    root = note_name(root_index)
    untransposed = DisplaySettings(notation=settings.notation, style=settings.style)
    return [
        build_chord_view(f"{root}{entry.suffix}", untransposed)
        for entry in CHORD_QUALITIES.values()
    ]
