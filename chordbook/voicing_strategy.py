"""VoicingStrategy: Strategy pattern for mapping chord symbols to MIDI note sets."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from chordbook.chord_parser import parse_chord
from chordbook.chord_qualities import lookup_quality
from chordbook.guitar_lookup import lookup_fingering
from chordbook.notes import SEMITONES_PER_OCTAVE
from chordbook.transposer import transpose_chord, transpose_index


#: Open-string MIDI pitches, low E first: E2 A2 D3 G3 B3 E4.
STANDARD_TUNING: tuple[int, ...] = (40, 45, 50, 55, 59, 64)


def pitch_class_to_midi(pitch_class: int, octave: int) -> int:
    """
    Convert a pitch class (0-11) and an octave number to an absolute MIDI note.

    MIDI octave numbering: C-1 = 0, C0 = 12, C1 = 24, ... C4 (Middle C) = 60.
    """
    return (octave + 1) * SEMITONES_PER_OCTAVE + pitch_class


@dataclass
class VoicedChord:
    """
    A chord symbol annotated with concrete MIDI note assignments.

    Attributes:
        symbol:     Transposed chord name in letter form, e.g. "Am7".
        notes:      MIDI note numbers for the chord itself (treble).
        bass_notes: MIDI note numbers for a separate bass line. Empty when
                    the strategy voices no bass.
    """

    symbol: str
    notes: list[int] = field(default_factory=list)
    bass_notes: list[int] = field(default_factory=list)


# ── Abstract base ────────────────────────────────────────────────────────────

class VoicingStrategy(ABC):
    """
    Abstract Strategy for assigning MIDI pitches to a chord symbol.

    Concrete subclasses implement ``voice()`` for a particular instrument.
    """

    @abstractmethod
    def voice(self, text: str, offset: int = 0) -> VoicedChord:
        """
        Map a chord symbol to a VoicedChord with concrete MIDI note numbers.

        Args:
            text:   Chord symbol as typed by the user.
            offset: Transposition in semitones.
        """


# ── Concrete strategies ──────────────────────────────────────────────────────

class PianoVoicer(VoicingStrategy):
    """
    Close root-position voicing in the Middle C octave, one hand.

    Intervals are added to the root unreduced, so a ninth (14) sounds above
    the octave instead of folding back onto the second:

        C      → C4(60), E4(64), G4(67)
        Cadd9  → C4(60), E4(64), G4(67), D5(74)

    With ``with_bass`` the root is doubled one octave lower as a left-hand
    bass note.
    """

    RH_OCTAVE = 4  # Right hand: C4 = MIDI 60
    LH_OCTAVE = 3  # Left hand:  C3 = MIDI 48

    def __init__(self, with_bass: bool = False) -> None:
        self.with_bass = with_bass

    def voice(self, text: str, offset: int = 0) -> VoicedChord:
        parsed = parse_chord(text)
        root = transpose_index(parsed.root_index, offset)
        intervals = lookup_quality(parsed.quality).intervals

        root_rh = pitch_class_to_midi(root, self.RH_OCTAVE)
        bass = [pitch_class_to_midi(root, self.LH_OCTAVE)] if self.with_bass else []

        return VoicedChord(
            symbol=transpose_chord(text, offset),
            notes=[root_rh + interval for interval in intervals],
            bass_notes=bass,
        )


class GuitarVoicer(VoicingStrategy):
    """
    Sounds the resolved guitar fingering on a standard-tuned six-string.

    Each non-muted string contributes its open pitch plus the fretted
    semitones. The lowest sounding string is also reported as the bass.
    A fully muted shape voices as silence.
    """

    def __init__(self, tuning: tuple[int, ...] = STANDARD_TUNING) -> None:
        self.tuning = tuning

    def voice(self, text: str, offset: int = 0) -> VoicedChord:
        symbol = transpose_chord(text, offset)
        fingering = lookup_fingering(symbol)

        notes = [
            open_pitch + fret
            for open_pitch, fret in zip(self.tuning, fingering)
            if fret >= 0
        ]
        return VoicedChord(symbol=symbol, notes=notes, bass_notes=notes[:1])
