"""Display settings threaded explicitly through every engine call."""

from dataclasses import dataclass, replace
from enum import Enum

from chordbook.notes import Notation


class DiagramStyle(str, Enum):
    """Which instrument diagram a chord is drawn as."""

    PIANO = "piano"
    GUITAR = "guitar"


@dataclass(frozen=True)
class DisplaySettings:
    """
    Everything that changes how a chord is shown, but not what it is.

    Attributes:
        notation:      Letter names or solfège for displayed roots.
        transposition: Global semitone offset applied to every chord.
        style:         Piano keyboard or guitar fretboard diagrams.
    """

    notation: Notation = Notation.LETTER
    transposition: int = 0
    style: DiagramStyle = DiagramStyle.PIANO

    def transposed(self, step: int) -> "DisplaySettings":
        return replace(self, transposition=self.transposition + step)

    def reset_transposition(self) -> "DisplaySettings":
        return replace(self, transposition=0)

    @property
    def transposition_label(self) -> str:
        """Signed offset as shown in the transpose control, e.g. "+2", "0", "-3"."""
        if self.transposition > 0:
            return f"+{self.transposition}"
        return str(self.transposition)
