"""Guitar lookup: resolves a chord name to a fingering and detects its barre."""

from dataclasses import dataclass

from chordbook.chord_parser import parse_chord
from chordbook.guitar_fingerings import ALL_MUTED, get_fingering

#: Strings that must share one fret before it is drawn as a barre.
BARRE_MIN_STRINGS = 3


@dataclass(frozen=True)
class Barre:
    """
    A single finger laid across several strings at one fret.

    Attributes:
        fret:         Fret number (> 0).
        first_string: Lowest string index covered (0 = low E).
        last_string:  Highest string index covered. Strings in between that
                      are fretted elsewhere still lie under the bar.
    """

    fret: int
    first_string: int
    last_string: int


@dataclass(frozen=True)
class GuitarShape:
    """Fingering plus the barre to draw over it, if any."""

    fingering: tuple[int, ...]
    barre: Barre | None = None

    @property
    def is_muted(self) -> bool:
        return self.fingering == ALL_MUTED


def _is_minor_family(quality: str) -> bool:
    return quality.startswith("m") and not quality.startswith("maj")


def lookup_fingering(chord_name: str) -> tuple[int, ...]:
    """
    Find a fingering for a chord name.

    Fallback chain, first hit wins:

    1. The full name ("Am7").
    2. The triad shape of the same root: root + "m" for minor-family
       qualities, bare root otherwise ("Cm9" → "Cm", "Csus4" → "C").
    3. The bare root (major shape).
    4. All six strings muted.

    The root is used as typed, so callers should pass letter-form names
    (see transposer.transpose_chord with Notation.LETTER).
    """
    fingering = get_fingering(chord_name)
    if fingering is not None:
        return fingering

    parsed = parse_chord(chord_name)
    root = parsed.original_root_token
    triad = root + ("m" if _is_minor_family(parsed.quality) else "")

    for candidate in (triad, root):
        fingering = get_fingering(candidate)
        if fingering is not None:
            return fingering
    return ALL_MUTED


def detect_barre(
    fingering: tuple[int, ...] | list[int],
    min_strings: int = BARRE_MIN_STRINGS,
) -> Barre | None:
    """
    Report the barre in a fingering, if any.

    Strings are grouped by fret (open and muted strings ignored). A fret
    held on ``min_strings`` or more strings is a barre spanning from the
    lowest to the highest of those strings. When several frets qualify the
    lowest fret wins.
    """
    strings_by_fret: dict[int, list[int]] = {}
    for string_index, fret in enumerate(fingering):
        if fret > 0:
            strings_by_fret.setdefault(fret, []).append(string_index)

    for fret in sorted(strings_by_fret):
        strings = strings_by_fret[fret]
        if len(strings) >= min_strings:
            return Barre(fret=fret, first_string=min(strings), last_string=max(strings))
    return None


def resolve_guitar_shape(chord_name: str) -> GuitarShape:
    """Look up a fingering and attach its barre."""
    fingering = lookup_fingering(chord_name)
    return GuitarShape(fingering=fingering, barre=detect_barre(fingering))
