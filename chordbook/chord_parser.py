"""ChordParser: splits a free-text chord symbol into root token and quality suffix."""

from dataclasses import dataclass

from chordbook.notes import note_index, note_name

# Tried in order against the start of the symbol; the first match wins.
# Solfège names come before the letters they begin with ("Do" before "D"),
# and every accidental form comes before its bare form ("Do#" before "Do",
# "C#" before "C"), otherwise "C#m" would read as root "C", quality "#m".
ROOT_TOKENS: tuple[str, ...] = (
    "Do#", "Do",
    "Reb", "Re#", "Re",
    "Mib", "Mi",
    "Fa#", "Fa",
    "Solb", "Sol#", "Sol",
    "Lab", "La#", "La",
    "Sib", "Si",
    "C#", "Db", "D#", "Eb", "F#", "Gb", "G#", "Ab", "A#", "Bb",
    "C", "D", "E", "F", "G", "A", "B",
)


@dataclass(frozen=True)
class ParsedChord:
    """
    Result of parsing a chord symbol.

    Attributes:
        root_index:          Pitch class of the root (0=C ... 11=B).
        quality:             Everything after the root token, verbatim.
        original_root_token: The root exactly as typed ("c#", "Sol"), or ""
                             when no root was recognized.
    """

    root_index: int
    quality: str
    original_root_token: str

    @property
    def has_root(self) -> bool:
        return bool(self.original_root_token)


DEFAULT_CHORD = ParsedChord(root_index=0, quality="", original_root_token="")


def match_root_token(text: str) -> str:
    """Return the leading root token of ``text`` as typed, or "" if none matches."""
    folded = text.lower()
    for token in ROOT_TOKENS:
        if folded.startswith(token.lower()):
            return text[: len(token)]
    return ""


def parse_chord(text: str) -> ParsedChord:
    """
    Parse a user-typed chord symbol.

    Never raises: empty text, or text that does not start with a known
    root, yields the default C chord with an empty quality.

    Examples:
        "C#m7"   → root 1, quality "m7"
        "Dosus4" → root 2, quality "sus4"
    """
    if not text:
        return DEFAULT_CHORD

    token = match_root_token(text)
    if not token:
        return DEFAULT_CHORD

    index = note_index(token)
    if index is None:
        return DEFAULT_CHORD

    return ParsedChord(
        root_index=index,
        quality=text[len(token):],
        original_root_token=token,
    )


def with_root(text: str, root_index: int) -> str:
    """Replace the root of a chord symbol with a letter-named pitch class."""
    return f"{note_name(root_index)}{parse_chord(text).quality}"


def with_quality(text: str, suffix: str) -> str:
    """Replace the quality of a chord symbol, keeping the root as typed."""
    parsed = parse_chord(text)
    root = parsed.original_root_token or note_name(parsed.root_index)
    return f"{root}{suffix}"
