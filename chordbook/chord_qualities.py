"""Chord quality table: suffix → display name and semitone intervals."""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class Quality(Enum):
    """Known chord qualities, valued by the suffix written after the root."""

    MAJOR = ""
    MINOR = "m"
    DOMINANT_7TH = "7"
    MAJOR_7TH = "maj7"
    MINOR_7TH = "m7"
    SUS2 = "sus2"
    SUS4 = "sus4"
    POWER = "5"
    MAJOR_6TH = "6"
    MINOR_6TH = "m6"
    DIMINISHED = "dim"
    AUGMENTED = "aug"
    DOMINANT_9TH = "9"
    ADD9 = "add9"
    DIMINISHED_7TH = "dim7"
    HALF_DIMINISHED = "m7b5"

    @property
    def suffix(self) -> str:
        return self.value


@dataclass(frozen=True)
class ChordQuality:
    """
    Interval recipe for one chord quality.

    Attributes:
        quality:   The enumerated quality this entry describes.
        name:      Human-readable name, e.g. "Minor 7th".
        intervals: Semitones above the root, root first. Compound intervals
                   (a ninth is 14) are kept as-is; callers reduce mod 12.
    """

    quality: Quality
    name: str
    intervals: tuple[int, ...]

    @property
    def suffix(self) -> str:
        return self.quality.suffix


# Insertion order is the display order of the chord library.
CHORD_QUALITIES: Mapping[Quality, ChordQuality] = MappingProxyType({
    entry.quality: entry
    for entry in (
        ChordQuality(Quality.MAJOR, "Major", (0, 4, 7)),
        ChordQuality(Quality.MINOR, "Minor", (0, 3, 7)),
        ChordQuality(Quality.DOMINANT_7TH, "Dominant 7th", (0, 4, 7, 10)),
        ChordQuality(Quality.MAJOR_7TH, "Major 7th", (0, 4, 7, 11)),
        ChordQuality(Quality.MINOR_7TH, "Minor 7th", (0, 3, 7, 10)),
        ChordQuality(Quality.SUS2, "Suspended 2nd", (0, 2, 7)),
        ChordQuality(Quality.SUS4, "Suspended 4th", (0, 5, 7)),
        ChordQuality(Quality.POWER, "Power Chord", (0, 7)),
        ChordQuality(Quality.MAJOR_6TH, "Major 6th", (0, 4, 7, 9)),
        ChordQuality(Quality.MINOR_6TH, "Minor 6th", (0, 3, 7, 9)),
        ChordQuality(Quality.DIMINISHED, "Diminished", (0, 3, 6)),
        ChordQuality(Quality.AUGMENTED, "Augmented", (0, 4, 8)),
        ChordQuality(Quality.DOMINANT_9TH, "Dominant 9th", (0, 4, 7, 10, 14)),
        ChordQuality(Quality.ADD9, "Added 9th", (0, 4, 7, 14)),
        ChordQuality(Quality.DIMINISHED_7TH, "Diminished 7th", (0, 3, 6, 9)),
        ChordQuality(Quality.HALF_DIMINISHED, "Half-Diminished", (0, 3, 6, 10)),
    )
})

_BY_SUFFIX: dict[str, Quality] = {quality.suffix: quality for quality in Quality}


def find_quality(suffix: str) -> Quality | None:
    """Return the Quality for an exact suffix, or None if it is not in the table."""
    return _BY_SUFFIX.get(suffix)


def lookup_quality(suffix: str) -> ChordQuality:
    """
    Return the table entry for a suffix, falling back to the major triad.

    Unknown or malformed suffixes never fail: they resolve to the major
    entry so the root is still shown as a chord.
    """
    quality = find_quality(suffix)
    if quality is None:
        quality = Quality.MAJOR
    return CHORD_QUALITIES[quality]
