"""Data models for songs, their sections and chords, with their JSON shape."""

from __future__ import annotations

import math
import time
import uuid
from dataclasses import dataclass, field
from typing import Any


def new_id() -> str:
    return str(uuid.uuid4())


def now_ms() -> int:
    """Current time in epoch milliseconds, the unit stored in song files."""
    return int(time.time() * 1000)


def _require(data: Any, key: str, kind: str) -> Any:
    if not isinstance(data, dict):
        raise ValueError(f"Expected a {kind} object, got {type(data).__name__}.")
    if key not in data:
        raise ValueError(f"{kind.capitalize()} is missing required field '{key}'.")
    return data[key]


def _timestamp(data: dict[str, Any], key: str) -> int:
    value = data.get(key, 0)
    numeric = isinstance(value, (int, float)) and not isinstance(value, bool)
    if not numeric or not math.isfinite(value):
        raise ValueError(f"Song field '{key}' must be a number.")
    return int(value)


@dataclass
class Chord:
    """A chord slot in a section. ``original_value`` is the text as typed."""

    id: str
    original_value: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "originalValue": self.original_value}

    @classmethod
    def from_dict(cls, data: Any) -> Chord:
        return cls(
            id=str(_require(data, "id", "chord")),
            original_value=str(_require(data, "originalValue", "chord")),
        )


@dataclass
class Section:
    """A named part of a song (verse, chorus, ...) holding an ordered chord list."""

    id: str
    name: str
    chords: list[Chord] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "chords": [chord.to_dict() for chord in self.chords],
        }

    @classmethod
    def from_dict(cls, data: Any) -> Section:
        chords = _require(data, "chords", "section")
        if not isinstance(chords, list):
            raise ValueError("Section field 'chords' must be an array.")
        return cls(
            id=str(_require(data, "id", "section")),
            name=str(_require(data, "name", "section")),
            chords=[Chord.from_dict(chord) for chord in chords],
        )


@dataclass
class Song:
    """
    A song in the library.

    Attributes:
        id:            Unique identifier (uuid4 string); the import merge key.
        title:         Song title.
        author:        Artist or composer.
        sections:      Ordered sections.
        created_at:    Creation time, epoch milliseconds.
        last_modified: Last edit time, epoch milliseconds.
    """

    id: str
    title: str
    author: str
    sections: list[Section] = field(default_factory=list)
    created_at: int = 0
    last_modified: int = 0

    def iter_chords(self) -> list[tuple[Section, Chord]]:
        return [(section, chord) for section in self.sections for chord in section.chords]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "sections": [section.to_dict() for section in self.sections],
            "createdAt": self.created_at,
            "lastModified": self.last_modified,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Song:
        sections = _require(data, "sections", "song")
        if not isinstance(sections, list):
            raise ValueError("Song field 'sections' must be an array.")
        return cls(
            id=str(_require(data, "id", "song")),
            title=str(data.get("title", "")),
            author=str(data.get("author", "")),
            sections=[Section.from_dict(section) for section in sections],
            created_at=_timestamp(data, "createdAt"),
            last_modified=_timestamp(data, "lastModified"),
        )
