"""SongLibrary: a JSON-file song collection with editing, import and export."""

from __future__ import annotations

import datetime
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Sequence, TypeVar

from chordbook.songbook_models import Chord, Section, Song, new_id, now_ms

DEFAULT_SONG_TITLE = "Untitled Track"
DEFAULT_SONG_AUTHOR = "Unknown Artist"
DEFAULT_FIRST_SECTION = "Verse 1"
DEFAULT_SECTION_NAME = "Section"
DEFAULT_CHORD = "C"

Direction = Literal["up", "down"]

_T = TypeVar("_T", Song, Section, Chord)


def default_export_name(day: datetime.date | None = None) -> str:
    """File name offered for an export, e.g. ``chordbook_export_2024-05-01.json``."""
    day = day or datetime.date.today()
    return f"chordbook_export_{day.isoformat()}.json"


def songs_from_json(text: str) -> list[Song]:
    """
    Decode a song array.

    Raises:
        ValueError: If the text is not JSON, the top level is not an array,
                    or a song is missing required fields.
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Not a valid songbook JSON file: {exc}") from exc

    if not isinstance(payload, list):
        raise ValueError("Songbook JSON must contain an array of songs at the top level.")
    return [Song.from_dict(item) for item in payload]


def songs_to_json(songs: Sequence[Song]) -> str:
    return json.dumps([song.to_dict() for song in songs], indent=2, ensure_ascii=False)


def _match_id(items: Sequence[_T], key: str, kind: str) -> _T:
    """Find an item by full id, or by a prefix that only one id starts with."""
    for item in items:
        if item.id == key:
            return item

    matches = [item for item in items if key and item.id.startswith(key)]
    if not matches:
        raise ValueError(f"No {kind} with id '{key}'.")
    if len(matches) > 1:
        raise ValueError(f"Id prefix '{key}' matches {len(matches)} {kind}s; use more characters.")
    return matches[0]


@dataclass(frozen=True)
class ImportResult:
    """Outcome of merging an imported file into the library."""

    added: int
    skipped: int


class SongLibrary:
    """
    The user's song collection, persisted as a JSON array in a single file.

    Usage:

        library = SongLibrary(path).load()
        song = library.create_song(title="Wonderwall")
        library.add_chord(song.id, song.sections[0].id, "Em7")
        library.save()

    Every editing method refreshes the song's ``last_modified`` stamp.
    Ids may be given in full or as a unique prefix.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        self.songs: list[Song] = []

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> SongLibrary:
        """
        Read the library file. A missing file is an empty library.

        Raises:
            ValueError: If the file exists but is not a valid song array.
        """
        if not self.path.exists():
            self.songs = []
            return self
        self.songs = songs_from_json(self.path.read_text(encoding="utf-8"))
        return self

    def save(self) -> None:
        """Write the library file, creating its directory if needed."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(songs_to_json(self.songs), encoding="utf-8")

    def export_json(self, output_path: str | os.PathLike[str]) -> int:
        """Write every song to ``output_path``; returns the number exported."""
        Path(output_path).write_text(songs_to_json(self.songs), encoding="utf-8")
        return len(self.songs)

    def import_json(self, input_path: str | os.PathLike[str]) -> ImportResult:
        """
        Merge songs from an exported file.

        Songs whose id already exists in the library are skipped, never
        overwritten.

        Raises:
            ValueError: If the file is not a valid song array.
            OSError: If the file cannot be read.
        """
        imported = songs_from_json(Path(input_path).read_text(encoding="utf-8"))
        return self.merge(imported)

    def merge(self, imported: Sequence[Song]) -> ImportResult:
        known = {song.id for song in self.songs}
        added = 0
        for song in imported:
            if song.id in known:
                continue
            self.songs.append(song)
            known.add(song.id)
            added += 1
        return ImportResult(added=added, skipped=len(imported) - added)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_song(self, song_id: str) -> Song:
        return _match_id(self.songs, song_id, "song")

    def get_section(self, song_id: str, section_id: str) -> Section:
        return _match_id(self.get_song(song_id).sections, section_id, "section")

    def find_chord(self, song_id: str, chord_id: str) -> tuple[Section, Chord]:
        """Locate a chord anywhere in a song, returning it with its section."""
        song = self.get_song(song_id)
        pairs = song.iter_chords()
        chord = _match_id([chord for _, chord in pairs], chord_id, "chord")
        section = next(section for section, candidate in pairs if candidate is chord)
        return section, chord

    # ------------------------------------------------------------------
    # Songs
    # ------------------------------------------------------------------

    def _touch(self, song: Song) -> None:
        song.last_modified = now_ms()

    def create_song(
        self,
        title: str = DEFAULT_SONG_TITLE,
        author: str = DEFAULT_SONG_AUTHOR,
    ) -> Song:
        stamp = now_ms()
        song = Song(
            id=new_id(),
            title=title,
            author=author,
            sections=[Section(id=new_id(), name=DEFAULT_FIRST_SECTION)],
            created_at=stamp,
            last_modified=stamp,
        )
        self.songs.append(song)
        return song

    def update_song(
        self,
        song_id: str,
        *,
        title: str | None = None,
        author: str | None = None,
    ) -> Song:
        song = self.get_song(song_id)
        if title is not None:
            song.title = title
        if author is not None:
            song.author = author
        self._touch(song)
        return song

    def delete_song(self, song_id: str) -> Song:
        song = self.get_song(song_id)
        self.songs.remove(song)
        return song

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def add_section(self, song_id: str, name: str = DEFAULT_SECTION_NAME) -> Section:
        song = self.get_song(song_id)
        section = Section(id=new_id(), name=name)
        song.sections.append(section)
        self._touch(song)
        return section

    def rename_section(self, song_id: str, section_id: str, name: str) -> Section:
        section = self.get_section(song_id, section_id)
        section.name = name
        self._touch(self.get_song(song_id))
        return section

    def remove_section(self, song_id: str, section_id: str) -> Section:
        song = self.get_song(song_id)
        section = _match_id(song.sections, section_id, "section")
        song.sections.remove(section)
        self._touch(song)
        return section

    def move_section(self, song_id: str, index: int, direction: Direction) -> bool:
        """
        Swap a section with its neighbour above or below.

        Returns:
            False (and leaves the song untouched) when the move would leave
            the section list; True otherwise.
        """
        song = self.get_song(song_id)
        target = index - 1 if direction == "up" else index + 1
        if not (0 <= index < len(song.sections)) or not (0 <= target < len(song.sections)):
            return False

        sections = song.sections
        sections[index], sections[target] = sections[target], sections[index]
        self._touch(song)
        return True

    # ------------------------------------------------------------------
    # Chords
    # ------------------------------------------------------------------

    def add_chord(self, song_id: str, section_id: str, value: str = DEFAULT_CHORD) -> Chord:
        section = self.get_section(song_id, section_id)
        chord = Chord(id=new_id(), original_value=value)
        section.chords.append(chord)
        self._touch(self.get_song(song_id))
        return chord

    def update_chord(self, song_id: str, chord_id: str, value: str) -> Chord:
        _, chord = self.find_chord(song_id, chord_id)
        chord.original_value = value
        self._touch(self.get_song(song_id))
        return chord

    def remove_chord(self, song_id: str, chord_id: str) -> Chord:
        section, chord = self.find_chord(song_id, chord_id)
        section.chords.remove(chord)
        self._touch(self.get_song(song_id))
        return chord
