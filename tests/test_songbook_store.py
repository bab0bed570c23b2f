"""Unit tests for the song library: editing, persistence, import and export."""

import datetime
import json
from pathlib import Path

import pytest

from chordbook.songbook_models import Chord, Section, Song
from chordbook.songbook_store import (
    ImportResult,
    SongLibrary,
    default_export_name,
    songs_from_json,
)


def _sample_song(song_id: str = "song-1") -> Song:
    return Song(
        id=song_id,
        title="Autumn Leaves",
        author="Kosma",
        sections=[
            Section(
                id="sec-a",
                name="A",
                chords=[Chord(id="ch-1", original_value="Am7"), Chord(id="ch-2", original_value="D7")],
            ),
            Section(id="sec-b", name="B", chords=[Chord(id="ch-3", original_value="Gmaj7")]),
        ],
        created_at=1_700_000_000_000,
        last_modified=1_700_000_000_000,
    )


def test_song_json_shape() -> None:
    payload = _sample_song().to_dict()
    assert set(payload) == {"id", "title", "author", "sections", "createdAt", "lastModified"}
    assert payload["sections"][0]["chords"][0] == {"id": "ch-1", "originalValue": "Am7"}


def test_song_round_trips_through_dict() -> None:
    song = _sample_song()
    assert Song.from_dict(song.to_dict()) == song


def test_missing_required_field_is_rejected() -> None:
    with pytest.raises(ValueError, match="originalValue"):
        Chord.from_dict({"id": "x"})


def test_top_level_must_be_array() -> None:
    with pytest.raises(ValueError, match="array"):
        songs_from_json('{"id": "x"}')


def test_invalid_json_is_rejected() -> None:
    with pytest.raises(ValueError, match="Not a valid"):
        songs_from_json("not json")


@pytest.mark.parametrize("value", ["null", '"yesterday"', "[]", "true", "Infinity"])
def test_non_numeric_timestamp_is_rejected(value: str) -> None:
    text = (
        '[{"id": "a", "title": "T", "author": "A", "sections": [], '
        f'"createdAt": {value}, "lastModified": 0}}]'
    )
    with pytest.raises(ValueError, match="'createdAt' must be a number"):
        songs_from_json(text)


def test_timestamps_default_to_zero_when_absent() -> None:
    song = Song.from_dict({"id": "a", "sections": []})
    assert (song.created_at, song.last_modified) == (0, 0)


def test_missing_file_loads_empty(tmp_path: Path) -> None:
    library = SongLibrary(tmp_path / "nope.json").load()
    assert library.songs == []


def test_save_and_load(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "songs.json"
    library = SongLibrary(path)
    library.songs.append(_sample_song())
    library.save()

    reloaded = SongLibrary(path).load()
    assert reloaded.songs == [_sample_song()]
    assert json.loads(path.read_text(encoding="utf-8"))[0]["title"] == "Autumn Leaves"


def test_create_song_defaults(tmp_path: Path) -> None:
    library = SongLibrary(tmp_path / "songs.json")
    song = library.create_song()

    assert song.title == "Untitled Track"
    assert song.author == "Unknown Artist"
    assert [section.name for section in song.sections] == ["Verse 1"]
    assert song.created_at == song.last_modified > 0
    assert library.get_song(song.id) is song


def test_edits_refresh_last_modified(tmp_path: Path) -> None:
    library = SongLibrary(tmp_path / "songs.json")
    library.songs.append(_sample_song())

    library.add_chord("song-1", "sec-b", "Cmaj7")
    song = library.get_song("song-1")
    assert song.last_modified > 1_700_000_000_000
    assert [chord.original_value for chord in song.sections[1].chords] == ["Gmaj7", "Cmaj7"]


def test_add_chord_defaults_to_c(tmp_path: Path) -> None:
    library = SongLibrary(tmp_path / "songs.json")
    library.songs.append(_sample_song())
    assert library.add_chord("song-1", "sec-a").original_value == "C"


def test_update_and_remove_chord(tmp_path: Path) -> None:
    library = SongLibrary(tmp_path / "songs.json")
    library.songs.append(_sample_song())

    library.update_chord("song-1", "ch-2", "D7b9")
    section, chord = library.find_chord("song-1", "ch-2")
    assert section.id == "sec-a"
    assert chord.original_value == "D7b9"

    library.remove_chord("song-1", "ch-1")
    assert [c.id for c in library.get_section("song-1", "sec-a").chords] == ["ch-2"]


def test_sections_add_rename_remove(tmp_path: Path) -> None:
    library = SongLibrary(tmp_path / "songs.json")
    library.songs.append(_sample_song())

    added = library.add_section("song-1")
    assert added.name == "Section"
    library.rename_section("song-1", added.id, "Coda")
    library.remove_section("song-1", "sec-a")
    assert [s.name for s in library.get_song("song-1").sections] == ["B", "Coda"]


def test_move_section(tmp_path: Path) -> None:
    library = SongLibrary(tmp_path / "songs.json")
    library.songs.append(_sample_song())

    assert library.move_section("song-1", 1, "up")
    assert [s.id for s in library.get_song("song-1").sections] == ["sec-b", "sec-a"]


def test_move_section_out_of_range_is_noop(tmp_path: Path) -> None:
    library = SongLibrary(tmp_path / "songs.json")
    library.songs.append(_sample_song())

    assert not library.move_section("song-1", 0, "up")
    assert not library.move_section("song-1", 1, "down")
    assert not library.move_section("song-1", 5, "up")
    song = library.get_song("song-1")
    assert [s.id for s in song.sections] == ["sec-a", "sec-b"]
    assert song.last_modified == 1_700_000_000_000


def test_ids_match_by_unique_prefix(tmp_path: Path) -> None:
    library = SongLibrary(tmp_path / "songs.json")
    library.songs.extend([_sample_song("abc123"), _sample_song("abd456")])

    assert library.get_song("abc").id == "abc123"
    with pytest.raises(ValueError, match="matches 2"):
        library.get_song("ab")
    with pytest.raises(ValueError, match="No song"):
        library.get_song("zzz")


def test_delete_song(tmp_path: Path) -> None:
    library = SongLibrary(tmp_path / "songs.json")
    library.songs.append(_sample_song())
    library.delete_song("song-1")
    assert library.songs == []


def test_import_merges_by_id_without_overwriting(tmp_path: Path) -> None:
    existing = _sample_song("song-1")
    incoming_same_id = _sample_song("song-1")
    incoming_same_id.title = "Overwritten?"
    incoming_new = _sample_song("song-2")

    export_path = tmp_path / "export.json"
    export_path.write_text(
        json.dumps([incoming_same_id.to_dict(), incoming_new.to_dict()]), encoding="utf-8"
    )

    library = SongLibrary(tmp_path / "songs.json")
    library.songs.append(existing)
    result = library.import_json(export_path)

    assert result == ImportResult(added=1, skipped=1)
    assert [song.id for song in library.songs] == ["song-1", "song-2"]
    assert library.get_song("song-1").title == "Autumn Leaves"


def test_export_writes_song_array(tmp_path: Path) -> None:
    library = SongLibrary(tmp_path / "songs.json")
    library.songs.append(_sample_song())
    out = tmp_path / "out.json"

    assert library.export_json(out) == 1
    assert songs_from_json(out.read_text(encoding="utf-8")) == [_sample_song()]


def test_default_export_name() -> None:
    assert default_export_name(datetime.date(2024, 5, 1)) == "chordbook_export_2024-05-01.json"
