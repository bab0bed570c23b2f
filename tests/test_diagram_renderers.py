"""Unit tests for diagram drawing and the song renderers."""

from chordbook.chord_view import build_chord_view, library_views
from chordbook.diagram_renderers import (
    HtmlSongRenderer,
    TextSongRenderer,
    svg_diagram,
    svg_fretboard,
    svg_keyboard,
    text_diagram,
    text_fretboard,
    text_keyboard,
)
from chordbook.display_settings import DiagramStyle, DisplaySettings
from chordbook.guitar_lookup import resolve_guitar_shape
from chordbook.note_resolver import chord_chroma
from chordbook.notes import Notation
from chordbook.songbook_models import Chord, Section, Song


def _sample_song() -> Song:
    return Song(
        id="s1",
        title="Demo",
        author="Someone",
        sections=[
            Section(
                id="v1",
                name="Verse",
                chords=[Chord(id="c1", original_value="C"), Chord(id="c2", original_value="Fxyz")],
            )
        ],
    )


def test_text_keyboard_marks_active_keys() -> None:
    lines = text_keyboard(chord_chroma("C")).splitlines()
    assert lines == [
        "  C#  D#      F#  G#  A#",
        "  .   .       .   .   .",
        "C   D   E   F   G   A   B",
        "*   .   *   .   *   .   .",
    ]


def test_text_keyboard_black_key_active() -> None:
    lines = text_keyboard(chord_chroma("D")).splitlines()
    assert lines[1] == "  .   .       *   .   ."


def test_text_keyboard_solfege_labels() -> None:
    lines = text_keyboard(chord_chroma("C"), Notation.SOLFEGE).splitlines()
    assert lines[2].split() == ["Do", "Re", "Mi", "Fa", "Sol", "La", "Si"]


def test_text_fretboard_open_chord() -> None:
    lines = text_fretboard(resolve_guitar_shape("C")).splitlines()
    assert lines[0] == "x        o     o"
    assert lines[1] == "=" * 16
    assert lines[2] == "|  |  |  |  *  |  1"
    assert lines[3] == "|  |  *  |  |  |  2"
    assert lines[4] == "|  *  |  |  |  |  3"


def test_text_fretboard_draws_barre() -> None:
    lines = text_fretboard(resolve_guitar_shape("F")).splitlines()
    assert lines[2] == "*==*==*==*==*==*  1"


def test_text_fretboard_shifts_window_for_high_shapes() -> None:
    lines = text_fretboard(resolve_guitar_shape("D#")).splitlines()
    assert lines[1].endswith("6fr")
    assert lines[2].endswith("  6")
    assert lines[4] == "|  |  *==*==*  |  8"


def test_svg_keyboard_dots() -> None:
    svg = svg_keyboard(chord_chroma("Am"))
    assert svg.startswith("<svg")
    assert svg.count('class="active"') == 3


def test_svg_fretboard_barre_and_markers() -> None:
    assert 'class="barre"' in svg_fretboard(resolve_guitar_shape("F"))

    open_c = svg_fretboard(resolve_guitar_shape("C"))
    assert 'class="barre"' not in open_c
    assert open_c.count('class="muted"') == 1
    assert open_c.count('class="open"') == 2
    assert open_c.count('class="finger"') == 3


def test_text_song_renderer_lists_sections_and_diagrams() -> None:
    settings = DisplaySettings(transposition=2)
    content = TextSongRenderer().render(_sample_song(), settings)
    assert content.startswith("Demo\nby Someone\nTranspose +2")
    assert "[Verse]" in content
    assert "D  Gxyz" in content
    assert "Gxyz (unrecognized quality, shown as major)" in content


def test_html_renderer_has_title_and_cards() -> None:
    content = HtmlSongRenderer().render(_sample_song(), DisplaySettings(style=DiagramStyle.GUITAR))
    assert "<title>Demo</title>" in content
    assert "<h1>Demo</h1>" in content
    assert content.count('<div class="chord">') == 2
    assert 'class="fretboard"' in content
    assert "Unrecognized" in content


def test_html_escapes_title_and_section_names() -> None:
    song = _sample_song()
    song.title = "Fur & <Feathers>"
    song.sections[0].name = "<Intro>"
    content = HtmlSongRenderer().render(song, DisplaySettings())
    assert "<title>Fur &amp; &lt;Feathers&gt;</title>" in content
    assert "<h2>&lt;Intro&gt;</h2>" in content


def test_html_empty_title_no_h1() -> None:
    song = _sample_song()
    song.title = ""
    assert "<h1>" not in HtmlSongRenderer().render(song, DisplaySettings())


def test_html_is_valid_skeleton() -> None:
    content = HtmlSongRenderer().render(_sample_song(), DisplaySettings())
    assert content.startswith("<!DOCTYPE html>")
    assert "</html>" in content
    assert "@media print" in content


def test_keyboard_diagram_follows_view_notes() -> None:
    settings = DisplaySettings(transposition=2)
    lines = text_diagram(build_chord_view("C", settings), settings).splitlines()
    assert lines[1] == "  .   .       *   .   ."
    assert lines[3] == ".   *   .   .   .   *   ."


def test_library_view_diagram_is_not_transposed_twice() -> None:
    settings = DisplaySettings(transposition=2)
    major = library_views(2, settings)[0]
    lines = text_diagram(major, settings).splitlines()
    assert lines[1] == "  .   .       *   .   ."
    assert lines[3] == ".   *   .   .   .   *   ."
    assert svg_diagram(major, settings).count('class="active"') == 3
