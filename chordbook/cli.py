"""Chordbook CLI entry point."""

import re
import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, NoReturn

import click

from chordbook import __version__
from chordbook.chord_parser import parse_chord, with_quality, with_root
from chordbook.chord_view import ChordView, build_chord_view, library_views
from chordbook.diagram_renderers import text_diagram
from chordbook.display_settings import DiagramStyle, DisplaySettings
from chordbook.midi_exporter import PROGRAM_PIANO, PROGRAM_STEEL_GUITAR, MidiExporter
from chordbook.notes import Notation, note_index, note_name
from chordbook.song_exporter import SUPPORTED_FORMATS, SongExporter
from chordbook.songbook_store import (
    DEFAULT_CHORD,
    DEFAULT_SECTION_NAME,
    DEFAULT_SONG_AUTHOR,
    DEFAULT_SONG_TITLE,
    SongLibrary,
    default_export_name,
)
from chordbook.transposer import transpose_index
from chordbook.voicing_strategy import GuitarVoicer, PianoVoicer, VoicingStrategy

LIBRARY_ENV_VAR = "CHORDBOOK_LIBRARY"


def _default_library_path() -> str:
    return str(Path(click.get_app_dir("chordbook")) / "songs.json")


def _title_to_filename(title: str, extension: str) -> str:
    """
    Convert a song title to a safe output filename.

    Strips characters that are invalid in filenames, collapses whitespace to
    underscores, and appends the extension.
    """
    sanitized = re.sub(r"[^\w\s-]", "", title)
    sanitized = re.sub(r"\s+", "_", sanitized.strip()) or "song"
    return f"{sanitized}{extension}"


def _fail(message: str) -> NoReturn:
    click.echo(f"  ERROR: {message}", err=True)
    sys.exit(1)


def _parse_note(value: str) -> int:
    index = note_index(value)
    if index is None:
        raise click.BadParameter(f"'{value}' is not a note name (try C, F#, Bb, Sol, Sib).")
    return index


def _settings(transpose: int, notation: str, style: str) -> DisplaySettings:
    return DisplaySettings(
        notation=Notation.from_name(notation),
        transposition=transpose,
        style=DiagramStyle(style.lower()),
    )


def display_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the shared --transpose / --notation / --style options."""
    func = click.option(
        "--style",
        type=click.Choice([style.value for style in DiagramStyle], case_sensitive=False),
        default=DiagramStyle.PIANO.value,
        show_default=True,
        help="Draw chords as piano keys or guitar fretboards.",
    )(func)
    func = click.option(
        "--notation",
        type=click.Choice(["letter", "solfege", "solfège"], case_sensitive=False),
        default=Notation.LETTER.value,
        show_default=True,
        help="Show roots as letter names (C, D, E) or solfège (Do, Re, Mi).",
    )(func)
    func = click.option(
        "--transpose",
        "-t",
        type=int,
        default=0,
        show_default=True,
        metavar="SEMITONES",
        help="Shift every chord by this many semitones (negative = down).",
    )(func)
    return func


@contextmanager
def _library(ctx: click.Context, save: bool = False) -> Iterator[SongLibrary]:
    """Load the song library, hand it to the command, and save it afterwards."""
    path: str = ctx.obj["library_path"]
    try:
        library = SongLibrary(path).load()
    except ValueError as exc:
        _fail(f"Could not read library '{path}': {exc}")
    except OSError as exc:
        _fail(f"Could not open library '{path}': {exc}")

    try:
        yield library
    except ValueError as exc:
        _fail(str(exc))

    if save:
        try:
            library.save()
        except OSError as exc:
            _fail(f"Could not write library '{path}': {exc}")


def _echo_chord(view: ChordView, settings: DisplaySettings, show_diagram: bool = True) -> None:
    quality = view.quality_name or "?"
    notes = " ".join(note_name(pc, settings.notation) for pc in view.notes)
    click.echo(f"{view.display_name:<10} {quality:<16} [{notes}]")
    if not view.quality_recognized:
        parsed = parse_chord(view.source)
        click.echo(
            f"  WARNING: quality '{parsed.quality}' in '{view.source}' not recognized; "
            "showing the major triad.",
            err=True,
        )
    if show_diagram:
        click.echo(text_diagram(view, settings))
        click.echo()


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="chordbook")
@click.option(
    "--library",
    "library_path",
    envvar=LIBRARY_ENV_VAR,
    default=_default_library_path,
    show_default="user config dir/songs.json",
    metavar="PATH",
    help=f"Song library JSON file (or set {LIBRARY_ENV_VAR}).",
)
@click.pass_context
def main(ctx: click.Context, library_path: str) -> None:
    """Chordbook — songbook editor with piano and guitar chord diagrams."""
    ctx.ensure_object(dict)
    ctx.obj["library_path"] = library_path


# ── chord commands ─────────────────────────────────────────────────────────────

@main.command()
@click.argument("chords", nargs=-1, required=True)
@display_options
@click.option("--no-diagram", is_flag=True, help="Print names and notes only.")
def show(chords: tuple[str, ...], transpose: int, notation: str, style: str, no_diagram: bool) -> None:
    """
    Show one or more chords, transposed, with their diagrams.

    \b
    Examples:
      chordbook show Am7 D7 G
      chordbook show C#m7 -t -2 --notation solfege
      chordbook show F --style guitar
    """
    settings = _settings(transpose, notation, style)
    for chord in chords:
        _echo_chord(build_chord_view(chord, settings), settings, show_diagram=not no_diagram)


@main.command()
@click.argument("root")
@display_options
def library(root: str, transpose: int, notation: str, style: str) -> None:
    """
    Show every known chord quality built on ROOT.

    ROOT is a letter or solfège note name. The --transpose option moves the
    root before the library is built.
    """
    settings = _settings(transpose, notation, style)
    root_index = transpose_index(_parse_note(root), transpose)
    for view in library_views(root_index, settings):
        _echo_chord(view, settings)


# ── song commands ──────────────────────────────────────────────────────────────

@main.command("songs")
@click.pass_context
def list_songs(ctx: click.Context) -> None:
    """List the songs in the library."""
    with _library(ctx) as lib:
        if not lib.songs:
            click.echo("No songs yet. Create one with 'chordbook new'.")
            return
        for song in lib.songs:
            chord_count = len(song.iter_chords())
            click.echo(
                f"{song.id[:8]}  {song.title} — {song.author}  "
                f"({len(song.sections)} sections, {chord_count} chords)"
            )


@main.command()
@click.option("--title", default=DEFAULT_SONG_TITLE, show_default=True)
@click.option("--author", default=DEFAULT_SONG_AUTHOR, show_default=True)
@click.pass_context
def new(ctx: click.Context, title: str, author: str) -> None:
    """Create a song with one empty 'Verse 1' section."""
    with _library(ctx, save=True) as lib:
        song = lib.create_song(title=title, author=author)
        click.echo(f"Created '{song.title}'  id={song.id}")


@main.command("edit-song")
@click.argument("song_id")
@click.option("--title", default=None)
@click.option("--author", default=None)
@click.pass_context
def edit_song(ctx: click.Context, song_id: str, title: str | None, author: str | None) -> None:
    """Change a song's title or author."""
    with _library(ctx, save=True) as lib:
        song = lib.update_song(song_id, title=title, author=author)
        click.echo(f"Updated '{song.title}' — {song.author}")


@main.command()
@click.argument("song_id")
@click.confirmation_option(prompt="Are you sure you want to delete this song?")
@click.pass_context
def delete(ctx: click.Context, song_id: str) -> None:
    """Delete a song from the library."""
    with _library(ctx, save=True) as lib:
        song = lib.delete_song(song_id)
        click.echo(f"Deleted '{song.title}'")


@main.command()
@click.argument("song_id")
@click.pass_context
def outline(ctx: click.Context, song_id: str) -> None:
    """Print a song's sections and chords with their ids."""
    with _library(ctx) as lib:
        song = lib.get_song(song_id)
        click.echo(f"{song.title} — {song.author}  id={song.id}")
        for position, section in enumerate(song.sections, start=1):
            click.echo(f"  {position}. {section.name}  id={section.id[:8]}")
            for chord in section.chords:
                click.echo(f"       {chord.original_value:<10} id={chord.id[:8]}")


# ── section commands ───────────────────────────────────────────────────────────

@main.command("add-section")
@click.argument("song_id")
@click.option("--name", default=DEFAULT_SECTION_NAME, show_default=True)
@click.pass_context
def add_section(ctx: click.Context, song_id: str, name: str) -> None:
    """Append a section to a song."""
    with _library(ctx, save=True) as lib:
        section = lib.add_section(song_id, name)
        click.echo(f"Added section '{section.name}'  id={section.id}")


@main.command("rename-section")
@click.argument("song_id")
@click.argument("section_id")
@click.argument("name")
@click.pass_context
def rename_section(ctx: click.Context, song_id: str, section_id: str, name: str) -> None:
    """Rename a section."""
    with _library(ctx, save=True) as lib:
        section = lib.rename_section(song_id, section_id, name)
        click.echo(f"Renamed section to '{section.name}'")


@main.command("remove-section")
@click.argument("song_id")
@click.argument("section_id")
@click.pass_context
def remove_section(ctx: click.Context, song_id: str, section_id: str) -> None:
    """Remove a section and all of its chords."""
    with _library(ctx, save=True) as lib:
        section = lib.remove_section(song_id, section_id)
        click.echo(f"Removed section '{section.name}'")


@main.command("move-section")
@click.argument("song_id")
@click.argument("position", type=click.IntRange(min=1))
@click.argument("direction", type=click.Choice(["up", "down"]))
@click.pass_context
def move_section(ctx: click.Context, song_id: str, position: int, direction: str) -> None:
    """Move the section at POSITION (1 = first) up or down by one."""
    with _library(ctx, save=True) as lib:
        moved = lib.move_section(song_id, position - 1, "up" if direction == "up" else "down")
        if moved:
            click.echo(f"Moved section {position} {direction}.")
        else:
            click.echo(f"Section {position} cannot move {direction}; nothing changed.")


# ── chord-slot commands ────────────────────────────────────────────────────────

@main.command("add-chord")
@click.argument("song_id")
@click.argument("section_id")
@click.argument("values", nargs=-1)
@click.pass_context
def add_chord(ctx: click.Context, song_id: str, section_id: str, values: tuple[str, ...]) -> None:
    """Append chords to a section (a single C when no VALUES are given)."""
    with _library(ctx, save=True) as lib:
        for value in values or (DEFAULT_CHORD,):
            chord = lib.add_chord(song_id, section_id, value)
            click.echo(f"Added {chord.original_value}  id={chord.id[:8]}")


@main.command("edit-chord")
@click.argument("song_id")
@click.argument("chord_id")
@click.argument("value", required=False)
@click.option("--root", default=None, help="Replace only the root (note name).")
@click.option("--quality", default=None, help="Replace only the quality suffix ('' = major).")
@click.pass_context
def edit_chord(
    ctx: click.Context,
    song_id: str,
    chord_id: str,
    value: str | None,
    root: str | None,
    quality: str | None,
) -> None:
    """Change a chord's text, or just its root or quality."""
    if value is None and root is None and quality is None:
        raise click.UsageError("Give a new VALUE, --root, or --quality.")

    with _library(ctx, save=True) as lib:
        _, chord = lib.find_chord(song_id, chord_id)
        text = value if value is not None else chord.original_value
        if root is not None:
            text = with_root(text, _parse_note(root))
        if quality is not None:
            text = with_quality(text, quality)
        lib.update_chord(song_id, chord.id, text)
        click.echo(f"Chord is now {text}")


@main.command("remove-chord")
@click.argument("song_id")
@click.argument("chord_id")
@click.pass_context
def remove_chord(ctx: click.Context, song_id: str, chord_id: str) -> None:
    """Remove a chord from its section."""
    with _library(ctx, save=True) as lib:
        chord = lib.remove_chord(song_id, chord_id)
        click.echo(f"Removed {chord.original_value}")


# ── output commands ────────────────────────────────────────────────────────────

@main.command()
@click.argument("song_id")
@display_options
@click.pass_context
def view(ctx: click.Context, song_id: str, transpose: int, notation: str, style: str) -> None:
    """Print a song as a transposed chord chart with diagrams."""
    settings = _settings(transpose, notation, style)
    with _library(ctx) as lib:
        song = lib.get_song(song_id)
        click.echo(SongExporter(settings, output_format="text").render(song), nl=False)


@main.command()
@click.argument("song_id")
@display_options
@click.option(
    "--format",
    "output_format",
    type=click.Choice(sorted(SUPPORTED_FORMATS), case_sensitive=False),
    default="html",
    show_default=True,
    help="Self-contained HTML with SVG diagrams, or a plain-text chart.",
)
@click.option("--output", "-o", default=None, metavar="PATH", help="Defaults to <song-title>.<ext>.")
@click.pass_context
def render(
    ctx: click.Context,
    song_id: str,
    transpose: int,
    notation: str,
    style: str,
    output_format: str,
    output: str | None,
) -> None:
    """Render a song sheet with chord diagrams to a file."""
    settings = _settings(transpose, notation, style)
    exporter = SongExporter(settings, output_format=output_format)
    with _library(ctx) as lib:
        song = lib.get_song(song_id)
        resolved_output = output or _title_to_filename(song.title, exporter.default_extension)
        try:
            exporter.export(song, resolved_output)
        except OSError as exc:
            _fail(f"Could not write output file — {exc}")
    click.echo(f"Wrote '{resolved_output}'")


@main.command()
@click.argument("song_id")
@click.option("--transpose", "-t", type=int, default=0, show_default=True, metavar="SEMITONES")
@click.option(
    "--instrument",
    type=click.Choice(["piano", "guitar"], case_sensitive=False),
    default="piano",
    show_default=True,
    help="Voice chords as piano triads or as the guitar fingering.",
)
@click.option("--bass", is_flag=True, help="Piano only: add the root an octave lower.")
@click.option("--tempo", type=click.IntRange(20, 300), default=90, show_default=True)
@click.option("--beats", type=click.FloatRange(min=0.25), default=4.0, show_default=True,
              help="Beats per chord.")
@click.option("--output", "-o", default=None, metavar="PATH", help="Defaults to <song-title>.mid.")
@click.pass_context
def midi(
    ctx: click.Context,
    song_id: str,
    transpose: int,
    instrument: str,
    bass: bool,
    tempo: int,
    beats: float,
    output: str | None,
) -> None:
    """Export a song's chord progression as a MIDI file."""
    voicer: VoicingStrategy
    if instrument.lower() == "guitar":
        voicer, program = GuitarVoicer(), PROGRAM_STEEL_GUITAR
    else:
        voicer, program = PianoVoicer(with_bass=bass), PROGRAM_PIANO

    with _library(ctx) as lib:
        song = lib.get_song(song_id)
        voiced = [voicer.voice(chord.original_value, transpose) for _, chord in song.iter_chords()]
        if not voiced:
            _fail(f"'{song.title}' has no chords to export.")

        resolved_output = output or _title_to_filename(song.title, ".mid")
        try:
            MidiExporter(tempo=tempo, beats_per_chord=beats, program=program).export(
                voiced, resolved_output
            )
        except OSError as exc:
            _fail(f"Could not write MIDI file — {exc}")
    click.echo(f"Wrote {len(voiced)} chord(s) to '{resolved_output}'")


@main.command("import")
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False, readable=True))
@click.pass_context
def import_songs(ctx: click.Context, input_file: str) -> None:
    """Merge songs from an exported JSON file. Existing ids are kept as they are."""
    with _library(ctx, save=True) as lib:
        result = lib.import_json(input_file)
        click.echo(f"Import successful: {result.added} added, {result.skipped} already present.")


@main.command("export")
@click.argument("output_file", required=False)
@click.pass_context
def export_songs(ctx: click.Context, output_file: str | None) -> None:
    """Write every song to a JSON file (default chordbook_export_<date>.json)."""
    resolved_output = output_file or default_export_name()
    with _library(ctx) as lib:
        try:
            count = lib.export_json(resolved_output)
        except OSError as exc:
            _fail(f"Could not write export file — {exc}")
    click.echo(f"Exported {count} song(s) to '{resolved_output}'")
