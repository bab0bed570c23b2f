"""Renderers that draw chord diagrams and whole songs as text or HTML."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

import numpy as np

from chordbook.chord_view import ChordView, build_chord_view
from chordbook.display_settings import DiagramStyle, DisplaySettings
from chordbook.guitar_lookup import GuitarShape
from chordbook.note_resolver import notes_chroma
from chordbook.notes import NOTES, Notation, white_keys
from chordbook.songbook_models import Song

DIAGRAM_FRETS = 5
STRING_NAMES: tuple[str, ...] = ("E", "A", "D", "G", "B", "e")


def _escape_html(text: str) -> str:
    """Escape the three characters that are unsafe in HTML text content."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _active(chroma: np.ndarray) -> set[int]:
    return {int(index) for index in np.flatnonzero(chroma)}


def _fret_window(fingering: Sequence[int], frets: int) -> int:
    """First fret shown; 1 unless the shape sits above the first ``frets`` frets."""
    fretted = [fret for fret in fingering if fret > 0]
    if fretted and max(fretted) > frets:
        return min(fretted)
    return 1


# ── Text diagrams ─────────────────────────────────────────────────────────────

def text_keyboard(chroma: np.ndarray, notation: Notation = Notation.LETTER) -> str:
    """
    One octave of keys as four text rows: black key names and markers, then
    white key names and markers. Active keys are marked ``*``, others ``.``.
    """
    active = _active(chroma)
    width = 4 * len(white_keys()) + 2
    rows = [[" "] * width for _ in range(4)]

    def put(row: int, col: int, text: str) -> None:
        rows[row][col:col + len(text)] = list(text)

    white_slot = -1
    for note in NOTES:
        if note.is_black:
            col, name_row = 4 * white_slot + 2, 0
        else:
            white_slot += 1
            col, name_row = 4 * white_slot, 2
        put(name_row, col, note.name(notation))
        put(name_row + 1, col, "*" if note.index in active else ".")

    return "\n".join("".join(row).rstrip() for row in rows)


def text_fretboard(shape: GuitarShape, frets: int = DIAGRAM_FRETS) -> str:
    """
    A vertical chord box: string status row, nut, then one row per fret.

    Muted strings are ``x``, open strings ``o``, fretted notes ``*``. A barre
    is drawn as ``*`` on every covered string joined by ``=``.
    """
    fingering = shape.fingering
    base = _fret_window(fingering, frets)
    span = 3 * (len(fingering) - 1) + 1

    status = "".join(
        ("x" if fret < 0 else "o" if fret == 0 else " ").ljust(3) for fret in fingering
    ).rstrip()
    nut = "=" * span if base == 1 else "-" * span + f" {base}fr"
    lines = [status, nut]

    for fret in range(base, base + frets):
        cells = ["*" if fingered == fret else "|" for fingered in fingering]
        joins = [" "] * (len(fingering) - 1)
        barre = shape.barre
        if barre is not None and barre.fret == fret:
            for string in range(barre.first_string, barre.last_string + 1):
                cells[string] = "*"
            for string in range(barre.first_string, barre.last_string):
                joins[string] = "="
        row = cells[0]
        for join, cell in zip(joins, cells[1:]):
            row += join * 2 + cell
        lines.append(f"{row}  {fret}")

    return "\n".join(lines)


# ── SVG diagrams ─────────────────────────────────────────────────────────────

def svg_keyboard(chroma: np.ndarray, key_width: int = 20, height: int = 70) -> str:
    """One octave keyboard as inline SVG with a dot on each active key."""
    active = _active(chroma)
    whites = white_keys()
    black_width = key_width * 0.6
    black_height = height * 0.6
    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" class="keyboard" '
        f'width="{key_width * len(whites)}" height="{height}">'
    ]

    for slot, note in enumerate(whites):
        x = slot * key_width
        parts.append(
            f'<rect x="{x}" y="0" width="{key_width}" height="{height}" '
            f'fill="#fff" stroke="#333"/>'
        )
        if note.index in active:
            parts.append(
                f'<circle class="active" cx="{x + key_width / 2}" cy="{height - 10}" '
                f'r="{key_width / 4}" fill="#6366f1"/>'
            )

    white_slot = -1
    for note in NOTES:
        if not note.is_black:
            white_slot += 1
            continue
        x = (white_slot + 1) * key_width - black_width / 2
        parts.append(
            f'<rect x="{x}" y="0" width="{black_width}" height="{black_height}" fill="#222"/>'
        )
        if note.index in active:
            parts.append(
                f'<circle class="active" cx="{x + black_width / 2}" cy="{black_height - 8}" '
                f'r="{black_width / 4}" fill="#818cf8"/>'
            )

    parts.append("</svg>")
    return "".join(parts)


def svg_fretboard(
    shape: GuitarShape,
    string_spacing: int = 16,
    fret_spacing: int = 20,
    frets: int = DIAGRAM_FRETS,
) -> str:
    """Vertical chord box as inline SVG: strings, frets, dots, barre, x/o marks."""
    fingering = shape.fingering
    base = _fret_window(fingering, frets)
    left, top = 14, 24
    width = string_spacing * (len(fingering) - 1)
    height = fret_spacing * frets

    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" class="fretboard" '
        f'width="{width + 2 * left + 16}" height="{height + top + 8}">'
    ]
    nut_width = 4 if base == 1 else 1
    parts.append(
        f'<line x1="{left}" y1="{top}" x2="{left + width}" y2="{top}" '
        f'stroke="#222" stroke-width="{nut_width}"/>'
    )
    if base > 1:
        parts.append(
            f'<text x="{left + width + 6}" y="{top + fret_spacing * 0.7}" '
            f'font-size="10">{base}fr</text>'
        )
    for fret in range(1, frets + 1):
        y = top + fret * fret_spacing
        parts.append(f'<line x1="{left}" y1="{y}" x2="{left + width}" y2="{y}" stroke="#999"/>')

    for string, fret in enumerate(fingering):
        x = left + string * string_spacing
        opacity = 0.3 if fret < 0 else 1
        parts.append(
            f'<line x1="{x}" y1="{top}" x2="{x}" y2="{top + height}" '
            f'stroke="#555" opacity="{opacity}"/>'
        )
        if fret < 0:
            parts.append(f'<text class="muted" x="{x - 3}" y="{top - 8}" font-size="10">x</text>')
        elif fret == 0:
            parts.append(
                f'<circle class="open" cx="{x}" cy="{top - 11}" r="3.5" '
                f'fill="none" stroke="#4f46e5"/>'
            )
        else:
            y = top + (fret - base + 0.5) * fret_spacing
            parts.append(f'<circle class="finger" cx="{x}" cy="{y}" r="5.5" fill="#111"/>')

    barre = shape.barre
    if barre is not None:
        y = top + (barre.fret - base + 0.5) * fret_spacing
        x = left + barre.first_string * string_spacing
        span = (barre.last_string - barre.first_string) * string_spacing
        parts.append(
            f'<rect class="barre" x="{x - 5}" y="{y - 5}" width="{span + 10}" '
            f'height="10" rx="5" fill="#111" opacity="0.9"/>'
        )

    parts.append("</svg>")
    return "".join(parts)


def text_diagram(view: ChordView, settings: DisplaySettings) -> str:
    if settings.style is DiagramStyle.GUITAR:
        return text_fretboard(view.shape)
    return text_keyboard(notes_chroma(view.notes), settings.notation)


def svg_diagram(view: ChordView, settings: DisplaySettings) -> str:
    if settings.style is DiagramStyle.GUITAR:
        return svg_fretboard(view.shape)
    return svg_keyboard(notes_chroma(view.notes))


# ── Song renderers ───────────────────────────────────────────────────────────

class SongRenderer(ABC):
    """Abstract song renderer."""

    @property
    @abstractmethod
    def default_extension(self) -> str:
        """Default filename extension for this renderer."""

    @abstractmethod
    def render(self, song: Song, settings: DisplaySettings) -> str:
        """Render a song into a file content string."""


class TextSongRenderer(SongRenderer):
    """Plain-text chord chart: sections as chord rows, then one diagram per chord."""

    @property
    def default_extension(self) -> str:
        return ".txt"

    def render(self, song: Song, settings: DisplaySettings) -> str:
        lines = [song.title, f"by {song.author}"]
        lines.append(
            f"Transpose {settings.transposition_label} | "
            f"{settings.notation.value} | {settings.style.value}"
        )

        diagrams: dict[str, ChordView] = {}
        for section in song.sections:
            views = [build_chord_view(chord.original_value, settings) for chord in section.chords]
            lines.append("")
            lines.append(f"[{section.name}]")
            lines.append("  ".join(view.display_name for view in views) or "(no chords)")
            for view in views:
                diagrams.setdefault(view.display_name, view)

        for name, view in diagrams.items():
            lines.append("")
            label = view.quality_name or "unrecognized quality, shown as major"
            lines.append(f"{name} ({label})")
            lines.append(text_diagram(view, settings))

        return "\n".join(lines) + "\n"


class HtmlSongRenderer(SongRenderer):
    """Render a song as a self-contained HTML page with inline SVG diagrams."""

    @property
    def default_extension(self) -> str:
        return ".html"

    def render(self, song: Song, settings: DisplaySettings) -> str:
        sections = []
        for section in song.sections:
            cards = "\n".join(
                self.build_card(build_chord_view(chord.original_value, settings), settings)
                for chord in section.chords
            )
            sections.append(
                f'  <section>\n    <h2>{_escape_html(section.name)}</h2>\n'
                f'    <div class="chords">\n{cards}\n    </div>\n  </section>'
            )
        return self.build_html(song.title, song.author, "\n".join(sections), settings)

    def build_card(self, view: ChordView, settings: DisplaySettings) -> str:
        quality = view.quality_name or "Unrecognized"
        return (
            f'      <div class="chord">'
            f'<div class="name">{_escape_html(view.display_name)}</div>'
            f"{svg_diagram(view, settings)}"
            f'<div class="quality">{_escape_html(quality)}</div></div>'
        )

    def build_html(
        self,
        title: str,
        author: str,
        body: str,
        settings: DisplaySettings,
    ) -> str:
        """
        Wrap rendered sections in an HTML document.

        The heading and byline are omitted when empty. Print styles keep each
        section on one page where possible.
        """
        title_safe = _escape_html(title)
        heading = f"  <h1>{title_safe}</h1>\n" if title else ""
        byline = f'  <p class="author">{_escape_html(author)}</p>\n' if author else ""
        meta = (
            f'  <p class="settings">Transpose {settings.transposition_label} · '
            f"{settings.notation.value} · {settings.style.value}</p>\n"
        )

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1.0" />
  <title>{title_safe}</title>
  <style>
    body {{
      font-family: system-ui, sans-serif;
      background: #f8fafc;
      color: #0f172a;
      margin: 0;
      padding: 2rem;
    }}
    h1 {{ margin: 0; }}
    .author, .settings {{ color: #64748b; margin: 0.25rem 0; }}
    section {{ margin-top: 2rem; }}
    .chords {{ display: flex; flex-wrap: wrap; gap: 1rem; }}
    .chord {{
      background: #fff;
      border: 1px solid #e2e8f0;
      border-radius: 12px;
      padding: 0.75rem;
      text-align: center;
    }}
    .chord .name {{ font-size: 1.4rem; font-weight: 700; }}
    .chord .quality {{ font-size: 0.7rem; color: #94a3b8; }}
    @media print {{
      body {{ background: #fff; padding: 0; }}
      section {{ page-break-inside: avoid; }}
    }}
  </style>
</head>
<body>
{heading}{byline}{meta}{body}
</body>
</html>"""
