"""SongExporter: writes a song as an HTML or plain-text chord sheet."""

from __future__ import annotations

from typing import Final

from chordbook.diagram_renderers import HtmlSongRenderer, SongRenderer, TextSongRenderer
from chordbook.display_settings import DisplaySettings
from chordbook.songbook_models import Song

SUPPORTED_FORMATS: Final[set[str]] = {"html", "text"}


class SongExporter:
    """
    Render a song through a pluggable renderer and write it to disk.

    Supported formats:
    - ``html``: self-contained page with an inline SVG diagram per chord.
    - ``text``: chord chart with ASCII keyboard / fretboard diagrams.
    """

    def __init__(
        self,
        settings: DisplaySettings | None = None,
        output_format: str = "html",
    ) -> None:
        self.settings = settings or DisplaySettings()
        normalized = output_format.strip().lower()
        if normalized not in SUPPORTED_FORMATS:
            supported = ", ".join(sorted(SUPPORTED_FORMATS))
            raise ValueError(f"Unsupported output format '{output_format}'. Use one of: {supported}.")
        self.output_format = normalized
        self.renderer = self._build_renderer(normalized)

    def _build_renderer(self, output_format: str) -> SongRenderer:
        if output_format == "html":
            return HtmlSongRenderer()
        return TextSongRenderer()

    @property
    def default_extension(self) -> str:
        return self.renderer.default_extension

    def render(self, song: Song) -> str:
        return self.renderer.render(song, self.settings)

    def export(self, song: Song, output_path: str) -> None:
        """
        Render ``song`` and write it to ``output_path``.

        Raises:
            OSError: If the output file cannot be written.
        """
        content = self.render(song)
        with open(output_path, "w", encoding="utf-8") as fh:
            fh.write(content)
