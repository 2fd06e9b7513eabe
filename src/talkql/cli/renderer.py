"""Transcript renderer for the terminal."""

import json
import logging
from typing import Any, TextIO

from talkql.core.session import ROLE_USER, ConnectionInfo, TranscriptEntry

logger = logging.getLogger(__name__)


class TranscriptRenderer:
    """Writes transcript entries and session chrome to a text stream."""

    def __init__(self, output: TextIO):
        """Initialize the renderer.

        Parameters
        ----------
        output
            File-like object to write output to.
        """
        self.output = output
        self.rendered = 0

    def render_new(self, transcript: list[TranscriptEntry]) -> None:
        """Render every entry appended since the last call."""
        if len(transcript) < self.rendered:
            # Transcript was reset by a disconnect.
            self.rendered = 0
        for entry in transcript[self.rendered :]:
            self.render_entry(entry)
        self.rendered = len(transcript)

    def render_entry(self, entry: TranscriptEntry) -> None:
        if entry.role == ROLE_USER:
            self._print(f"\n🧑 You: {entry.content}\n")
            return

        self._print(f"\n🤖 Assistant:\n{entry.content}\n")

        if entry.visualization_payload is not None:
            if entry.visualization_was_enabled:
                self._print(self._format_visualization(entry.visualization_payload))
            else:
                logger.debug("Visualization payload returned while disabled, skipped")

    def render_header(self, connection: ConnectionInfo) -> None:
        badge = connection.source_type[:2].upper()
        self._print(f"[{badge}] Connected: {connection.source_name}\n")

    def render_modes(self, visualization: bool, tabular: bool) -> None:
        self._print(
            f"Visualization: {'on' if visualization else 'off'} | "
            f"Tabular: {'on' if tabular else 'off'}\n"
        )

    def render_notice(self, text: str) -> None:
        self._print(f"{text}\n")

    def render_prompt(self) -> None:
        self._print("> ")

    def _format_visualization(self, payload: Any) -> str:
        """Summarise a visualization payload; the terminal cannot draw charts."""
        if isinstance(payload, dict):
            keys = ", ".join(list(payload.keys())[:5])
            return f"📊 Visualization returned ({keys})\n"
        try:
            size = len(json.dumps(payload))
        except (TypeError, ValueError):
            size = len(str(payload))
        return f"📊 Visualization returned ({size} bytes)\n"

    def _print(self, text: str) -> None:
        """Print text to output."""
        self.output.write(text)
        self.output.flush()
