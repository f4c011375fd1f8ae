"""Serialization and emission of per-day release counts."""

from __future__ import annotations

import json
import sys
from typing import Optional, Protocol, TextIO

from .models import CountsByDay


class HeatmapRenderer(Protocol):
    def render(self, payload: bytes, output_format: str) -> bytes:
        ...


def format_counts_json(counts: CountsByDay) -> str:
    """Serialize counts as indented JSON with days in calendar order."""
    return json.dumps(counts, indent=2, sort_keys=True)


def emit_report(
    counts: CountsByDay,
    output: str,
    renderer: Optional[HeatmapRenderer] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Write the report for ``counts`` to ``stream`` (standard output by default).

    ``output == "json"`` prints the JSON text. Any other value is treated as an
    image format: the JSON is handed to ``renderer`` and the resulting bytes
    are written to the binary buffer underneath ``stream``.
    """
    target = stream or sys.stdout
    payload = format_counts_json(counts)

    if output == "json":
        target.write(payload + "\n")
        target.flush()
        return

    if renderer is None:
        raise ValueError(f"A heatmap renderer is required for output format '{output}'.")

    image = renderer.render(payload.encode("utf-8"), output)
    target.flush()
    target.buffer.write(image)  # type: ignore[attr-defined]
    target.buffer.flush()  # type: ignore[attr-defined]
