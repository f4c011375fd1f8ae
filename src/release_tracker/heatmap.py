"""Calendar heatmap rendering through the ``calendarheatmap`` command.

The command reads a JSON object of ``{"YYYY-MM-DD": count}`` on stdin and
writes the image to stdout. Color scales and fonts are resolved by the
command itself, optionally from ``CALENDAR_HEATMAP_ASSETS_PATH``.
"""

from __future__ import annotations

import logging
import os
import subprocess
from typing import Dict, List, Optional

from .errors import RenderError

logger = logging.getLogger(__name__)

DEFAULT_COLOR_SCALE = "green-blue-9.csv"
DEFAULT_LOCALE = "en_US"


class CalendarHeatmapRenderer:
    """Renders per-day counts as an image via an external executable."""

    def __init__(
        self,
        command: str = "calendarheatmap",
        assets_path: Optional[str] = None,
        color_scale: str = DEFAULT_COLOR_SCALE,
        locale: str = DEFAULT_LOCALE,
        labels: bool = True,
        month_separator: bool = True,
        timeout_seconds: int = 60,
    ) -> None:
        self._command = command
        self._assets_path = assets_path
        self._color_scale = color_scale
        self._locale = locale
        self._labels = labels
        self._month_separator = month_separator
        self._timeout_seconds = timeout_seconds

    def _build_args(self, output_format: str) -> List[str]:
        return [
            self._command,
            f"-colorscale={self._color_scale}",
            f"-labels={str(self._labels).lower()}",
            f"-monthsep={str(self._month_separator).lower()}",
            f"-locale={self._locale}",
            f"-o={output_format}",
        ]

    def _build_env(self) -> Dict[str, str]:
        env = dict(os.environ)
        if self._assets_path:
            env["CALENDAR_HEATMAP_ASSETS_PATH"] = self._assets_path
        elif self._color_scale != DEFAULT_COLOR_SCALE:
            logger.warning(
                "defaulting to colorscale %s since CALENDAR_HEATMAP_ASSETS_PATH is not set",
                DEFAULT_COLOR_SCALE,
            )
        return env

    def render(self, payload: bytes, output_format: str) -> bytes:
        """Render JSON-encoded counts into image bytes.

        Raises:
            RenderError: If the command is missing, times out or exits non-zero.
        """
        args = self._build_args(output_format)
        try:
            completed = subprocess.run(
                args,
                input=payload,
                capture_output=True,
                env=self._build_env(),
                timeout=self._timeout_seconds,
                check=False,
            )
        except FileNotFoundError as exc:
            raise RenderError(
                f"Heatmap command '{self._command}' was not found. "
                "Install calendarheatmap or set CALENDAR_HEATMAP_COMMAND."
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise RenderError(
                f"Heatmap command '{self._command}' timed out after {self._timeout_seconds}s"
            ) from exc

        if completed.returncode != 0:
            stderr = completed.stderr.decode("utf-8", errors="replace").strip()
            raise RenderError(
                f"Heatmap command '{self._command}' failed with exit code "
                f"{completed.returncode}: {stderr}"
            )

        return completed.stdout
