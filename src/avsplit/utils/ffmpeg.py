"""ffmpeg / ffprobe wrapper: the only place that knows the command-line shape.

``transcode(input, output, options)`` renders an option dict the way the
ffmpeg keyword-argument bindings do: every key becomes ``-key``, a value of
``""`` or ``None`` is a bare flag, anything else is appended as the next
argument. Output files are always overwritten.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any

from avsplit.core.contracts import ExtractionRequest, MediaToolConfig
from avsplit.core.errors import MediaToolError, ProbeError
from avsplit.utils.subprocess_utils import run_command

logger = logging.getLogger(__name__)


def format_option_value(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(value)


def render_options(options: dict[str, Any]) -> list[str]:
    args: list[str] = []
    for key, value in options.items():
        args.append(f"-{key}")
        if value is None or value == "":
            continue
        args.append(format_option_value(value))
    return args


class FFmpeg:
    """Stateless handle on the two media binaries."""

    def __init__(
        self,
        ffmpeg_bin: str = "ffmpeg",
        ffprobe_bin: str = "ffprobe",
        timeout: float | None = None,
    ):
        self.ffmpeg_bin = ffmpeg_bin
        self.ffprobe_bin = ffprobe_bin
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: MediaToolConfig) -> "FFmpeg":
        return cls(
            ffmpeg_bin=config.ffmpeg_bin,
            ffprobe_bin=config.ffprobe_bin,
            timeout=config.timeout_seconds,
        )

    def build_command(self, input_path: Path, output_path: Path | str, options: dict[str, Any]) -> list[str]:
        return [
            self.ffmpeg_bin,
            "-y",
            "-i",
            str(input_path),
            *render_options(options),
            str(output_path),
        ]

    def transcode(self, input_path: Path, output_path: Path | str, options: dict[str, Any]) -> None:
        """Run ffmpeg once. Raises ``MediaToolError`` on any failure."""
        run_command(self.build_command(input_path, output_path, options), timeout=self.timeout)

    def run_request(self, request: ExtractionRequest) -> None:
        self.transcode(request.input_path, request.output_path, request.ffmpeg_options())

    def probe(self, path: Path) -> dict:
        """Return ffprobe's JSON view of the container format."""
        cmd = [
            self.ffprobe_bin,
            "-v",
            "error",
            "-show_entries",
            "format=duration",
            "-of",
            "json",
            str(path),
        ]
        try:
            result = run_command(cmd, timeout=self.timeout)
        except MediaToolError as exc:
            raise ProbeError(f"failed to probe {path}: {exc}") from exc

        if not result.stdout or not result.stdout.strip():
            raise ProbeError(f"failed to probe {path}: empty probe result")
        try:
            payload = json.loads(result.stdout)
        except json.JSONDecodeError as exc:
            raise ProbeError(f"failed to parse probe data for {path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise ProbeError(f"failed to parse probe data for {path}: not an object")
        return payload

    def probe_duration(self, path: Path) -> float:
        """Duration of ``path`` in seconds, as reported by the container."""
        payload = self.probe(path)
        raw = (payload.get("format") or {}).get("duration")
        if raw is None:
            raise ProbeError(f"no duration reported for {path}")
        try:
            duration = float(raw)
        except (TypeError, ValueError) as exc:
            raise ProbeError(f"failed to parse duration {raw!r} for {path}") from exc
        if not math.isfinite(duration) or duration < 0:
            raise ProbeError(f"unusable duration {raw!r} for {path}")
        logger.debug(f"Probed {path}: {duration:.3f}s")
        return duration
