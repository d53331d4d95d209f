"""Shared pytest fixtures for avsplit tests."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Callable

import pytest

from avsplit.core.contracts import PipelineConfig
from avsplit.core.errors import MediaToolError
from avsplit.core.workspace import Workspace
from avsplit.utils.ffmpeg import FFmpeg


class FakeFFmpeg(FFmpeg):
    """Records every invocation and writes placeholder output files.

    ``durations`` maps file names to probed durations; ``fail`` decides, per
    call, whether the command should fail like a real non-zero ffmpeg exit.
    """

    def __init__(
        self,
        durations: dict[str, float] | None = None,
        default_duration: float = 12.0,
        fail: Callable[[Path, Path, dict[str, Any]], bool] | None = None,
    ):
        super().__init__(ffmpeg_bin="fake-ffmpeg", ffprobe_bin="fake-ffprobe")
        self.durations = durations or {}
        self.default_duration = default_duration
        self.fail = fail
        self.calls: list[tuple[Path, Path, dict[str, Any]]] = []
        self.probed: list[Path] = []
        self._lock = threading.Lock()

    def transcode(self, input_path: Path, output_path: Path | str, options: dict[str, Any]) -> None:
        output_path = Path(output_path)
        with self._lock:
            self.calls.append((Path(input_path), output_path, dict(options)))
        if self.fail is not None and self.fail(Path(input_path), output_path, options):
            raise MediaToolError("command failed: fake-ffmpeg", returncode=1, stderr="boom")

        if options.get("f") == "segment":
            count = self._segment_count(Path(input_path), int(options["segment_time"]))
            for i in range(count):
                Path(str(output_path) % i).write_bytes(b"chunk")
            return
        output_path.write_bytes(b"media")

    def probe_duration(self, path: Path) -> float:
        self.probed.append(Path(path))
        return self.durations.get(Path(path).name, self.default_duration)

    def _segment_count(self, path: Path, size: int) -> int:
        duration = self.durations.get(path.name, self.default_duration)
        full, rest = divmod(duration, size)
        return int(full) + (1 if rest > 0 else 0)

    def outputs(self) -> list[Path]:
        return [out for _, out, _ in self.calls]


@pytest.fixture
def workspace(tmp_path: Path) -> Workspace:
    """Workspace rooted in a temporary directory, folders created."""
    ws = Workspace(root=tmp_path / "out")
    ws.audio_path.mkdir(parents=True, exist_ok=True)
    ws.video_path.mkdir(parents=True, exist_ok=True)
    return ws


@pytest.fixture
def source_video(tmp_path: Path) -> Path:
    """A placeholder source file; its contents are never decoded."""
    src_dir = tmp_path / "source"
    src_dir.mkdir(parents=True, exist_ok=True)
    path = src_dir / "IMG_8435.MOV"
    path.write_bytes(b"\x00" * 64)
    return path


@pytest.fixture
def fake_tool() -> FakeFFmpeg:
    return FakeFFmpeg(durations={"temp_IMG_8435.MOV": 17.0})


@pytest.fixture
def pipeline_config(tmp_path: Path) -> PipelineConfig:
    return PipelineConfig(workspace=Workspace(root=tmp_path / "out"))


@pytest.fixture
def make_tool() -> type[FakeFFmpeg]:
    """The fake tool class, for tests that need custom durations or failures."""
    return FakeFFmpeg
