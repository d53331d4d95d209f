"""Fixtures for E2E pipeline tests: a synthetic source built with ffmpeg itself."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest


def _has_encoder(name: str) -> bool:
    result = subprocess.run(["ffmpeg", "-hide_banner", "-encoders"], capture_output=True, text=True)
    return result.returncode == 0 and f" {name} " in result.stdout


def create_synthetic_video(
    output_dir: Path,
    duration: float = 17.0,
    resolution: tuple[int, int] = (160, 120),
    fps: int = 25,
) -> Path:
    """
    Create a synthetic test video with a test pattern and a sine tone.

    Every frame is a keyframe so stream-copy cuts land exactly on the
    requested offsets.

    Args:
        output_dir: Directory to save the video
        duration: Length in seconds
        resolution: Video resolution as (width, height)
        fps: Frames per second

    Returns:
        Path to the created video file
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    video_path = output_dir / "synthetic.mp4"
    width, height = resolution
    cmd = [
        "ffmpeg", "-y", "-hide_banner", "-loglevel", "error",
        "-f", "lavfi", "-i", f"testsrc=duration={duration}:size={width}x{height}:rate={fps}",
        "-f", "lavfi", "-i", f"sine=frequency=440:duration={duration}",
        "-c:v", "mpeg4", "-g", "1", "-q:v", "5",
        "-c:a", "aac",
        "-shortest",
        str(video_path),
    ]
    subprocess.run(cmd, check=True, capture_output=True)
    return video_path


@pytest.fixture
def synthetic_video(tmp_path: Path) -> Path:
    """A 17-second synthetic source with one video and one audio stream."""
    if shutil.which("ffmpeg") is None or shutil.which("ffprobe") is None:
        pytest.skip("ffmpeg/ffprobe not installed")
    if not _has_encoder("libmp3lame"):
        pytest.skip("ffmpeg built without libmp3lame")
    return create_synthetic_video(tmp_path / "source")
