"""Common Pydantic models shared across pipeline steps."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, model_validator

from avsplit.core.workspace import Workspace
from avsplit.steps.s01_extract_streams.config import ExtractStreamsConfig
from avsplit.steps.s02_segment_video.config import SegmentVideoConfig
from avsplit.steps.s02_segment_video.contracts import SegmentationPlan


class StepMeta(BaseModel):
    """Metadata attached to every step output for reproducibility."""

    step_name: str
    elapsed_seconds: float = 0.0
    params: dict[str, Any] = Field(default_factory=dict)


class MediaToolConfig(BaseModel):
    """Location of the ffmpeg/ffprobe binaries and per-command timeout."""

    ffmpeg_bin: str = Field(
        default_factory=lambda: os.environ.get("FFMPEG_BIN", "ffmpeg"),
        description="ffmpeg executable",
    )
    ffprobe_bin: str = Field(
        default_factory=lambda: os.environ.get("FFPROBE_BIN", "ffprobe"),
        description="ffprobe executable",
    )
    timeout_seconds: float | None = Field(
        None, gt=0, description="Kill a media command after this many seconds (None = wait forever)"
    )


class PipelineConfig(BaseModel):
    """Top-level pipeline configuration loaded from pipeline.yaml."""

    project_name: str = "avsplit"
    source_path: Path | None = None
    workspace: Workspace = Field(default_factory=Workspace)
    media: MediaToolConfig = Field(default_factory=MediaToolConfig)
    extract: ExtractStreamsConfig = Field(default_factory=ExtractStreamsConfig)
    segment: SegmentVideoConfig = Field(default_factory=SegmentVideoConfig)
    log_level: str = "INFO"

    @model_validator(mode="after")
    def _sync_intermediate_prefix(self) -> "PipelineConfig":
        # The segmenter strips whatever prefix the extractor wrote.
        if "intermediate_prefix" not in self.segment.model_fields_set:
            self.segment = self.segment.model_copy(
                update={"intermediate_prefix": self.extract.video_prefix}
            )
        return self


class PipelineResult(BaseModel):
    """What a successful run left on disk."""

    source_path: Path
    audio_path: Path
    chunk_paths: list[Path] = Field(default_factory=list)
    chunk_count: int = 0
    plan: SegmentationPlan
    steps: list[StepMeta] = Field(default_factory=list)


class ExtractionMode(str, Enum):
    AUDIO_ONLY = "audio_only"
    VIDEO_ONLY = "video_only"
    STREAM_COPY_RANGE = "stream_copy_range"
    SEGMENT_MUX = "segment_mux"


class ExtractionRequest(BaseModel):
    """Declarative description of one ffmpeg invocation. Owns no resources."""

    input_path: Path
    output_path: Path
    mode: ExtractionMode
    audio_codec: str = "libmp3lame"
    start_offset_seconds: int | None = Field(None, ge=0)
    duration_seconds: float | None = Field(None, gt=0)
    segment_time: int | None = Field(None, gt=0)
    segment_format: str = "mp4"

    @model_validator(mode="after")
    def _check_mode_fields(self) -> "ExtractionRequest":
        if self.mode == ExtractionMode.STREAM_COPY_RANGE and (
            self.start_offset_seconds is None or self.duration_seconds is None
        ):
            raise ValueError("range requests need start_offset_seconds and duration_seconds")
        if self.mode == ExtractionMode.SEGMENT_MUX and self.segment_time is None:
            raise ValueError("segment muxer requests need segment_time")
        return self

    def ffmpeg_options(self) -> dict[str, Any]:
        """Render the request as ffmpeg output options (``""`` = bare flag)."""
        if self.mode == ExtractionMode.AUDIO_ONLY:
            return {"vn": "", "acodec": self.audio_codec}
        if self.mode == ExtractionMode.VIDEO_ONLY:
            return {"c:v": "copy", "an": ""}
        if self.mode == ExtractionMode.STREAM_COPY_RANGE:
            return {"ss": self.start_offset_seconds, "t": self.duration_seconds, "c": "copy"}
        return {
            "c": "copy",
            "f": "segment",
            "segment_time": self.segment_time,
            "reset_timestamps": 1,
            "segment_format": self.segment_format,
            "break_non_keyframes": 1,
        }
