"""Pipeline orchestrator: workspace lifecycle around extract -> segment."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from avsplit.core.contracts import PipelineConfig, PipelineResult
from avsplit.core.errors import CleanupFailed, SourceNotFound
from avsplit.core.workspace import clean_workspace, prepare_workspace
from avsplit.steps.s01_extract_streams.contracts import ExtractStreamsInput
from avsplit.steps.s01_extract_streams.step import ExtractStreamsStep
from avsplit.steps.s02_segment_video._planner import check_chunk_size
from avsplit.steps.s02_segment_video.contracts import SegmentVideoInput
from avsplit.steps.s02_segment_video.step import SegmentVideoStep
from avsplit.utils.ffmpeg import FFmpeg

logger = logging.getLogger(__name__)


def load_pipeline_config(config_path: Path) -> PipelineConfig:
    """Load and validate pipeline.yaml."""
    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return PipelineConfig(**raw)


def process_video(
    source_path: Path,
    config: PipelineConfig,
    tool: FFmpeg | None = None,
) -> PipelineResult:
    """Extract audio, cut the video into chunks, drop the intermediate file.

    Any stage failure aborts the rest of the run. Files written before the
    failing stage are left on disk.
    """
    source_path = Path(source_path)
    workspace = config.workspace
    tool = tool or FFmpeg.from_config(config.media)

    logger.info(f"Pipeline '{config.project_name}': {source_path}")
    check_chunk_size(config.segment.chunk_size_seconds)
    clean_workspace(workspace)

    if not source_path.is_file():
        raise SourceNotFound(f"source file error: {source_path} does not exist")

    prepare_workspace(workspace)

    extract = ExtractStreamsStep(config=config.extract, workspace=workspace, tool=tool)
    streams = extract.execute(ExtractStreamsInput(source_path=source_path))

    segment = SegmentVideoStep(config=config.segment, workspace=workspace, tool=tool)
    chunks = segment.execute(
        SegmentVideoInput(video_path=streams.video_path, base_name=streams.base_name)
    )

    try:
        streams.video_path.unlink()
    except OSError as exc:
        raise CleanupFailed(f"failed to remove intermediate {streams.video_path}: {exc}") from exc

    logger.info(f"Pipeline complete: {chunks.chunk_count} chunks, audio at {streams.audio_path}")
    return PipelineResult(
        source_path=source_path,
        audio_path=streams.audio_path,
        chunk_paths=chunks.chunk_paths,
        chunk_count=chunks.chunk_count,
        plan=chunks.plan,
        steps=[step.meta for step in (extract, segment) if step.meta is not None],
    )


def run_pipeline(config_path: Path, source_path: Path | None = None) -> PipelineResult:
    """Execute the full pipeline from a config file."""
    config = load_pipeline_config(config_path)
    source = source_path or config.source_path
    if source is None:
        raise SourceNotFound("no source path given and none set in config")
    return process_video(Path(source), config)
