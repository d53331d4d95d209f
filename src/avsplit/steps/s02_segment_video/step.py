"""Step 02: Cut the video-only stream into fixed-duration chunks."""

from __future__ import annotations

import glob
import logging
from pathlib import Path
from typing import ClassVar

from avsplit.core.contracts import ExtractionMode, ExtractionRequest
from avsplit.core.errors import ChunkExtractionFailed, MediaToolError
from avsplit.core.step_base import BaseStep
from ._planner import chunk_pattern, iter_chunk_specs, plan
from .config import SegmentVideoConfig
from .contracts import ChunkSpec, SegmentationPlan, SegmentVideoInput, SegmentVideoOutput

logger = logging.getLogger(__name__)


class SegmentVideoStep(BaseStep[SegmentVideoInput, SegmentVideoOutput, SegmentVideoConfig]):
    name: ClassVar[str] = "segment_video"
    input_type: ClassVar = SegmentVideoInput
    output_type: ClassVar = SegmentVideoOutput
    config_type: ClassVar = SegmentVideoConfig

    def validate_inputs(self, inputs: SegmentVideoInput) -> bool:
        if not inputs.video_path.is_file():
            logger.error(f"Video not found: {inputs.video_path}")
            return False
        return True

    def _base_name(self, inputs: SegmentVideoInput) -> str:
        if inputs.base_name:
            return inputs.base_name
        stem = inputs.video_path.stem
        prefix = self.config.intermediate_prefix
        if prefix and stem.startswith(prefix):
            stem = stem[len(prefix):] or stem
        return stem

    def _cut_chunk(self, video_path: Path, spec: ChunkSpec) -> None:
        request = ExtractionRequest(
            input_path=video_path,
            output_path=spec.output_path,
            mode=ExtractionMode.STREAM_COPY_RANGE,
            start_offset_seconds=spec.start_offset_seconds,
            duration_seconds=spec.duration_seconds,
        )
        try:
            self.tool.run_request(request)
        except MediaToolError as exc:
            raise ChunkExtractionFailed(spec.index, f"failed to create chunk {spec.index}: {exc}") from exc

    def _split_ranges(
        self, video_path: Path, segmentation: SegmentationPlan, base_name: str
    ) -> list[Path]:
        written: list[Path] = []
        specs = iter_chunk_specs(
            segmentation,
            self.config.chunk_size_seconds,
            video_path.parent,
            base_name,
            self.config.chunk_extension,
        )
        for spec in specs:
            logger.debug(
                f"Chunk {spec.index}: ss={spec.start_offset_seconds} t={spec.duration_seconds:.3f}"
            )
            self._cut_chunk(video_path, spec)
            written.append(spec.output_path)
        return written

    def _split_muxer(self, video_path: Path, base_name: str) -> list[Path]:
        request = ExtractionRequest(
            input_path=video_path,
            output_path=chunk_pattern(video_path.parent, base_name, self.config.chunk_extension),
            mode=ExtractionMode.SEGMENT_MUX,
            segment_time=self.config.chunk_size_seconds,
            segment_format=self.config.chunk_extension,
        )
        try:
            self.tool.run_request(request)
        except MediaToolError as exc:
            raise ChunkExtractionFailed(0, f"failed to split video with segment muxer: {exc}") from exc
        pattern = f"{glob.escape(base_name)}_chunk_[0-9][0-9][0-9]*.{self.config.chunk_extension}"
        return sorted(video_path.parent.glob(pattern), key=lambda p: int(p.stem.rsplit("_", 1)[1]))

    def run(self, inputs: SegmentVideoInput) -> SegmentVideoOutput:
        video_path = inputs.video_path
        base_name = self._base_name(inputs)

        duration = self.tool.probe_duration(video_path)
        segmentation = plan(duration, self.config.chunk_size_seconds)
        logger.info(
            f"{video_path.name}: {duration:.3f}s -> {segmentation.full_chunk_count} full chunks"
            f" + {segmentation.trailing_chunk_duration:.3f}s trailing"
            f" ({segmentation.total_chunk_count} total)"
        )

        if self.config.method == "muxer":
            chunk_paths = self._split_muxer(video_path, base_name)
        else:
            chunk_paths = self._split_ranges(video_path, segmentation, base_name)

        return SegmentVideoOutput(
            chunks_dir=video_path.parent,
            chunk_count=len(chunk_paths),
            chunk_paths=chunk_paths,
            duration_seconds=duration,
            plan=segmentation,
        )
