"""Step 01: Extract the audio track and the video-only stream in parallel."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar

from avsplit.core.contracts import ExtractionMode, ExtractionRequest
from avsplit.core.errors import AudioExtractionFailed, MediaToolError, VideoExtractionFailed
from avsplit.core.step_base import BaseStep
from avsplit.core.task_group import TaskGroup
from .config import ExtractStreamsConfig
from .contracts import ExtractStreamsInput, ExtractStreamsOutput

logger = logging.getLogger(__name__)


class ExtractStreamsStep(BaseStep[ExtractStreamsInput, ExtractStreamsOutput, ExtractStreamsConfig]):
    name: ClassVar[str] = "extract_streams"
    input_type: ClassVar = ExtractStreamsInput
    output_type: ClassVar = ExtractStreamsOutput
    config_type: ClassVar = ExtractStreamsConfig

    def validate_inputs(self, inputs: ExtractStreamsInput) -> bool:
        if not inputs.source_path.is_file():
            logger.error(f"Source not found: {inputs.source_path}")
            return False
        return True

    def build_requests(
        self, source_path: Path, base_name: str
    ) -> tuple[ExtractionRequest, ExtractionRequest]:
        audio_out = self.workspace.audio_path / f"{base_name}.{self.config.audio_extension}"
        video_out = self.workspace.video_path / f"{self.config.video_prefix}{source_path.name}"
        audio = ExtractionRequest(
            input_path=source_path,
            output_path=audio_out,
            mode=ExtractionMode.AUDIO_ONLY,
            audio_codec=self.config.audio_codec,
        )
        video = ExtractionRequest(
            input_path=source_path,
            output_path=video_out,
            mode=ExtractionMode.VIDEO_ONLY,
        )
        return audio, video

    def _extract_audio(self, request: ExtractionRequest) -> Path:
        try:
            self.tool.run_request(request)
        except MediaToolError as exc:
            raise AudioExtractionFailed(f"failed to extract audio from {request.input_path}: {exc}") from exc
        return request.output_path

    def _extract_video(self, request: ExtractionRequest) -> Path:
        try:
            self.tool.run_request(request)
        except MediaToolError as exc:
            raise VideoExtractionFailed(f"failed to extract video from {request.input_path}: {exc}") from exc
        return request.output_path

    def run(self, inputs: ExtractStreamsInput) -> ExtractStreamsOutput:
        base_name = inputs.base_name or inputs.source_path.stem
        audio_req, video_req = self.build_requests(inputs.source_path, base_name)
        for request in (audio_req, video_req):
            request.output_path.parent.mkdir(parents=True, exist_ok=True)

        group = TaskGroup()
        group.add("audio", self._extract_audio, audio_req)
        group.add("video", self._extract_video, video_req)
        results = group.run()

        logger.info(f"Extracted audio -> {results['audio']}, video -> {results['video']}")
        return ExtractStreamsOutput(
            audio_path=results["audio"],
            video_path=results["video"],
            base_name=base_name,
        )
