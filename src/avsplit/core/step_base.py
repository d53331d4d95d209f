"""Base class for all pipeline steps.

Every step declares typed Input, Output, Config via Pydantic models and is
handed the workspace it writes into plus the media tool it drives. Steps
never reach for process-wide state.
"""

from __future__ import annotations

import time
import logging
from abc import ABC, abstractmethod
from typing import Generic, TypeVar, ClassVar

from pydantic import BaseModel

from avsplit.core.contracts import StepMeta
from avsplit.core.errors import StepValidationError
from avsplit.core.workspace import Workspace
from avsplit.utils.ffmpeg import FFmpeg

InputT = TypeVar("InputT", bound=BaseModel)
OutputT = TypeVar("OutputT", bound=BaseModel)
ConfigT = TypeVar("ConfigT", bound=BaseModel)

logger = logging.getLogger(__name__)


class BaseStep(ABC, Generic[InputT, OutputT, ConfigT]):
    """Abstract base for pipeline steps.

    Subclasses must:
    1. Define concrete Pydantic models for InputT, OutputT, ConfigT
    2. Set class variables: input_type, output_type, config_type
    3. Implement run() and validate_inputs()

    Example:
        class SegmentVideoStep(BaseStep[SegmentVideoInput, SegmentVideoOutput, SegmentVideoConfig]):
            input_type = SegmentVideoInput
            output_type = SegmentVideoOutput
            config_type = SegmentVideoConfig

            def run(self, inputs: SegmentVideoInput) -> SegmentVideoOutput: ...
            def validate_inputs(self, inputs: SegmentVideoInput) -> bool: ...
    """

    name: ClassVar[str] = ""
    input_type: ClassVar[type[BaseModel]]
    output_type: ClassVar[type[BaseModel]]
    config_type: ClassVar[type[BaseModel]]

    def __init__(self, config: ConfigT, workspace: Workspace, tool: FFmpeg | None = None):
        self.config = config
        self.workspace = workspace
        self.tool = tool or FFmpeg()
        self.meta: StepMeta | None = None

    @abstractmethod
    def run(self, inputs: InputT) -> OutputT:
        """Execute this pipeline step. Returns output model."""
        ...

    @abstractmethod
    def validate_inputs(self, inputs: InputT) -> bool:
        """Check that all required input artifacts exist and are valid."""
        ...

    def execute(self, inputs: InputT) -> OutputT:
        """Run with logging, timing, and validation."""
        step_name = self.name or self.__class__.__name__
        logger.info(f"[{step_name}] Validating inputs...")

        if not self.validate_inputs(inputs):
            raise StepValidationError(f"[{step_name}] Input validation failed")

        logger.info(f"[{step_name}] Starting...")
        t0 = time.time()
        result = self.run(inputs)
        elapsed = time.time() - t0
        logger.info(f"[{step_name}] Done in {elapsed:.1f}s")
        self.meta = StepMeta(
            step_name=step_name,
            elapsed_seconds=elapsed,
            params=self.config.model_dump(mode="json"),
        )
        return result
