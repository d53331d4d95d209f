"""Error taxonomy for the avsplit pipeline.

Every failure raised by a stage is a ``PipelineError`` subclass, so callers
(the CLI in particular) can catch one type and report the wrapped message.
"""

from __future__ import annotations


class PipelineError(RuntimeError):
    """Base class for all pipeline failures."""


class SourceNotFound(PipelineError):
    """The source media file does not exist."""


class WorkspacePrepFailed(PipelineError):
    """Workspace directories could not be removed or created."""


class ProbeError(PipelineError):
    """Media metadata could not be read or did not contain a usable duration."""


class AudioExtractionFailed(PipelineError):
    """The audio-only extraction branch failed."""


class VideoExtractionFailed(PipelineError):
    """The video-only extraction branch failed."""


class InvalidChunkSize(PipelineError, ValueError):
    """Chunk size is not a positive integer number of seconds."""


class ChunkExtractionFailed(PipelineError):
    """Extraction of a single chunk failed; earlier chunks stay on disk."""

    def __init__(self, index: int, message: str | None = None):
        self.index = index
        super().__init__(message or f"failed to create chunk {index}")


class CleanupFailed(PipelineError):
    """The intermediate video-only file could not be deleted."""


class StepValidationError(PipelineError, ValueError):
    """A step rejected its inputs before running."""


class MediaToolError(PipelineError):
    """An external media command exited non-zero, timed out or was missing."""

    def __init__(
        self,
        message: str,
        cmd: list[str] | None = None,
        returncode: int | None = None,
        stderr: str = "",
    ):
        self.cmd = cmd or []
        self.returncode = returncode
        self.stderr = stderr
        detail = f"{message} (exit {returncode})" if returncode is not None else message
        if stderr:
            detail = f"{detail}: {stderr.strip()[-300:]}"
        super().__init__(detail)
