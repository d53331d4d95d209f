"""Workspace lifecycle: the audio and video output directories of a run.

A workspace is wiped and recreated at the start of every run. Nothing is
appended to output from a previous run.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

from avsplit.core.errors import WorkspacePrepFailed

logger = logging.getLogger(__name__)


class Workspace(BaseModel):
    root: Path = Field(Path("."), description="Directory holding the output folders")
    audio_dir: str = Field("audio", description="Folder for the extracted audio track")
    video_dir: str = Field("video", description="Folder for the intermediate video and chunks")

    @field_validator("audio_dir", "video_dir")
    @classmethod
    def _single_folder_name(cls, value: str) -> str:
        # Both folders are removed with rmtree; they must stay strictly below root.
        parts = Path(value).parts
        if Path(value).is_absolute() or len(parts) != 1 or parts[0] in (".", ".."):
            raise ValueError(f"must be a single folder name below the workspace root, got {value!r}")
        return value

    @model_validator(mode="after")
    def _distinct_folders(self) -> "Workspace":
        if self.audio_dir == self.video_dir:
            raise ValueError(f"audio_dir and video_dir must differ, both are {self.audio_dir!r}")
        return self

    @property
    def audio_path(self) -> Path:
        return self.root / self.audio_dir

    @property
    def video_path(self) -> Path:
        return self.root / self.video_dir

    @property
    def folders(self) -> list[Path]:
        return [self.audio_path, self.video_path]


def clean_workspace(workspace: Workspace) -> None:
    """Remove both output folders, ignoring ones that do not exist yet."""
    for folder in workspace.folders:
        if not folder.exists():
            continue
        logger.info(f"Removing {folder}")
        try:
            shutil.rmtree(folder)
        except OSError as exc:
            raise WorkspacePrepFailed(f"failed to remove {folder}: {exc}") from exc


def prepare_workspace(workspace: Workspace) -> None:
    """Create both output folders."""
    for folder in workspace.folders:
        try:
            folder.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise WorkspacePrepFailed(f"failed to create dir {folder}: {exc}") from exc
