"""I/O contracts for Step 02: video segmentation."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SegmentationPlan(BaseModel):
    """How many chunks a duration splits into. Immutable once computed."""

    model_config = ConfigDict(frozen=True)

    full_chunk_count: int = Field(..., ge=0)
    trailing_chunk_duration: float = Field(..., ge=0)
    total_chunk_count: int = Field(..., ge=0)

    @model_validator(mode="after")
    def _check_total(self) -> "SegmentationPlan":
        expected = self.full_chunk_count + (1 if self.trailing_chunk_duration > 0 else 0)
        if self.total_chunk_count != expected:
            raise ValueError(
                f"total_chunk_count={self.total_chunk_count} does not match "
                f"full_chunk_count={self.full_chunk_count} + trailing chunk"
            )
        return self


class ChunkSpec(BaseModel):
    """One planned chunk: where it starts, how long it is, where it goes."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0)
    start_offset_seconds: int = Field(..., ge=0)
    duration_seconds: float = Field(..., gt=0)
    output_path: Path


class SegmentVideoInput(BaseModel):
    video_path: Path = Field(..., description="Video-only file to cut")
    base_name: str | None = Field(
        None, description="Chunk base name (default: video stem without the intermediate prefix)"
    )


class SegmentVideoOutput(BaseModel):
    chunks_dir: Path = Field(..., description="Directory containing the chunk files")
    chunk_count: int = Field(..., description="Number of chunks written")
    chunk_paths: list[Path] = Field(default_factory=list, description="Chunk files in index order")
    duration_seconds: float = Field(..., description="Probed duration of the input video")
    plan: SegmentationPlan
