"""I/O contracts for Step 01: audio / video stream extraction."""

from pathlib import Path

from pydantic import BaseModel, Field


class ExtractStreamsInput(BaseModel):
    source_path: Path = Field(..., description="Path to the source media file")
    base_name: str | None = Field(None, description="Output base name (default: source stem)")


class ExtractStreamsOutput(BaseModel):
    audio_path: Path = Field(..., description="Standalone audio track")
    video_path: Path = Field(..., description="Intermediate video-only file (stream-copied)")
    base_name: str = Field(..., description="Base name used for every derived file")
