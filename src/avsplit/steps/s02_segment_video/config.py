"""Configuration for Step 02: cut the video-only stream into fixed-size chunks."""

from typing import Literal

from pydantic import BaseModel, Field


class SegmentVideoConfig(BaseModel):
    chunk_size_seconds: int = Field(5, description="Length of every full chunk in seconds")
    chunk_extension: str = Field("mp4", description="Container of the chunk files")
    intermediate_prefix: str = Field(
        "temp_",
        description="Prefix of the intermediate video-only file, stripped to recover the source name",
    )
    method: Literal["range", "muxer"] = Field(
        "range",
        description="range = one ranged stream copy per chunk; muxer = single ffmpeg segment-muxer run",
    )
