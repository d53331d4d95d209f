"""Chunk planning: duration + chunk size -> cut points.

Pure functions only; nothing here touches the filesystem or ffmpeg.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Iterator

from avsplit.core.errors import InvalidChunkSize
from .contracts import ChunkSpec, SegmentationPlan


def check_chunk_size(chunk_size_seconds: int) -> None:
    if (
        isinstance(chunk_size_seconds, bool)
        or not isinstance(chunk_size_seconds, int)
        or chunk_size_seconds <= 0
    ):
        raise InvalidChunkSize(f"chunk size must be a positive integer, got {chunk_size_seconds!r}")


def plan(total_duration_seconds: float, chunk_size_seconds: int) -> SegmentationPlan:
    """Split ``total_duration_seconds`` into full chunks plus an optional remainder.

    The remainder is kept only when strictly positive: an exact multiple (or a
    float error that lands just below zero) never yields an empty last chunk.
    """
    check_chunk_size(chunk_size_seconds)
    if not math.isfinite(total_duration_seconds) or total_duration_seconds < 0:
        raise ValueError(f"duration must be a finite non-negative number, got {total_duration_seconds!r}")

    full = math.floor(total_duration_seconds / chunk_size_seconds)
    trailing = total_duration_seconds - full * chunk_size_seconds
    if trailing > 0:
        return SegmentationPlan(
            full_chunk_count=full,
            trailing_chunk_duration=trailing,
            total_chunk_count=full + 1,
        )
    return SegmentationPlan(full_chunk_count=full, trailing_chunk_duration=0.0, total_chunk_count=full)


def chunk_path(base_dir: Path, base_name: str, index: int, extension: str) -> Path:
    return base_dir / f"{base_name}_chunk_{index:03d}.{extension}"


def chunk_pattern(base_dir: Path, base_name: str, extension: str) -> Path:
    """printf-style pattern understood by ffmpeg's segment muxer.

    A literal ``%`` in the base name is doubled so ffmpeg does not read it as a
    format directive.
    """
    escaped = base_name.replace("%", "%%")
    return base_dir / f"{escaped}_chunk_%03d.{extension}"


def iter_chunk_specs(
    segmentation: SegmentationPlan,
    chunk_size_seconds: int,
    base_dir: Path,
    base_name: str,
    extension: str,
) -> Iterator[ChunkSpec]:
    """Yield the chunk specs of ``segmentation`` in increasing index order."""
    check_chunk_size(chunk_size_seconds)
    for i in range(segmentation.full_chunk_count):
        yield ChunkSpec(
            index=i,
            start_offset_seconds=i * chunk_size_seconds,
            duration_seconds=float(chunk_size_seconds),
            output_path=chunk_path(base_dir, base_name, i, extension),
        )

    if segmentation.trailing_chunk_duration > 0:
        last = segmentation.full_chunk_count
        yield ChunkSpec(
            index=last,
            start_offset_seconds=last * chunk_size_seconds,
            duration_seconds=segmentation.trailing_chunk_duration,
            output_path=chunk_path(base_dir, base_name, last, extension),
        )
