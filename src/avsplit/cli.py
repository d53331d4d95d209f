"""CLI entry point for avsplit.

Usage:
    avsplit run source/IMG_8435.MOV        # Extract audio + cut video chunks
    avsplit plan --duration 17 --chunk-size 5
    avsplit probe source/IMG_8435.MOV
    avsplit info                           # Show resolved configuration
"""

from __future__ import annotations

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from avsplit.core.contracts import PipelineConfig
from avsplit.core.errors import PipelineError
from avsplit.core.logging import setup_logging

app = typer.Typer(name="avsplit", help="Split a video into an audio track and fixed-size chunks")
console = Console()

DEFAULT_CONFIG = Path("configs/pipeline.yaml")


def _load_config(config: Path) -> PipelineConfig:
    from avsplit.core.pipeline_runner import load_pipeline_config

    if config.exists():
        return load_pipeline_config(config)
    return PipelineConfig()


@app.command()
def run(
    source: Path = typer.Argument(None, help="Source video (default: source_path from config)"),
    config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path"),
    chunk_size: int = typer.Option(None, "--chunk-size", "-s", help="Chunk length in seconds"),
    workspace: Path = typer.Option(None, "--workspace", "-w", help="Root of the audio/ and video/ folders"),
    timeout: float = typer.Option(None, help="Per-command timeout in seconds"),
    method: str = typer.Option(None, help="Segmentation method: range or muxer"),
    log_level: str = typer.Option(None, help="Logging level"),
) -> None:
    """Run the full pipeline."""
    from avsplit.core.pipeline_runner import process_video

    cfg = _load_config(config)
    setup_logging(log_level or cfg.log_level)

    if method is not None and method not in ("range", "muxer"):
        console.print(f"[red]Unknown method '{escape(method)}' (expected range or muxer)[/red]")
        raise typer.Exit(1)

    data = cfg.model_dump()
    if chunk_size is not None:
        data["segment"]["chunk_size_seconds"] = chunk_size
    if method is not None:
        data["segment"]["method"] = method
    if workspace is not None:
        data["workspace"]["root"] = workspace
    if timeout is not None:
        data["media"]["timeout_seconds"] = timeout
    try:
        cfg = PipelineConfig.model_validate(data)
    except ValidationError as exc:
        console.print(f"[red]Invalid option: {escape(str(exc))}[/red]")
        raise typer.Exit(1)

    src = source or cfg.source_path
    if src is None:
        console.print("[red]No source given and no source_path in config[/red]")
        raise typer.Exit(1)

    try:
        result = process_video(src, cfg)
    except PipelineError as exc:
        console.print(f"[red]{type(exc).__name__}: {escape(str(exc))}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"{result.source_path.name}: {result.chunk_count} chunks")
    table.add_column("#", style="dim")
    table.add_column("Output", style="cyan")
    table.add_row("audio", str(result.audio_path))
    for i, path in enumerate(result.chunk_paths):
        table.add_row(f"{i:03d}", str(path))
    console.print(table)


@app.command()
def plan(
    duration: float = typer.Option(..., help="Media duration in seconds"),
    chunk_size: int = typer.Option(5, "--chunk-size", "-s", help="Chunk length in seconds"),
    base_name: str = typer.Option("video", help="Base name used for chunk file names"),
    extension: str = typer.Option("mp4", help="Chunk file extension"),
) -> None:
    """Show how a duration would be cut, without touching any file."""
    from avsplit.steps.s02_segment_video._planner import iter_chunk_specs, plan as make_plan

    try:
        segmentation = make_plan(duration, chunk_size)
        specs = list(iter_chunk_specs(segmentation, chunk_size, Path("video"), base_name, extension))
    except (PipelineError, ValueError) as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"{segmentation.total_chunk_count} chunks")
    table.add_column("#", style="dim")
    table.add_column("Start (s)", style="green")
    table.add_column("Duration (s)", style="yellow")
    table.add_column("Output", style="cyan")
    for spec in specs:
        table.add_row(
            str(spec.index),
            str(spec.start_offset_seconds),
            f"{spec.duration_seconds:.3f}",
            str(spec.output_path),
        )
    console.print(table)


@app.command()
def probe(
    path: Path = typer.Argument(..., help="Media file to probe"),
    config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path"),
) -> None:
    """Print the duration of a media file."""
    from avsplit.utils.ffmpeg import FFmpeg

    cfg = _load_config(config)
    try:
        duration = FFmpeg.from_config(cfg.media).probe_duration(path)
    except PipelineError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)
    console.print(f"{path}: [green]{duration:.3f}s[/green]")


@app.command()
def info(config: Path = typer.Option(DEFAULT_CONFIG, help="Pipeline config path")) -> None:
    """Show the resolved pipeline configuration."""
    cfg = _load_config(config)
    table = Table(title=f"Pipeline: {cfg.project_name}")
    table.add_column("Section", style="cyan")
    table.add_column("Setting", style="green")
    table.add_column("Value", style="yellow")

    table.add_row("-", "source_path", str(cfg.source_path) if cfg.source_path else "-")
    for section in ("workspace", "media", "extract", "segment"):
        for key, value in getattr(cfg, section).model_dump(mode="json").items():
            table.add_row(section, key, "-" if value is None else str(value))
    console.print(table)


if __name__ == "__main__":
    app()
