"""avsplit: split a video into an audio track and fixed-duration chunks."""

__version__ = "0.1.0"
