"""Configuration for Step 01: split the source into audio and video-only streams."""

from pydantic import BaseModel, Field


class ExtractStreamsConfig(BaseModel):
    audio_codec: str = Field("libmp3lame", description="Encoder for the standalone audio track")
    audio_extension: str = Field("mp3", description="Extension of the audio output file")
    video_prefix: str = Field("temp_", description="Filename prefix of the intermediate video-only file")
