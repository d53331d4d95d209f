"""Step 01: audio / video-only stream extraction."""
