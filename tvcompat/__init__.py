"""Check media files against the Samsung Frame (2024) playback matrix."""

__version__ = "0.3.0"
