"""cleanmypc: cross-platform cleanup of temp files, caches and trash."""

__version__ = "1.0.0"
