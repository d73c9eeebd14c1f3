"""Terminal emulator profiles: typed properties, colour palettes and a settings store."""

__version__ = "0.1.0"

__all__ = ["color", "enums", "profile", "properties", "settings"]