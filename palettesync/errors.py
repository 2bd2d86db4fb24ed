"""
PaletteSync Error Types
Recoverable error taxonomy shared by the color core and the API layer.
"""


class PaletteSyncError(Exception):
    """Base class for all recoverable PaletteSync errors."""

    def __init__(self, message: str, hint: str = ""):
        super().__init__(message)
        self.message = message
        self.hint = hint

    def to_detail(self) -> str:
        """User-facing message, with the hint appended when present."""
        if self.hint:
            return f"{self.message}. {self.hint}"
        return self.message


class InvalidInputError(PaletteSyncError, ValueError):
    """Bad caller input: k < 1, malformed color strings, out-of-range channels."""


class EmptySampleError(PaletteSyncError, ValueError):
    """No usable color points remain after sampling and alpha filtering."""

    def __init__(self, message: str = "No opaque pixels could be sampled from the image",
                 hint: str = "Try an image with fewer transparent regions"):
        super().__init__(message, hint)


class ConfigurationError(PaletteSyncError, ValueError):
    """Unknown algorithm, style, harmony, theme or export option name."""
