"""Exceptions raised by the harness."""


class HarnessError(Exception):
    """Base class for harness errors."""


class ScreenshotCaptureError(HarnessError):
    """Raised when a captured screenshot cannot be written to disk."""

    def __init__(self, path, cause: OSError):
        super().__init__(f"Failed to save screenshot {path}: {cause}")
        self.path = path


class ConsoleLogUnavailableError(HarnessError):
    """Raised when a driver cannot provide browser console logs."""
