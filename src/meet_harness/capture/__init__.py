"""Capture module for saving diagnostic artifacts when a test fails."""

from .artifacts import capture_console_log, capture_debug_log, capture_html_source, capture_screenshot
from .collector import FailureArtifactCollector
from .layout import ArtifactLayout, initialize_layout

__all__ = [
    "ArtifactLayout",
    "FailureArtifactCollector",
    "capture_console_log",
    "capture_debug_log",
    "capture_html_source",
    "capture_screenshot",
    "initialize_layout",
]
