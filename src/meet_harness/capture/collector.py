"""Collects diagnostic artifacts for every active session when a test fails."""

from typing import Callable

from rich.console import Console
from rich.markup import escape

from ..config import CaptureConfig, Config
from ..models import ArtifactKind, CaptureOutcome, CaptureResult, FailureContext, FailureEvent, artifact_file_name
from ..session import ConferenceSessions
from .artifacts import CAPTURERS
from .layout import ArtifactLayout

console = Console(stderr=True)

Forward = Callable[[FailureEvent], None]


class FailureArtifactCollector:
    """
    Capture screenshots, HTML sources, debug logs and console logs on failure.

    Capturing is best effort. Nothing raised while capturing reaches the
    caller, and the event is always handed to ``forward`` afterwards.
    """

    def __init__(
        self,
        layout: ArtifactLayout,
        capture: CaptureConfig | None = None,
        forward: Forward | None = None,
    ):
        self.layout = layout
        self.capture = capture or CaptureConfig()
        self.forward = forward
        self._initialized = False

    @classmethod
    def from_config(cls, config: Config, forward: Forward | None = None) -> "FailureArtifactCollector":
        layout = ArtifactLayout.for_root(config.reports_dir, config.layout)
        return cls(layout, config.capture, forward)

    def initialize(self) -> None:
        """Create the output directories once."""
        if not self._initialized:
            self._initialized = self.layout.initialize()

    def enabled_kinds(self) -> list[ArtifactKind]:
        flags = {
            ArtifactKind.SCREENSHOT: self.capture.screenshots,
            ArtifactKind.HTML_SOURCE: self.capture.html_sources,
            ArtifactKind.DEBUG_LOG: self.capture.debug_logs,
            ArtifactKind.CONSOLE_LOG: self.capture.console_logs,
        }
        return [kind for kind in ArtifactKind if flags[kind]]

    def on_failure(self, event: FailureEvent, forward: Forward | None = None) -> list[CaptureResult]:
        """Capture artifacts for the event, then forward it unchanged."""
        try:
            event.results = self.collect(event.context, event.sessions)
        except Exception:
            console.print(f"[red]Capturing artifacts for {escape(event.context.prefix)} failed[/]")
            console.print_exception()

        forward = forward or self.forward
        if forward is not None:
            forward(event)
        return event.results

    def collect(self, context: FailureContext, sessions: ConferenceSessions) -> list[CaptureResult]:
        """Run every enabled capture, all kinds for one role order at a time."""
        self.initialize()

        results = []
        for kind in self.enabled_kinds():
            for role, session in sessions.active():
                path = self.layout.path_for(kind, artifact_file_name(context.prefix, kind, role))
                try:
                    result = CAPTURERS[kind](session, path, role)
                except Exception as e:
                    console.print(f"[red]Could not capture {escape(path.name)}[/]")
                    console.print_exception()
                    result = CaptureResult.failed(kind, role, path, e)
                else:
                    if result.outcome is CaptureOutcome.FAILED and kind is not ArtifactKind.HTML_SOURCE:
                        console.print(f"[dim]No {escape(path.name)}: {escape(result.error or '')}[/]")
                results.append(result)
        return results
