"""Per-session artifact capture: screenshot, HTML source, debug log, console log."""

from pathlib import Path

from rich.console import Console

from ..exceptions import ScreenshotCaptureError
from ..models import ArtifactKind, CaptureResult, Role
from ..session import BrowserSession

console = Console(stderr=True)


# Collects the Jingle log kept by the app, with metadata and the XMPP log
# when available. Returns nothing if the app API is missing.
DEBUG_LOG_SCRIPT = """try{
    var data = APP.xmpp.getJingleLog();
    var metadata = {};
    metadata.time = new Date();
    metadata.url = window.location.href;
    metadata.ua = navigator.userAgent;
    var log = APP.xmpp.getXmppLog();
    if (log) {
        metadata.xmpp = log;
    }
    data.metadata = metadata;
    return JSON.stringify(data, null, '  ');
}catch (e) {}"""


def capture_screenshot(session: BrowserSession, path: Path, role: Role = Role.OWNER) -> CaptureResult:
    """
    Save a screenshot of the session's page.

    Raises:
        ScreenshotCaptureError: if the image cannot be written
    """
    image = session.screenshot_png()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(image)
    except OSError as e:
        raise ScreenshotCaptureError(path, e) from e
    return CaptureResult.captured(ArtifactKind.SCREENSHOT, role, path)


def capture_html_source(session: BrowserSession, path: Path, role: Role = Role.OWNER) -> CaptureResult:
    """Save the page markup at the moment of failure."""
    try:
        path.write_bytes(session.page_source().encode("utf-8"))
    except Exception as e:
        console.print_exception()
        return CaptureResult.failed(ArtifactKind.HTML_SOURCE, role, path, e)
    return CaptureResult.captured(ArtifactKind.HTML_SOURCE, role, path)


def capture_debug_log(session: BrowserSession, path: Path, role: Role = Role.OWNER) -> CaptureResult:
    """Save the application debug log, skipping sessions that have none."""
    try:
        log = session.evaluate(DEBUG_LOG_SCRIPT)
        if log is None:
            return CaptureResult.skipped(ArtifactKind.DEBUG_LOG, role, path, "no debug log available")
        path.write_text(str(log), encoding="utf-8")
    except Exception as e:
        return CaptureResult.failed(ArtifactKind.DEBUG_LOG, role, path, e)
    return CaptureResult.captured(ArtifactKind.DEBUG_LOG, role, path)


def capture_console_log(session: BrowserSession, path: Path, role: Role = Role.OWNER) -> CaptureResult:
    """Save browser console entries, one per line with a blank line between."""
    try:
        entries = session.console_entries()
    except Exception as e:
        return CaptureResult.failed(ArtifactKind.CONSOLE_LOG, role, path, e)

    try:
        with open(path, "w", encoding="utf-8") as out:
            for entry in entries:
                out.write(f"{entry}\n\n")
    except Exception as e:
        # No partial logs
        path.unlink(missing_ok=True)
        return CaptureResult.failed(ArtifactKind.CONSOLE_LOG, role, path, e)
    return CaptureResult.captured(ArtifactKind.CONSOLE_LOG, role, path)


CAPTURERS = {
    ArtifactKind.SCREENSHOT: capture_screenshot,
    ArtifactKind.HTML_SOURCE: capture_html_source,
    ArtifactKind.DEBUG_LOG: capture_debug_log,
    ArtifactKind.CONSOLE_LOG: capture_console_log,
}
