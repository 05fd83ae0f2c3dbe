"""Shared fixtures: fake browser sessions and drivers."""

import pytest

from meet_harness.capture.layout import ArtifactLayout
from meet_harness.exceptions import ConsoleLogUnavailableError
from meet_harness.session import BrowserSession

pytest_plugins = ["pytester"]


class FakeSession(BrowserSession):
    """In-memory browser session."""

    def __init__(self, name="owner", debug_log='{"log": []}', console=None, html=None):
        self.name = name
        self.debug_log = debug_log
        self.console = console if console is not None else [f"[INFO] {name} joined"]
        self.html = html if html is not None else f"<html><body>{name} – ünïcode</body></html>"
        self.scripts = []
        self.fail = set()

    def _check(self, what):
        if what in self.fail:
            raise RuntimeError(f"{what} failed for {self.name}")

    def evaluate(self, script):
        self._check("evaluate")
        self.scripts.append(script)
        return self.debug_log

    def screenshot_png(self):
        self._check("screenshot")
        return b"\x89PNG" + self.name.encode()

    def page_source(self):
        self._check("html")
        return self.html

    def console_entries(self):
        self._check("console")
        if self.console is False:
            raise ConsoleLogUnavailableError("no logs")
        return list(self.console)


@pytest.fixture
def layout(tmp_path):
    layout = ArtifactLayout.for_root(tmp_path / "reports")
    layout.initialize()
    return layout


@pytest.fixture
def owner():
    return FakeSession("owner")


@pytest.fixture
def participant():
    return FakeSession("participant")


@pytest.fixture
def third():
    return FakeSession("third")
