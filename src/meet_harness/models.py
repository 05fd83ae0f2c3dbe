"""Core data models for Meet Harness."""

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class Role(Enum):
    """Conference role of a browser session, valued by its file-name suffix."""

    OWNER = "owner"
    SECOND_PARTICIPANT = "participant"
    THIRD_PARTICIPANT = "third"


class ArtifactKind(Enum):
    """Diagnostic artifacts captured on failure, in capture order."""

    SCREENSHOT = "screenshot"
    HTML_SOURCE = "html"
    DEBUG_LOG = "meetlog"
    CONSOLE_LOG = "console"

    @property
    def extension(self) -> str:
        return _EXTENSIONS[self]

    @property
    def infix(self) -> str | None:
        return _INFIXES.get(self)


_EXTENSIONS = {
    ArtifactKind.SCREENSHOT: "png",
    ArtifactKind.HTML_SOURCE: "html",
    ArtifactKind.DEBUG_LOG: "json",
    ArtifactKind.CONSOLE_LOG: "log",
}

_INFIXES = {
    ArtifactKind.DEBUG_LOG: "meetlog",
    ArtifactKind.CONSOLE_LOG: "console",
}

_ARTIFACT_NAME = re.compile(
    r"^(?P<prefix>.+?)-(?:(?P<infix>meetlog|console)-)?"
    r"(?P<role>owner|participant|third)\.(?P<ext>png|html|json|log)$"
)


class CaptureOutcome(Enum):
    """Outcome of a single artifact capture."""

    CAPTURED = "captured"
    SKIPPED = "skipped"
    FAILED = "failed"


def artifact_file_name(prefix: str, kind: ArtifactKind, role: Role) -> str:
    """Build the file name for an artifact, e.g. ``SampleTest.testX-meetlog-owner.json``."""
    if kind.infix:
        return f"{prefix}-{kind.infix}-{role.value}.{kind.extension}"
    return f"{prefix}-{role.value}.{kind.extension}"


def parse_artifact_name(name: str) -> tuple[str, ArtifactKind, Role] | None:
    """
    Split an artifact file name back into prefix, kind and role.

    Returns None for names that were not produced by artifact_file_name.
    """
    match = _ARTIFACT_NAME.match(name)
    if not match:
        return None

    infix = match.group("infix")
    ext = match.group("ext")
    for kind in ArtifactKind:
        if kind.infix == infix and kind.extension == ext:
            return match.group("prefix"), kind, Role(match.group("role"))
    return None


@dataclass
class FailureContext:
    """Identifies a failed test."""

    class_name: str
    test_name: str

    @property
    def prefix(self) -> str:
        return f"{self.class_name}.{self.test_name}"

    @classmethod
    def from_item(cls, item) -> "FailureContext":
        """Derive the context from a pytest item."""
        if getattr(item, "cls", None) is not None:
            class_name = item.cls.__name__
        else:
            module = getattr(item, "module", None)
            module_name = module.__name__ if module is not None else Path(str(item.fspath)).stem
            class_name = module_name.rsplit(".", 1)[-1]

        test_name = item.name.replace("/", "_").replace("\\", "_")
        return cls(class_name=class_name, test_name=test_name)


@dataclass
class CaptureResult:
    """Result of capturing one artifact for one session."""

    kind: ArtifactKind
    role: Role
    path: Path
    outcome: CaptureOutcome
    error: str | None = None

    @classmethod
    def captured(cls, kind: ArtifactKind, role: Role, path: Path) -> "CaptureResult":
        return cls(kind, role, path, CaptureOutcome.CAPTURED)

    @classmethod
    def skipped(cls, kind: ArtifactKind, role: Role, path: Path, reason: str | None = None) -> "CaptureResult":
        return cls(kind, role, path, CaptureOutcome.SKIPPED, reason)

    @classmethod
    def failed(cls, kind: ArtifactKind, role: Role, path: Path, error: BaseException | str) -> "CaptureResult":
        message = error if isinstance(error, str) else f"{type(error).__name__}: {error}"
        return cls(kind, role, path, CaptureOutcome.FAILED, message)

    @property
    def ok(self) -> bool:
        return self.outcome is CaptureOutcome.CAPTURED


@dataclass
class FailureEvent:
    """A failed or errored test as seen by the collector."""

    context: FailureContext
    sessions: Any  # ConferenceSessions
    error: Any = None  # original exception or report text
    results: list[CaptureResult] = field(default_factory=list)

    @property
    def artifact_paths(self) -> list[Path]:
        return [result.path for result in self.results if result.ok]
