"""Output directories for failure artifacts."""

from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from ..config import Config, LayoutConfig
from ..models import ArtifactKind

console = Console(stderr=True)


@dataclass
class ArtifactLayout:
    """Screenshot, HTML source and log directories under a reports root."""

    root: Path
    screenshots_dir: Path
    html_sources_dir: Path
    logs_dir: Path

    @classmethod
    def for_root(cls, reports_root: Path | str, layout: LayoutConfig | None = None) -> "ArtifactLayout":
        layout = layout or LayoutConfig()
        root = Path(reports_root)
        return cls(
            root=root,
            screenshots_dir=root / layout.screenshots_dir,
            html_sources_dir=root / layout.html_sources_dir,
            logs_dir=root / layout.logs_dir,
        )

    @property
    def directories(self) -> list[Path]:
        return [self.screenshots_dir, self.html_sources_dir, self.logs_dir]

    def directory_for(self, kind: ArtifactKind) -> Path:
        if kind is ArtifactKind.SCREENSHOT:
            return self.screenshots_dir
        if kind is ArtifactKind.HTML_SOURCE:
            return self.html_sources_dir
        return self.logs_dir

    def path_for(self, kind: ArtifactKind, file_name: str) -> Path:
        return self.directory_for(kind) / file_name

    def initialize(self) -> bool:
        """
        Create the directories, parents included. Safe to call repeatedly.

        Returns:
            True if every directory exists afterwards
        """
        ok = True
        for directory in self.directories:
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                console.print(f"[red]Cannot create {escape(str(directory))}: {escape(str(e))}[/]")
                ok = False
        return ok


def initialize_layout(reports_root: Path | str | None = None, config: Config | None = None) -> ArtifactLayout:
    """Build the layout for reports_root (or the configured one) and create it."""
    config = config or Config()
    layout = ArtifactLayout.for_root(reports_root or config.reports_dir, config.layout)
    layout.initialize()
    return layout
