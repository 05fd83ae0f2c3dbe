"""Configuration management for Meet Harness."""

from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file at import time
load_dotenv()

CONFIG_FILE_NAMES = ["meet_harness.yaml", "meet_harness.yml", ".meet_harness.yaml"]


class CaptureConfig(BaseModel):
    """Which artifacts to capture on failure."""

    screenshots: bool = True
    html_sources: bool = True
    debug_logs: bool = True
    console_logs: bool = True


class LayoutConfig(BaseModel):
    """Subdirectories of the reports directory."""

    screenshots_dir: str = "screenshots"
    html_sources_dir: str = "html-sources"
    logs_dir: str = "logs"


class FixturesConfig(BaseModel):
    """Fixture (or test attribute) names holding the browser sessions."""

    conference: str = "conference"
    owner: str = "owner"
    second_participant: str = "second_participant"
    third_participant: str = "third_participant"


class Config(BaseSettings):
    """Main configuration for Meet Harness."""

    model_config = SettingsConfigDict(
        env_prefix="MEET_HARNESS_",
        env_nested_delimiter="__",
    )

    reports_dir: Path = Path("test-reports")

    capture: CaptureConfig = Field(default_factory=CaptureConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    fixtures: FixturesConfig = Field(default_factory=FixturesConfig)


def load_config(config_path: Path | None = None) -> Config:
    """Load configuration from YAML file and environment variables."""
    config_data: dict = {}

    # Try to find config file
    if config_path is None:
        for name in CONFIG_FILE_NAMES:
            if Path(name).exists():
                config_path = Path(name)
                break

    if config_path and config_path.exists():
        with open(config_path) as f:
            raw = yaml.safe_load(f)
            if raw and "meet_harness" in raw:
                config_data = raw["meet_harness"]
            elif raw:
                config_data = raw

    # Values from the YAML file win over environment variables
    return Config(**config_data)
