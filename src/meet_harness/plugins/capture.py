"""Pytest plugin to capture conference diagnostics on test failure.

Enable with ``-p meet_harness.plugins.capture`` or by listing it in
``pytest_plugins``.
"""

from pathlib import Path

import pytest

from ..capture.collector import FailureArtifactCollector
from ..config import Config, load_config
from ..models import FailureContext, FailureEvent
from ..session import ConferenceSessions

collector_key = pytest.StashKey[FailureArtifactCollector]()
config_key = pytest.StashKey[Config]()


def pytest_addoption(parser):
    group = parser.getgroup("meet-harness", "conference failure diagnostics")
    group.addoption(
        "--test-reports-dir",
        dest="test_reports_dir",
        default=None,
        help="Directory for screenshots, HTML sources and logs of failed tests",
    )
    group.addoption(
        "--meet-harness-config",
        dest="meet_harness_config",
        default=None,
        help="Path to a meet_harness YAML config file",
    )
    parser.addini("test_reports_dir", "Directory for failure artifacts", default=None)


def pytest_configure(config):
    config_path = config.getoption("meet_harness_config")
    harness_config = load_config(Path(config_path) if config_path else None)

    reports_dir = config.getoption("test_reports_dir") or config.getini("test_reports_dir")
    if reports_dir:
        harness_config.reports_dir = Path(reports_dir)

    collector = FailureArtifactCollector.from_config(harness_config)
    collector.initialize()

    config.stash[config_key] = harness_config
    config.stash[collector_key] = collector


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Capture artifacts when setup or the test call fails."""
    outcome = yield
    report = outcome.get_result()

    # Teardown errors are left out: session fixtures are finalized by then
    # and their browsers may already be closed.
    if report.when not in ("setup", "call") or not report.failed or hasattr(report, "wasxfail"):
        return

    collector = item.config.stash.get(collector_key, None)
    if collector is None:
        return

    sessions = find_sessions(item, item.config.stash[config_key])
    if not sessions:
        return

    event = FailureEvent(
        context=FailureContext.from_item(item),
        sessions=sessions,
        error=call.excinfo.value if call.excinfo is not None else report.longreprtext,
    )
    collector.on_failure(event, forward=lambda e: _record_artifacts(e, item))


def find_sessions(item, harness_config: Config) -> ConferenceSessions:
    """Find the browser sessions used by a test."""
    names = harness_config.fixtures
    funcargs = getattr(item, "funcargs", {})

    # A conference fixture holding all participants
    conference = funcargs.get(names.conference)
    if conference is not None:
        return ConferenceSessions.of(
            owner=getattr(conference, "owner", None),
            second_participant=getattr(conference, "second_participant", None),
            third_participant=getattr(conference, "third_participant", None),
        )

    # Individual fixtures, then attributes of the test instance
    slots = {
        "owner": names.owner,
        "second_participant": names.second_participant,
        "third_participant": names.third_participant,
    }
    found = {}
    instance = getattr(item, "instance", None)
    for slot, name in slots.items():
        value = funcargs.get(name)
        if value is None and instance is not None:
            value = getattr(instance, name, None)
        found[slot] = value
    return ConferenceSessions.of(**found)


def _record_artifacts(event: FailureEvent, item) -> None:
    """Attach saved artifact paths to the item so junitxml lists them."""
    for path in event.artifact_paths:
        item.user_properties.append(("artifact", str(path)))
