"""Meet Harness - failure diagnostics and conference queries for Jitsi Meet browser tests."""

__version__ = "0.1.0"
