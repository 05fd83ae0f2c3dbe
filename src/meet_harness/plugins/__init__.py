"""Pytest plugins shipped with Meet Harness."""
