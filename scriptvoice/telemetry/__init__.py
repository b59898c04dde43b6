"""Telemetry and observability helpers.

This package emits deterministic task lifecycle events for auditing runs.
"""

from .logger import RunLogger

__all__ = ["RunLogger"]
