"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from catalog.shared.telemetry.logging import setup_logging
from catalog.shared.telemetry.telemetry import TelemetryConfig, build_span_exporter
from catalog.shared.telemetry.tracing import (
    add_span_attributes,
    traced,
)

__all__ = [
    "setup_logging",
    "TelemetryConfig",
    "build_span_exporter",
    "traced",
    "add_span_attributes",
]
