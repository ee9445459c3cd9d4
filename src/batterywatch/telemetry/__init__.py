"""Battery telemetry models and payload parsing."""

from batterywatch.telemetry.models import TelemetrySample, parse_telemetry

__all__ = ["TelemetrySample", "parse_telemetry"]
