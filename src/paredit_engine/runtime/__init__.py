"""Process-wide services: telemetry and configuration."""
