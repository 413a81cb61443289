"""Runtime services: telemetry, status messages and the key loop."""
