"""HTTP API over the report summary engine."""
