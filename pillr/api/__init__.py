"""HTTP API for Pillr."""
