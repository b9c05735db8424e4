"""Error tracking and observability."""
