"""Celery worker and beat schedule for reminder sweeps."""
