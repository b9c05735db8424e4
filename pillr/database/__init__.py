"""Database models, sessions and operations."""
