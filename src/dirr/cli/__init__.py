"""Command-line interface for dirr."""
