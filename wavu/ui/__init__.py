"""User-facing output — progress display."""
