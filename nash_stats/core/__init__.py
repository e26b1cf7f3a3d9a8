"""Core functionality for nash-stats."""
