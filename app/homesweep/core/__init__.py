"""Core infrastructure: paths, settings, theme and run diagnostics."""
