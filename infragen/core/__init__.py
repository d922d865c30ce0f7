"""Core infrastructure: settings and logging setup."""
