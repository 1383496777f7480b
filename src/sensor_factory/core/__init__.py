"""Core configuration and calendar helpers."""
