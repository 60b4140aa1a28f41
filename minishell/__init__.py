"""A small interactive Unix shell with history, pipelines, background jobs and I/O helpers."""

__version__ = "0.1.0"
__all__ = ["history", "parsing", "rio", "shell", "sockets"]