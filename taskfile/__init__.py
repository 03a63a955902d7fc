"""Parsing, discovery, reading and caching of Taskfile task definitions."""

__version__ = "0.1.0"