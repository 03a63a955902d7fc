"""Rules for which files a watcher leaves alone."""

from __future__ import annotations

_IGNORED_PATHS = ("/.task", "/.git", "/.hg", "/node_modules")


def should_ignore_file(path: str) -> bool:
    """Whether ``path`` lies in, or is, a directory that is never watched."""
    return any(f"{ignored}/" in path or path.endswith(ignored) for ignored in _IGNORED_PATHS)