"""Locating Taskfiles on disk."""

from __future__ import annotations

import os
import stat

from .ast.include import smart_join

DEFAULT_TASKFILES = (
    "Taskfile.yml",
    "taskfile.yml",
    "Taskfile.yaml",
    "taskfile.yaml",
    "Taskfile.dist.yml",
    "taskfile.dist.yml",
    "Taskfile.dist.yaml",
    "taskfile.dist.yaml",
)


class TaskfileNotFoundError(Exception):
    """No Taskfile was found at a location."""

    def __init__(self, uri: str, walk: bool = False) -> None:
        message = f'task: No Taskfile found at "{uri}"'
        if walk:
            message += " (or any of the parent directories)"
        super().__init__(message)
        self.uri = uri
        self.walk = walk


def _is_file_like(mode: int) -> bool:
    return (
        stat.S_ISREG(mode)
        or stat.S_ISCHR(mode)
        or stat.S_ISBLK(mode)
        or stat.S_ISLNK(mode)
        or stat.S_ISFIFO(mode)
    )


def exists(path: str) -> str:
    """Return the absolute path of the Taskfile at ``path``.

    ``path`` may name the file itself or a directory holding a file with one of
    the default Taskfile names, tried in order.
    """
    info = os.stat(path)
    if _is_file_like(info.st_mode):
        return os.path.abspath(path)
    for name in DEFAULT_TASKFILES:
        candidate = smart_join(path, name)
        try:
            os.stat(candidate)
        except OSError:
            continue
        return os.path.abspath(candidate)
    raise TaskfileNotFoundError(path, walk=False)


def _owner(path: str) -> int:
    return os.stat(path).st_uid


def _parent(path: str) -> str:
    return os.path.dirname(path) or "."


def exists_walk(path: str) -> str:
    """Search ``path`` and then its parents for a Taskfile.

    The search stops at the root directory or where the owner of the directory
    changes.
    """
    original = path
    owner = _owner(path)
    while True:
        try:
            return exists(path)
        except (OSError, TaskfileNotFoundError):
            pass
        parent = _parent(path)
        parent_owner = _owner(parent)
        if path == parent or parent_owner != owner:
            raise TaskfileNotFoundError(original, walk=False)
        owner = parent_owner
        path = parent