"""Sources a Taskfile can be read from: files, HTTP locations and standard input."""

from __future__ import annotations

import os
import stat
import sys
import urllib.error
import urllib.parse
import urllib.request
from abc import ABC, abstractmethod
from typing import TextIO

from .ast.include import smart_join
from .discovery import exists, exists_walk

STDIN_LOCATION = "__stdin__"


class TaskfileNotSecureError(Exception):
    """A remote Taskfile was requested over plain HTTP without allowing it."""

    def __init__(self, uri: str) -> None:
        super().__init__(
            f'task: Taskfile "{uri}" cannot be downloaded over an insecure connection. '
            "You can override this by using the --insecure flag"
        )
        self.uri = uri


class TaskfileFetchFailedError(Exception):
    """A remote Taskfile could not be downloaded."""

    def __init__(self, uri: str, http_status_code: int = 0) -> None:
        message = f'task: Download of "{uri}" failed'
        if http_status_code:
            message += f" with status code {http_status_code}"
        super().__init__(message)
        self.uri = uri
        self.http_status_code = http_status_code


class RemoteTaskfilesDisabledError(Exception):
    """A remote Taskfile was requested while remote Taskfiles are disabled."""

    def __init__(self) -> None:
        super().__init__("task: Remote taskfiles are not enabled")


class Node(ABC):
    """A place a Taskfile is read from, linked to the node that included it."""

    def __init__(self, parent: Node | None = None, optional: bool = False) -> None:
        self.parent = parent
        self.optional = optional

    @property
    @abstractmethod
    def location(self) -> str:
        """A string identifying where the Taskfile lives."""

    @property
    @abstractmethod
    def remote(self) -> bool:
        """Whether the Taskfile is fetched over the network."""

    @property
    @abstractmethod
    def base_dir(self) -> str:
        """The directory relative paths in the Taskfile resolve against."""

    @abstractmethod
    def read(self, timeout: float | None = None) -> bytes:
        """Return the raw contents of the Taskfile."""


class FileNode(Node):
    """A Taskfile on the local filesystem."""

    def __init__(self, uri: str, parent: Node | None = None, optional: bool = False) -> None:
        super().__init__(parent, optional)
        path = exists(uri or os.getcwd())
        self.dir = os.path.dirname(path)
        self.entrypoint = os.path.basename(path)

    @property
    def location(self) -> str:
        return smart_join(self.dir, self.entrypoint)

    @property
    def remote(self) -> bool:
        return False

    @property
    def base_dir(self) -> str:
        return self.dir

    def read(self, timeout: float | None = None) -> bytes:
        with open(self.location, "rb") as handle:
            return handle.read()


class HTTPNode(Node):
    """A Taskfile downloaded over HTTP or HTTPS."""

    def __init__(
        self,
        uri: str,
        insecure: bool = False,
        parent: Node | None = None,
        optional: bool = False,
    ) -> None:
        super().__init__(parent, optional)
        parts = urllib.parse.urlsplit(uri)
        if parts.scheme == "http" and not insecure:
            raise TaskfileNotSecureError(uri)
        self.url = urllib.parse.urlunsplit(parts)

    @property
    def location(self) -> str:
        return self.url

    @property
    def remote(self) -> bool:
        return True

    @property
    def base_dir(self) -> str:
        return ""

    def read(self, timeout: float | None = None) -> bytes:
        request = urllib.request.Request(self.url, method="GET")
        try:
            with urllib.request.urlopen(request, timeout=timeout) as response:
                if response.status != 200:
                    raise TaskfileFetchFailedError(self.url, response.status)
                return response.read()
        except urllib.error.HTTPError as exc:
            raise TaskfileFetchFailedError(self.url, exc.code) from exc
        except urllib.error.URLError as exc:
            if isinstance(exc.reason, TimeoutError):
                raise TimeoutError(f"task: timed out fetching {self.url}") from exc
            raise TaskfileFetchFailedError(self.url) from exc
        except TimeoutError:
            raise
        except OSError as exc:
            raise TaskfileFetchFailedError(self.url) from exc


class StdinNode(Node):
    """A Taskfile piped through standard input."""

    def __init__(self, dir: str, stream: TextIO | None = None) -> None:
        super().__init__()
        self.dir = dir
        self._stream = stream

    @property
    def location(self) -> str:
        return STDIN_LOCATION

    @property
    def remote(self) -> bool:
        return False

    @property
    def base_dir(self) -> str:
        return self.dir

    def read(self, timeout: float | None = None) -> bytes:
        stream = self._stream if self._stream is not None else sys.stdin
        lines = []
        for line in stream:
            line = line.removesuffix("\n").removesuffix("\r")
            lines.append(line + "\n")
        return "".join(lines).encode("utf-8")


def _scheme(uri: str) -> str:
    index = uri.find("://")
    return uri[:index] if index != -1 else ""


def _default_dir(entrypoint: str, dir: str) -> str:
    if not dir:
        if not entrypoint:
            try:
                return os.getcwd()
            except OSError:
                return ""
        return dir
    return os.path.abspath(dir)


def _stdin_has_data() -> bool:
    try:
        info = os.fstat(sys.stdin.fileno())
    except (OSError, ValueError, AttributeError):
        return False
    return not stat.S_ISCHR(info.st_mode) and info.st_size > 0


def new_node(
    uri: str,
    insecure: bool = False,
    parent: Node | None = None,
    optional: bool = False,
    remote_enabled: bool = False,
) -> Node:
    """Create the node for ``uri``: an HTTP node for web URLs, a file node otherwise."""
    node: Node
    if _scheme(uri) in ("http", "https"):
        node = HTTPNode(uri, insecure, parent=parent, optional=optional)
    else:
        node = FileNode(uri, parent=parent, optional=optional)
    if node.remote and not remote_enabled:
        raise RemoteTaskfilesDisabledError()
    return node


def new_root_node(dir: str, entrypoint: str, insecure: bool) -> Node:
    """Create the node the main Taskfile is read from."""
    dir = _default_dir(entrypoint, dir)
    if _stdin_has_data():
        return StdinNode(dir)
    if not entrypoint:
        return new_node(exists_walk(dir), insecure)
    return new_node(os.path.join(dir, entrypoint), insecure)