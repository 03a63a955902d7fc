"""A local cache of downloaded Taskfiles and their checksums."""

from __future__ import annotations

import hashlib
import os

from .nodes import Node


def checksum(data: bytes) -> str:
    """Return the hexadecimal SHA-256 digest of ``data``."""
    return hashlib.sha256(data).hexdigest()


class Cache:
    """Stores copies of remote Taskfiles under ``<dir>/remote``."""

    def __init__(self, dir: str) -> None:
        self.dir = os.path.join(dir, "remote")
        os.makedirs(self.dir, mode=0o755, exist_ok=True)

    def _key(self, node: Node) -> str:
        return checksum(node.location.encode("utf-8")).rstrip("=")

    def _cache_file_path(self, node: Node) -> str:
        return os.path.join(self.dir, f"{self._key(node)}.yaml")

    def _checksum_file_path(self, node: Node) -> str:
        return os.path.join(self.dir, f"{self._key(node)}.checksum")

    def write(self, node: Node, data: bytes) -> None:
        """Store a copy of the node's Taskfile."""
        with open(self._cache_file_path(node), "wb") as handle:
            handle.write(data)

    def read(self, node: Node) -> bytes:
        """Return the cached copy; raises FileNotFoundError if there is none."""
        with open(self._cache_file_path(node), "rb") as handle:
            return handle.read()

    def write_checksum(self, node: Node, checksum: str) -> None:
        """Store the trusted checksum of the node's Taskfile."""
        with open(self._checksum_file_path(node), "w", encoding="utf-8") as handle:
            handle.write(checksum)

    def read_checksum(self, node: Node) -> str:
        """Return the stored checksum, or an empty string if there is none."""
        try:
            with open(self._checksum_file_path(node), encoding="utf-8") as handle:
                return handle.read()
        except OSError:
            return ""