"""Included Taskfiles."""

from __future__ import annotations

import os
from dataclasses import dataclass

from yaml.nodes import MappingNode, Node, ScalarNode

from .location import (
    YamlError,
    _bool,
    _fields,
    _is_null,
    _line,
    _str,
    _str_list,
    short_tag,
)
from .variables import Vars, parse_vars


def smart_join(base: str, path: str) -> str:
    """Join ``path`` onto ``base`` unless ``path`` is already absolute."""
    if os.path.isabs(path):
        return path
    parts = [part for part in (base, path) if part]
    if not parts:
        return ""
    return os.path.normpath(os.path.join(*parts))


def _expand(path: str) -> str:
    return os.path.expanduser(os.path.expandvars(path))


@dataclass
class Include:
    """Information about an included Taskfile."""

    namespace: str = ""
    taskfile: str = ""
    dir: str = ""
    optional: bool = False
    internal: bool = False
    aliases: list[str] | None = None
    advanced_import: bool = False
    vars: Vars | None = None
    base_dir: str = ""

    def deep_copy(self) -> Include:
        return Include(
            namespace=self.namespace,
            taskfile=self.taskfile,
            dir=self.dir,
            optional=self.optional,
            internal=self.internal,
            advanced_import=self.advanced_import,
            vars=None if self.vars is None else self.vars.deep_copy(),
            base_dir=self.base_dir,
        )

    def full_taskfile_path(self) -> str:
        """Return the fully qualified path of the included Taskfile."""
        return self._resolve_path(self.taskfile)

    def full_dir_path(self) -> str:
        """Return the fully qualified working directory of the included Taskfile."""
        return self._resolve_path(self.dir)

    def _resolve_path(self, path: str) -> str:
        if "://" in self.taskfile:
            return path
        path = _expand(path)
        if os.path.isabs(path):
            return path
        return os.path.abspath(smart_join(self.base_dir, path))


class Includes(dict[str, Include]):
    """An insertion-ordered mapping of namespaces to included Taskfiles."""


def parse_include(node: Node) -> Include:
    """Decode an include from a path or a mapping of options."""
    if isinstance(node, ScalarNode):
        return Include(taskfile=_str(node))
    if isinstance(node, MappingNode):
        fields = _fields(node)
        return Include(
            taskfile=_str(fields.get("taskfile")),
            dir=_str(fields.get("dir")),
            optional=_bool(fields.get("optional")),
            internal=_bool(fields.get("internal")),
            aliases=_str_list(fields.get("aliases")),
            advanced_import=True,
            vars=parse_vars(fields.get("vars")),
        )
    raise YamlError(
        f"yaml: line {_line(node)}: cannot unmarshal {short_tag(node)} into included taskfile"
    )


def parse_includes(node: Node | None) -> Includes | None:
    """Decode the ``includes`` section; null gives None."""
    if _is_null(node):
        return None
    if not isinstance(node, MappingNode):
        raise YamlError(
            f"yaml: line {_line(node)}: cannot unmarshal {short_tag(node)} "
            "into included taskfiles"
        )
    includes = Includes()
    for namespace, value in _fields(node).items():
        include = parse_include(value)
        include.namespace = namespace
        includes[namespace] = include
    return includes