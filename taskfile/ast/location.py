"""Source locations and the YAML node helpers shared by the Taskfile syntax tree."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, TypeVar

import yaml
from yaml.nodes import MappingNode, Node, ScalarNode, SequenceNode

_TAG_PREFIX = "tag:yaml.org,2002:"
_NULL_TAG = _TAG_PREFIX + "null"

T = TypeVar("T")


class YamlError(ValueError):
    """A YAML document could not be decoded into a Taskfile structure."""


@dataclass
class Location:
    """Position of a task definition inside a Taskfile."""

    line: int = 0
    column: int = 0
    taskfile: str = ""

    def deep_copy(self) -> Location:
        return replace(self)


def compose(text: str | bytes) -> Node | None:
    """Parse YAML text into a node tree; an empty document gives None."""
    try:
        return yaml.compose(text, Loader=yaml.SafeLoader)
    except yaml.YAMLError as exc:
        raise YamlError(f"yaml: {exc}") from exc


def short_tag(node: Node) -> str:
    """Return the short form of a node's tag, such as ``!!str``."""
    tag = node.tag or ""
    if tag.startswith(_TAG_PREFIX):
        return "!!" + tag[len(_TAG_PREFIX):]
    return tag


def to_python(node: Node | None) -> Any:
    """Convert a node tree into plain Python values."""
    if node is None:
        return None
    try:
        return yaml.constructor.SafeConstructor().construct_document(node)
    except yaml.YAMLError as exc:
        raise YamlError(f"yaml: {exc}") from exc


def _line(node: Node) -> int:
    return node.start_mark.line + 1


def _is_null(node: Node | None) -> bool:
    return node is None or (isinstance(node, ScalarNode) and node.tag == _NULL_TAG)


def _unmarshal_error(node: Node, target: str) -> YamlError:
    return YamlError(f"yaml: line {_line(node)}: cannot unmarshal {short_tag(node)} into {target}")


def _fields(node: Node) -> dict[str, Node]:
    """Map the keys of a mapping node to their value nodes."""
    if not isinstance(node, MappingNode):
        raise _unmarshal_error(node, "mapping")
    fields: dict[str, Node] = {}
    for key, value in node.value:
        name = key.value if isinstance(key, ScalarNode) else str(to_python(key))
        if name in fields:
            raise YamlError(f'yaml: line {_line(key)}: mapping key "{name}" already defined')
        fields[name] = value
    return fields


def _str(node: Node | None) -> str:
    if _is_null(node):
        return ""
    if isinstance(node, ScalarNode):
        return node.value
    raise _unmarshal_error(node, "string")


def _bool(node: Node | None) -> bool:
    if _is_null(node):
        return False
    if isinstance(node, ScalarNode):
        value = to_python(node)
        if isinstance(value, bool):
            return value
        raise YamlError(
            f"yaml: line {_line(node)}: cannot unmarshal {short_tag(node)} `{node.value}` into bool"
        )
    raise _unmarshal_error(node, "bool")


def _str_list(node: Node | None) -> list[str] | None:
    if _is_null(node):
        return None
    if not isinstance(node, SequenceNode):
        raise _unmarshal_error(node, "[]string")
    return [_str(item) for item in node.value]


def _seq(node: Node | None, parse: Callable[[Node], T]) -> list[T | None] | None:
    if _is_null(node):
        return None
    if not isinstance(node, SequenceNode):
        raise _unmarshal_error(node, "sequence")
    return [None if _is_null(item) else parse(item) for item in node.value]


def _optional(node: Node | None, parse: Callable[[Node], T]) -> T | None:
    if _is_null(node):
        return None
    return parse(node)