"""Variables and task calls."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from yaml.nodes import MappingNode, Node, ScalarNode

from .location import YamlError, _bool, _fields, _is_null, _line, _str, short_tag


@dataclass
class Var:
    """A static or dynamic variable."""

    value: Any = None
    live: Any = None
    sh: str = ""
    ref: str = ""
    json: str = ""
    yaml: str = ""
    dir: str = ""
    overwrite: bool = False


class Vars(dict[str, Var]):
    """An insertion-ordered mapping of variable names to variables."""

    def to_cache_map(self) -> dict[str, Any]:
        """Return the resolved values of all non-dynamic variables."""
        return {
            name: var.live if var.live is not None else var.value
            for name, var in self.items()
            if not var.sh
        }

    def merge(self, other: Vars | None) -> None:
        """Set every variable of ``other`` on this mapping, keeping existing positions."""
        if other is not None:
            self.update(other)

    def deep_copy(self) -> Vars:
        return Vars((name, replace(var)) for name, var in self.items())


@dataclass
class Call:
    """The parameters of a task call."""

    task: str
    vars: Vars | None = None
    silent: bool = False
    indirect: bool = False


def parse_var(node: Node) -> Var:
    """Decode a variable from a scalar or an ``{value, sh, overwrite}`` mapping."""
    if isinstance(node, ScalarNode):
        return Var(value=_str(node))
    if isinstance(node, MappingNode):
        fields = _fields(node)
        return Var(
            value=_str(fields.get("value")),
            sh=_str(fields.get("sh")),
            overwrite=_bool(fields.get("overwrite")),
        )
    raise YamlError(f"yaml: line {_line(node)}: cannot unmarshal {short_tag(node)} into variable")


def parse_vars(node: Node | None) -> Vars | None:
    """Decode an ordered mapping of variables; null gives None."""
    if _is_null(node):
        return None
    if not isinstance(node, MappingNode):
        raise YamlError(
            f"yaml: line {_line(node)}: cannot unmarshal {short_tag(node)} into variables"
        )
    return Vars((name, parse_var(value)) for name, value in _fields(node).items())