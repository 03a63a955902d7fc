"""Output style settings."""

from __future__ import annotations

from dataclasses import dataclass, field

from yaml.nodes import MappingNode, Node, ScalarNode

from .location import YamlError, _bool, _fields, _is_null, _line, _str, short_tag


@dataclass
class OutputGroup:
    """Options for the ``group`` output style."""

    begin: str = ""
    end: str = ""
    error_only: bool = False

    def is_set(self) -> bool:
        """Whether a custom begin or end marker is set."""
        return bool(self.begin or self.end)


@dataclass
class Output:
    """The output style of a Taskfile."""

    name: str = ""
    group: OutputGroup = field(default_factory=OutputGroup)

    def is_set(self) -> bool:
        """Whether a custom output style is set."""
        return bool(self.name)


def _parse_output_group(node: Node) -> OutputGroup:
    fields = _fields(node)
    return OutputGroup(
        begin=_str(fields.get("begin")),
        end=_str(fields.get("end")),
        error_only=_bool(fields.get("error_only")),
    )


def parse_output(node: Node) -> Output:
    """Decode an output style from a name or a ``{group: {...}}`` mapping."""
    if isinstance(node, ScalarNode):
        return Output(name=_str(node))
    if isinstance(node, MappingNode):
        try:
            group_node = _fields(node).get("group")
            group = None if _is_null(group_node) else _parse_output_group(group_node)
        except YamlError as exc:
            raise YamlError(
                f'task: output style must be a string or mapping with a "group" key: {exc}'
            ) from exc
        if group is None:
            raise YamlError('task: output style must have the "group" key when in mapping form')
        return Output(name="group", group=group)
    raise YamlError(f"yaml: line {_line(node)}: cannot unmarshal {short_tag(node)} into output")