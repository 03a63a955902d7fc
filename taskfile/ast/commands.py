"""Commands, dependencies, loops, globs, preconditions and requirements."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from yaml.nodes import MappingNode, Node, ScalarNode, SequenceNode

from .location import (
    YamlError,
    _bool,
    _fields,
    _is_null,
    _line,
    _optional,
    _seq,
    _str,
    _str_list,
    short_tag,
    to_python,
)
from .platforms import Platform, platform_from_node
from .variables import Vars, parse_vars


@dataclass
class Glob:
    """A source or generated-file glob, possibly an exclusion."""

    glob: str = ""
    negate: bool = False


@dataclass
class Precondition:
    """A shell check that must pass before a task runs."""

    sh: str = ""
    msg: str = ""

    def deep_copy(self) -> Precondition:
        return Precondition(sh=self.sh, msg=self.msg)


@dataclass
class Requires:
    """Variables a task requires to be set."""

    vars: list[str] = field(default_factory=list)

    def deep_copy(self) -> Requires:
        return Requires(vars=list(self.vars))


@dataclass
class For:
    """A loop over a list, the task sources, or a variable."""

    from_: str = ""
    items: list[Any] | None = None
    var: str = ""
    split: str = ""
    as_: str = ""

    def deep_copy(self) -> For:
        return For(
            from_=self.from_,
            items=None if self.items is None else list(self.items),
            var=self.var,
            split=self.split,
            as_=self.as_,
        )


@dataclass
class Dep:
    """A task dependency."""

    task: str = ""
    vars: Vars | None = None
    silent: bool = False

    def deep_copy(self) -> Dep:
        return Dep(
            task=self.task,
            vars=None if self.vars is None else self.vars.deep_copy(),
            silent=self.silent,
        )


@dataclass
class Cmd:
    """A task command: a shell command or a call of another task."""

    cmd: str = ""
    task: str = ""
    for_: For | None = None
    silent: bool = False
    set: list[str] | None = None
    shopt: list[str] | None = None
    vars: Vars | None = None
    ignore_error: bool = False
    defer: bool = False
    platforms: list[Platform | None] | None = None

    def deep_copy(self) -> Cmd:
        return Cmd(
            cmd=self.cmd,
            task=self.task,
            for_=None if self.for_ is None else self.for_.deep_copy(),
            silent=self.silent,
            set=None if self.set is None else list(self.set),
            shopt=None if self.shopt is None else list(self.shopt),
            vars=None if self.vars is None else self.vars.deep_copy(),
            ignore_error=self.ignore_error,
            defer=self.defer,
            platforms=None
            if self.platforms is None
            else [p.deep_copy() if p is not None else None for p in self.platforms],
        )


def parse_glob(node: Node) -> Glob:
    """Decode a glob from a pattern or an ``{exclude: pattern}`` mapping."""
    if isinstance(node, ScalarNode):
        return Glob(glob=node.value)
    if isinstance(node, MappingNode):
        return Glob(glob=_str(_fields(node).get("exclude")), negate=True)
    raise YamlError(f"yaml: line {_line(node)}: cannot unmarshal {short_tag(node)} into task")


def parse_precondition(node: Node) -> Precondition:
    """Decode a precondition from a command or an ``{sh, msg}`` mapping."""
    if isinstance(node, ScalarNode):
        command = _str(node)
        return Precondition(sh=command, msg=f"`{command}` failed")
    if isinstance(node, MappingNode):
        fields = _fields(node)
        sh = _str(fields.get("sh"))
        msg = _str(fields.get("msg")) or f"{sh} failed"
        return Precondition(sh=sh, msg=msg)
    raise YamlError(
        f"yaml: line {_line(node)}: cannot unmarshal {short_tag(node)} into precondition"
    )


def parse_requires(node: Node) -> Requires:
    """Decode a ``{vars: [...]}`` requirement block."""
    return Requires(vars=_str_list(_fields(node).get("vars")) or [])


def parse_for(node: Node) -> For:
    """Decode a loop from a source name, an explicit list or a variable mapping."""
    if isinstance(node, ScalarNode):
        return For(from_=_str(node))
    if isinstance(node, SequenceNode):
        return For(items=list(to_python(node)))
    if isinstance(node, MappingNode):
        try:
            fields = _fields(node)
            loop = For(
                var=_str(fields.get("var")),
                split=_str(fields.get("split")),
                as_=_str(fields.get("as")),
            )
        except YamlError:
            loop = None
        if loop is not None and loop.var:
            return loop
        raise YamlError(f"yaml: line {_line(node)}: invalid keys in for")
    raise YamlError(f"yaml: line {_line(node)}: cannot unmarshal {short_tag(node)} into for")


def parse_dep(node: Node) -> Dep:
    """Decode a dependency from a task name or a ``{task, vars, silent}`` mapping."""
    if isinstance(node, ScalarNode):
        return Dep(task=_str(node))
    if isinstance(node, MappingNode):
        fields = _fields(node)
        return Dep(
            task=_str(fields.get("task")),
            vars=parse_vars(fields.get("vars")),
            silent=_bool(fields.get("silent")),
        )
    raise YamlError(f"cannot unmarshal {short_tag(node)} into dependency")


def _as_command(fields: dict[str, Node]) -> Cmd | None:
    cmd = Cmd(
        cmd=_str(fields.get("cmd")),
        for_=_optional(fields.get("for"), parse_for),
        silent=_bool(fields.get("silent")),
        set=_str_list(fields.get("set")),
        shopt=_str_list(fields.get("shopt")),
        ignore_error=_bool(fields.get("ignore_error")),
        platforms=_seq(fields.get("platforms"), platform_from_node),
    )
    return cmd if cmd.cmd else None


def _as_deferred_command(fields: dict[str, Node]) -> Cmd | None:
    command = _str(fields.get("defer"))
    return Cmd(cmd=command, defer=True) if command else None


def _as_deferred_call(fields: dict[str, Node]) -> Cmd | None:
    node = fields.get("defer")
    if _is_null(node):
        return None
    call = _fields(node)
    task = _str(call.get("task"))
    vars_ = parse_vars(call.get("vars"))
    _bool(call.get("silent"))
    _bool(call.get("indirect"))
    return Cmd(task=task, vars=vars_, defer=True) if task else None


def _as_task_call(fields: dict[str, Node]) -> Cmd | None:
    cmd = Cmd(
        task=_str(fields.get("task")),
        vars=parse_vars(fields.get("vars")),
        for_=_optional(fields.get("for"), parse_for),
        silent=_bool(fields.get("silent")),
    )
    return cmd if cmd.task else None


_COMMAND_FORMS: tuple[Callable[[dict[str, Node]], Cmd | None], ...] = (
    _as_command,
    _as_deferred_command,
    _as_deferred_call,
    _as_task_call,
)


def parse_cmd(node: Node) -> Cmd:
    """Decode a command in any of its accepted forms."""
    if isinstance(node, ScalarNode):
        return Cmd(cmd=_str(node))
    if isinstance(node, MappingNode):
        fields = _fields(node)
        for form in _COMMAND_FORMS:
            try:
                cmd = form(fields)
            except ValueError:
                continue
            if cmd is not None:
                return cmd
        raise YamlError(f"yaml: line {_line(node)}: invalid keys in command")
    raise YamlError(f"yaml: line {_line(node)}: cannot unmarshal {short_tag(node)} into command")