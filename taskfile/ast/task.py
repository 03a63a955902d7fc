"""Task definitions."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any, Callable, TypeVar

from yaml.nodes import MappingNode, Node, ScalarNode, SequenceNode

from .commands import (
    Cmd,
    Dep,
    Glob,
    Precondition,
    Requires,
    parse_cmd,
    parse_dep,
    parse_glob,
    parse_precondition,
    parse_requires,
)
from .location import (
    Location,
    YamlError,
    _bool,
    _fields,
    _line,
    _optional,
    _seq,
    _str,
    _str_list,
    short_tag,
)
from .platforms import Platform, platform_from_node
from .variables import Vars, parse_vars

T = TypeVar("T")


def _copy_items(items: list[T] | None, copy: Callable[[T], T] | None = None) -> list[T] | None:
    if items is None:
        return None
    if copy is None:
        return list(items)
    return [None if item is None else copy(item) for item in items]


def _copy_vars(vars_: Vars | None) -> Vars | None:
    return None if vars_ is None else vars_.deep_copy()


@dataclass
class Task:
    """A single task of a Taskfile."""

    task: str = ""
    cmds: list[Cmd | None] | None = None
    deps: list[Dep | None] | None = None
    label: str = ""
    desc: str = ""
    prompt: str = ""
    summary: str = ""
    requires: Requires | None = None
    aliases: list[str] | None = None
    sources: list[Glob | None] | None = None
    generates: list[Glob | None] | None = None
    status: list[str] | None = None
    preconditions: list[Precondition | None] | None = None
    dir: str = ""
    set: list[str] | None = None
    shopt: list[str] | None = None
    vars: Vars | None = None
    env: Vars | None = None
    dotenv: list[str] | None = None
    silent: bool = False
    interactive: bool = False
    internal: bool = False
    method: str = ""
    prefix: str = ""
    ignore_error: bool = False
    run: str = ""
    include_vars: Vars | None = None
    included_taskfile_vars: Vars | None = None
    platforms: list[Platform | None] | None = None
    location: Location | None = None
    watch: bool = False

    def name(self) -> str:
        """The label if one is set, otherwise the task name."""
        return self.label or self.task

    def wildcard_match(self, name: str) -> tuple[bool, list[str] | None]:
        """Match ``name`` against this task's name, returning the wildcard values."""
        pattern = re.compile("^" + self.task.replace("*", "(.*)") + r"\Z")
        match = pattern.search(name)
        if match is None:
            return False, None
        wildcards = [group or "" for group in match.groups()]
        if len(wildcards) != self.task.count("*"):
            return False, wildcards
        return True, wildcards

    def deep_copy(self) -> Task:
        return Task(
            task=self.task,
            cmds=_copy_items(self.cmds, Cmd.deep_copy),
            deps=_copy_items(self.deps, Dep.deep_copy),
            label=self.label,
            desc=self.desc,
            prompt=self.prompt,
            summary=self.summary,
            aliases=_copy_items(self.aliases),
            sources=_copy_items(self.sources, replace),
            generates=_copy_items(self.generates, replace),
            status=_copy_items(self.status),
            preconditions=_copy_items(self.preconditions, Precondition.deep_copy),
            dir=self.dir,
            set=_copy_items(self.set),
            shopt=_copy_items(self.shopt),
            vars=_copy_vars(self.vars),
            env=_copy_vars(self.env),
            dotenv=_copy_items(self.dotenv),
            silent=self.silent,
            interactive=self.interactive,
            internal=self.internal,
            method=self.method,
            prefix=self.prefix,
            ignore_error=self.ignore_error,
            run=self.run,
            include_vars=_copy_vars(self.include_vars),
            included_taskfile_vars=_copy_vars(self.included_taskfile_vars),
            platforms=_copy_items(self.platforms, Platform.deep_copy),
            location=None if self.location is None else self.location.deep_copy(),
            requires=None if self.requires is None else self.requires.deep_copy(),
        )


def _parse_full_task(node: MappingNode) -> Task:
    fields: dict[str, Any] = _fields(node)
    cmd = _optional(fields.get("cmd"), parse_cmd)
    cmds = _seq(fields.get("cmds"), parse_cmd)
    if cmd is not None:
        if cmds is not None:
            raise YamlError(f"yaml: line {_line(node)}: task cannot have both cmd and cmds")
        cmds = [cmd]
    return Task(
        cmds=cmds,
        deps=_seq(fields.get("deps"), parse_dep),
        label=_str(fields.get("label")),
        desc=_str(fields.get("desc")),
        prompt=_str(fields.get("prompt")),
        summary=_str(fields.get("summary")),
        aliases=_str_list(fields.get("aliases")),
        sources=_seq(fields.get("sources"), parse_glob),
        generates=_seq(fields.get("generates"), parse_glob),
        status=_str_list(fields.get("status")),
        preconditions=_seq(fields.get("preconditions"), parse_precondition),
        dir=_str(fields.get("dir")),
        set=_str_list(fields.get("set")),
        shopt=_str_list(fields.get("shopt")),
        vars=parse_vars(fields.get("vars")),
        env=parse_vars(fields.get("env")),
        dotenv=_str_list(fields.get("dotenv")),
        silent=_bool(fields.get("silent")),
        interactive=_bool(fields.get("interactive")),
        internal=_bool(fields.get("internal")),
        method=_str(fields.get("method")),
        prefix=_str(fields.get("prefix")),
        ignore_error=_bool(fields.get("ignore_error")),
        run=_str(fields.get("run")),
        platforms=_seq(fields.get("platforms"), platform_from_node),
        requires=_optional(fields.get("requires"), parse_requires),
        watch=_bool(fields.get("watch")),
    )


def parse_task(node: Node) -> Task:
    """Decode a task from a command, a list of commands or a full mapping."""
    if isinstance(node, ScalarNode):
        return Task(cmds=[parse_cmd(node)])
    if isinstance(node, SequenceNode):
        return Task(cmds=_seq(node, parse_cmd))
    if isinstance(node, MappingNode):
        return _parse_full_task(node)
    raise YamlError(f"yaml: line {_line(node)}: cannot unmarshal {short_tag(node)} into task")