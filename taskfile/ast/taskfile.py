"""The root of the Taskfile syntax tree."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import timedelta
from fractions import Fraction
from functools import total_ordering

from yaml.nodes import MappingNode, Node, ScalarNode

from .include import Include, Includes, parse_includes
from .location import (
    YamlError,
    _bool,
    _fields,
    _is_null,
    _line,
    _optional,
    _str,
    _str_list,
    compose,
    short_tag,
    to_python,
)
from .output import Output, parse_output
from .tasks import Tasks, parse_tasks
from .variables import Vars, parse_vars

_VERSION_RE = re.compile(
    r"v?(?P<major>[0-9]+)(?:\.(?P<minor>[0-9]+))?(?:\.(?P<patch>[0-9]+))?"
    r"(?:-(?P<pre>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<meta>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
)

_DURATION_UNITS = {
    "ns": 1,
    "us": 1_000,
    "\u00b5s": 1_000,
    "\u03bcs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60_000_000_000,
    "h": 3_600_000_000_000,
}
_DURATION_PART = re.compile(r"([0-9]+\.?[0-9]*|\.[0-9]+)([^0-9.]+)")


def _compare_prerelease(a: str, b: str) -> int:
    if a == b:
        return 0
    if not a:
        return 1
    if not b:
        return -1
    for left, right in zip(a.split("."), b.split(".")):
        if left == right:
            continue
        left_num, right_num = left.isdigit(), right.isdigit()
        if left_num and right_num:
            return -1 if int(left) < int(right) else 1
        if left_num != right_num:
            return -1 if left_num else 1
        return -1 if left < right else 1
    return (len(a.split(".")) > len(b.split("."))) - (len(a.split(".")) < len(b.split(".")))


@total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """A semantic version; build metadata does not take part in comparisons."""

    major: int
    minor: int = 0
    patch: int = 0
    prerelease: str = ""
    metadata: str = ""

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.metadata:
            text += f"+{self.metadata}"
        return text

    def _compare(self, other: Version) -> int:
        left = (self.major, self.minor, self.patch)
        right = (other.major, other.minor, other.patch)
        if left != right:
            return -1 if left < right else 1
        return _compare_prerelease(self.prerelease, other.prerelease)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._compare(other) == 0

    def __lt__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._compare(other) < 0

    def __hash__(self) -> int:
        return hash((self.major, self.minor, self.patch, self.prerelease))


def parse_version(text: str) -> Version:
    """Parse a possibly shortened semantic version such as ``3`` or ``v3.1``."""
    match = _VERSION_RE.fullmatch(text.strip())
    if match is None:
        raise ValueError("Invalid Semantic Version")
    return Version(
        major=int(match["major"]),
        minor=int(match["minor"] or 0),
        patch=int(match["patch"] or 0),
        prerelease=match["pre"] or "",
        metadata=match["meta"] or "",
    )


V3 = parse_version("3")


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``5s``, ``500ms`` or ``1h30m``."""
    original = text
    negative = text.startswith("-")
    if text[:1] in "+-" and text:
        text = text[1:]
    if text == "0":
        return timedelta(0)
    if not text:
        raise ValueError(f'time: invalid duration "{original}"')
    total = Fraction(0)
    pos = 0
    while pos < len(text):
        match = _DURATION_PART.match(text, pos)
        if match is None:
            raise ValueError(f'time: invalid duration "{original}"')
        number, unit = match.groups()
        if unit not in _DURATION_UNITS:
            raise ValueError(f'time: unknown unit "{unit}" in duration "{original}"')
        total += Fraction(number) * _DURATION_UNITS[unit]
        pos = match.end()
    if negative:
        total = -total
    return timedelta(microseconds=float(total / 1000))


@dataclass
class Taskfile:
    """A parsed Taskfile."""

    location: str = ""
    version: Version | None = None
    output: Output = field(default_factory=Output)
    method: str = ""
    includes: Includes | None = None
    set: list[str] | None = None
    shopt: list[str] | None = None
    vars: Vars = field(default_factory=Vars)
    env: Vars = field(default_factory=Vars)
    tasks: Tasks = field(default_factory=Tasks)
    silent: bool = False
    dotenv: list[str] | None = None
    run: str = ""
    interval: timedelta = field(default_factory=timedelta)

    def merge(self, other: Taskfile, include: Include) -> None:
        """Merge an included Taskfile into this one."""
        if self.version != other.version:
            raise ValueError(
                "task: Taskfiles versions should match. "
                f'First is "{self.version}" but second is "{other.version}"'
            )
        if other.output.is_set():
            self.output = other.output
        if self.vars is None:
            self.vars = Vars()
        if self.env is None:
            self.env = Vars()
        self.vars.merge(other.vars)
        self.env.merge(other.env)
        self.tasks.merge(other.tasks, include)


def _version_from_node(node: Node) -> Version:
    if not isinstance(node, ScalarNode):
        raise YamlError(
            f"yaml: line {_line(node)}: cannot unmarshal {short_tag(node)} into version"
        )
    try:
        return parse_version(node.value)
    except ValueError as exc:
        raise YamlError(f"yaml: line {_line(node)}: {exc}") from exc


def _interval_from_node(node: Node) -> timedelta:
    value = to_python(node)
    if not isinstance(value, str):
        raise YamlError(
            f"yaml: line {_line(node)}: cannot unmarshal {short_tag(node)} into duration"
        )
    try:
        return parse_duration(value)
    except ValueError as exc:
        raise YamlError(f"yaml: line {_line(node)}: {exc}") from exc


def parse_taskfile(node: Node) -> Taskfile:
    """Decode a Taskfile from its root mapping node."""
    if not isinstance(node, MappingNode):
        raise YamlError(
            f"yaml: line {_line(node)}: cannot unmarshal {short_tag(node)} into taskfile"
        )
    fields = _fields(node)
    output_node = fields.get("output")
    return Taskfile(
        version=_optional(fields.get("version"), _version_from_node),
        output=Output() if _is_null(output_node) else parse_output(output_node),
        method=_str(fields.get("method")),
        includes=parse_includes(fields.get("includes")),
        set=_str_list(fields.get("set")),
        shopt=_str_list(fields.get("shopt")),
        vars=parse_vars(fields.get("vars")) or Vars(),
        env=parse_vars(fields.get("env")) or Vars(),
        tasks=parse_tasks(fields.get("tasks")),
        silent=_bool(fields.get("silent")),
        dotenv=_str_list(fields.get("dotenv")),
        run=_str(fields.get("run")),
        interval=_optional(fields.get("interval"), _interval_from_node) or timedelta(0),
    )


def loads(data: str | bytes) -> Taskfile:
    """Parse Taskfile YAML text; an empty document gives an empty Taskfile."""
    node = compose(data)
    if node is None:
        return Taskfile()
    return parse_taskfile(node)