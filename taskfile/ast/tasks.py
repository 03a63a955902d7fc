"""The ordered collection of tasks in a Taskfile."""

from __future__ import annotations

from dataclasses import dataclass

from yaml.nodes import MappingNode, Node, ScalarNode

from .include import Include
from .location import Location, YamlError, _fields, _is_null, _line, short_tag
from .task import Task, parse_task
from .variables import Call

_NAMESPACE_SEPARATOR = ":"


def task_name_with_namespace(task_name: str, namespace: str) -> str:
    """Prefix a task name with a namespace; a leading separator refers to the root."""
    if task_name.startswith(_NAMESPACE_SEPARATOR):
        return task_name[len(_NAMESPACE_SEPARATOR):]
    return f"{namespace}{_NAMESPACE_SEPARATOR}{task_name}"


@dataclass
class MatchingTask:
    """A task matched by a call, with the values of its wildcards."""

    task: Task
    wildcards: list[str] | None


class Tasks(dict[str, Task]):
    """An insertion-ordered mapping of task names to tasks."""

    def find_matching_tasks(self, call: Call | None) -> list[MatchingTask]:
        """Return the task named by the call, or every task whose wildcards match it."""
        if call is None:
            return []
        direct = self.get(call.task)
        if direct is not None:
            return [MatchingTask(task=direct, wildcards=None)]
        matches = []
        for task in self.values():
            if task is None:
                continue
            matched, wildcards = task.wildcard_match(call.task)
            if matched:
                matches.append(MatchingTask(task=task, wildcards=wildcards))
        return matches

    def merge(self, other: Tasks, include: Include) -> None:
        """Add the tasks of an included Taskfile under the include's namespace."""
        namespace = include.namespace
        for name, original in other.items():
            task = original.deep_copy()
            task.internal = task.internal or include.internal

            for dep in task.deps or []:
                if dep is not None and dep.task:
                    dep.task = task_name_with_namespace(dep.task, namespace)
            for cmd in task.cmds or []:
                if cmd is not None and cmd.task:
                    cmd.task = task_name_with_namespace(cmd.task, namespace)
            if task.aliases is not None:
                task.aliases = [task_name_with_namespace(a, namespace) for a in task.aliases]

            for namespace_alias in include.aliases or []:
                extra = [task_name_with_namespace(task.task, namespace_alias)]
                extra.extend(
                    task_name_with_namespace(alias, namespace_alias)
                    for alias in original.aliases or []
                )
                task.aliases = [*(task.aliases or []), *extra]

            task.task = task_name_with_namespace(name, namespace)
            self[task.task] = task

        if other.get("default") is not None and self.get(namespace) is None:
            default = self[f"{namespace}{_NAMESPACE_SEPARATOR}default"]
            default.aliases = [*(default.aliases or []), namespace, *(include.aliases or [])]


def parse_tasks(node: Node | None) -> Tasks:
    """Decode the ``tasks`` section, naming each task and recording its location."""
    if _is_null(node):
        return Tasks()
    if not isinstance(node, MappingNode):
        raise YamlError(
            f"yaml: line {_line(node)}: cannot unmarshal {short_tag(node)} into tasks"
        )
    scalars = [item for pair in node.value for item in pair if isinstance(item, ScalarNode)]
    tasks = Tasks()
    for name, value in _fields(node).items():
        task = Task() if _is_null(value) else parse_task(value)
        task.task = name
        for scalar in scalars:
            if scalar.value == name:
                task.location = Location(
                    line=scalar.start_mark.line + 1,
                    column=scalar.start_mark.column + 1,
                )
        tasks[name] = task
    return tasks