import pytest

from taskfile.ast.commands import (
    Cmd,
    Dep,
    For,
    Glob,
    Precondition,
    Requires,
    parse_cmd,
    parse_dep,
    parse_for,
    parse_glob,
    parse_precondition,
    parse_requires,
)
from taskfile.ast.location import YamlError, compose
from taskfile.ast.platforms import Platform
from taskfile.ast.variables import Var, Vars

YAML_CMD = 'echo "a string command"'
YAML_DEP = '"task-name"'
YAML_TASK_CALL = """
task: another-task
vars:
  PARAM1: VALUE1
  PARAM2: VALUE2
"""
YAML_DEFERRED_CALL = 'defer: { task: some_task, vars: { PARAM1: "var" } }'
YAML_DEFERRED_CMD = "defer: echo 'test'"


@pytest.mark.parametrize(
    "content, expected",
    [
        (
            "test -f foo.txt",
            Precondition(sh="test -f foo.txt", msg="`test -f foo.txt` failed"),
        ),
        ("sh: '[ 1 = 0 ]'", Precondition(sh="[ 1 = 0 ]", msg="[ 1 = 0 ] failed")),
        (
            '\nsh: "[ 1 = 2 ]"\nmsg: "1 is not 2"\n',
            Precondition(sh="[ 1 = 2 ]", msg="1 is not 2"),
        ),
    ],
)
def test_precondition_parse(content, expected):
    assert parse_precondition(compose(content)) == expected


@pytest.mark.parametrize(
    "content, expected",
    [
        (YAML_CMD, Cmd(cmd='echo "a string command"')),
        (
            YAML_TASK_CALL,
            Cmd(
                task="another-task",
                vars=Vars({"PARAM1": Var(value="VALUE1"), "PARAM2": Var(value="VALUE2")}),
            ),
        ),
        (YAML_DEFERRED_CMD, Cmd(cmd="echo 'test'", defer=True)),
        (
            YAML_DEFERRED_CALL,
            Cmd(task="some_task", vars=Vars({"PARAM1": Var(value="var")}), defer=True),
        ),
    ],
)
def test_cmd_parse(content, expected):
    assert parse_cmd(compose(content)) == expected


def test_task_call_vars_keep_order():
    cmd = parse_cmd(compose(YAML_TASK_CALL))
    assert list(cmd.vars) == ["PARAM1", "PARAM2"]


@pytest.mark.parametrize(
    "content, expected",
    [
        (YAML_DEP, Dep(task="task-name")),
        (
            YAML_TASK_CALL,
            Dep(
                task="another-task",
                vars=Vars({"PARAM1": Var(value="VALUE1"), "PARAM2": Var(value="VALUE2")}),
            ),
        ),
    ],
)
def test_dep_parse(content, expected):
    assert parse_dep(compose(content)) == expected


def test_dep_sequence_is_rejected():
    with pytest.raises(YamlError, match="into dependency"):
        parse_dep(compose("- a"))


def test_cmd_with_options():
    cmd = parse_cmd(
        compose("cmd: echo hi\nsilent: true\nignore_error: true\nset: [pipefail]\nplatforms: [linux]\n")
    )
    assert cmd.cmd == "echo hi"
    assert cmd.silent is True
    assert cmd.ignore_error is True
    assert cmd.set == ["pipefail"]
    assert cmd.platforms == [Platform(os="linux")]


def test_cmd_with_invalid_keys():
    with pytest.raises(YamlError, match="invalid keys in command"):
        parse_cmd(compose("foo: bar"))


def test_cmd_sequence_is_rejected():
    with pytest.raises(YamlError, match="into command"):
        parse_cmd(compose("- a"))


def test_cmd_deep_copy_is_independent():
    original = parse_cmd(compose(YAML_TASK_CALL))
    copied = original.deep_copy()
    assert copied == original
    copied.vars["PARAM1"].value = "other"
    assert original.vars["PARAM1"].value == "VALUE1"


def test_for_forms():
    assert parse_for(compose("sources")) == For(from_="sources")
    assert parse_for(compose("[a, b, c]")) == For(items=["a", "b", "c"])
    assert parse_for(compose("var: LIST\nsplit: ','\nas: NAME\n")) == For(
        var="LIST", split=",", as_="NAME"
    )


def test_for_mapping_without_var_is_rejected():
    with pytest.raises(YamlError, match="invalid keys in for"):
        parse_for(compose("split: ','"))


def test_for_deep_copy_is_independent():
    original = For(items=["a"])
    copied = original.deep_copy()
    copied.items.append("b")
    assert original.items == ["a"]


def test_glob_forms():
    assert parse_glob(compose("src/*.go")) == Glob(glob="src/*.go")
    assert parse_glob(compose("exclude: src/gen.go")) == Glob(glob="src/gen.go", negate=True)


def test_requires_parse_and_copy():
    requires = parse_requires(compose("vars: [A, B]"))
    assert requires == Requires(vars=["A", "B"])
    copied = requires.deep_copy()
    copied.vars.append("C")
    assert requires.vars == ["A", "B"]