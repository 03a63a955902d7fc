from datetime import timedelta

import pytest

from taskfile.ast.include import Include
from taskfile.ast.location import YamlError
from taskfile.ast.taskfile import (
    Taskfile,
    V3,
    Version,
    loads,
    parse_duration,
    parse_taskfile,
    parse_version,
)
from taskfile.ast.location import compose


def test_short_version_is_completed():
    assert str(parse_version("1")) == "1.0.0"
    assert str(parse_version("2")) == "2.0.0"


def test_version_equality_ignores_shortening():
    assert parse_version("3") == parse_version("3.0.0")
    assert parse_version("v3.0") == V3


def test_version_ordering():
    assert parse_version("1.2.3") < parse_version("1.10.0")
    assert parse_version("3.0.0-rc.1") < parse_version("3.0.0")
    assert max(parse_version("2"), parse_version("3.1")) == Version(3, 1, 0)


def test_version_string_round_trip():
    text = "3.4.5-beta.2+build.7"
    assert str(parse_version(text)) == text


def test_invalid_version():
    with pytest.raises(ValueError):
        parse_version("three")


def test_parse_duration_matches_default_interval():
    assert parse_duration("5s") == timedelta(seconds=5)


def test_parse_duration_compound():
    assert parse_duration("1h30m") == parse_duration("90m")
    assert parse_duration("0") == timedelta(0)


@pytest.mark.parametrize("text", ["", "5", "5x", "s"])
def test_parse_duration_invalid(text):
    with pytest.raises(ValueError):
        parse_duration(text)


def test_loads_full_taskfile():
    tf = loads(
        "version: '3'\n"
        "method: checksum\n"
        "silent: true\n"
        "interval: 500ms\n"
        "vars:\n  FOO: foo\n"
        "tasks:\n  build: echo build\n  test:\n    cmds: [echo test]\n"
    )
    assert tf.version == V3
    assert tf.method == "checksum"
    assert tf.silent is True
    assert tf.interval == parse_duration("500ms")
    assert tf.vars["FOO"].value == "foo"
    assert list(tf.tasks) == ["build", "test"]
    assert tf.tasks["build"].cmds[0].cmd == "echo build"


def test_loads_defaults_vars_and_env():
    tf = loads("version: '3'\n")
    assert len(tf.vars) == 0
    assert len(tf.env) == 0
    assert tf.includes is None


def test_loads_empty_document_has_no_version():
    assert loads("").version is None


def test_numeric_version():
    assert loads("version: 3\n").version == V3


def test_non_mapping_rejected():
    with pytest.raises(YamlError, match="into taskfile"):
        parse_taskfile(compose("- a\n- b\n"))


def test_integer_interval_rejected():
    with pytest.raises(YamlError):
        loads("version: '3'\ninterval: 5\n")


def test_merge_adds_namespaced_tasks_and_vars():
    main = loads("version: '3'\ntasks:\n  a: echo a\n")
    other = loads(
        "version: '3'\nvars:\n  FOO: x\noutput: prefixed\ntasks:\n  default: echo b\n"
    )
    main.merge(other, Include(namespace="inc"))
    assert "inc:default" in main.tasks
    assert "inc" in main.tasks["inc:default"].aliases
    assert main.vars["FOO"].value == "x"
    assert main.output.name == "prefixed"


def test_merge_keeps_output_when_other_unset():
    main = loads("version: '3'\noutput: interleaved\n")
    other = loads("version: '3'\n")
    main.merge(other, Include(namespace="inc"))
    assert main.output.name == "interleaved"


def test_merge_version_mismatch():
    main = Taskfile(version=parse_version("3"))
    other = Taskfile(version=parse_version("2"))
    with pytest.raises(ValueError, match="Taskfiles versions should match"):
        main.merge(other, Include(namespace="inc"))