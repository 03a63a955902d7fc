import pytest

from taskfile.ast.location import YamlError, compose
from taskfile.ast.variables import Call, Var, Vars, parse_var, parse_vars


def test_scalar_var_is_static_value():
    assert parse_var(compose("hello")) == Var(value="hello")


def test_mapping_var_with_sh():
    var = parse_var(compose("sh: echo hi\noverwrite: true\n"))
    assert var.sh == "echo hi"
    assert var.overwrite is True
    assert var.value == ""


def test_sequence_var_is_rejected():
    with pytest.raises(YamlError, match="cannot unmarshal"):
        parse_var(compose("- a\n- b\n"))


def test_parse_vars_keeps_order():
    parsed = parse_vars(compose("B: two\nA: one\n"))
    assert list(parsed) == ["B", "A"]
    assert parsed["A"] == Var(value="one")


def test_parse_vars_null_gives_none():
    assert parse_vars(compose("~")) is None


def test_merge_keeps_positions_and_overrides():
    first = Vars({"A": Var(value="1"), "B": Var(value="2")})
    second = Vars({"B": Var(value="3"), "C": Var(value="4")})
    first.merge(second)
    assert list(first) == ["A", "B", "C"]
    assert first["B"].value == "3"


def test_merge_with_none_leaves_vars_unchanged():
    vars_ = Vars({"A": Var(value="1")})
    vars_.merge(None)
    assert vars_ == Vars({"A": Var(value="1")})


def test_to_cache_map_skips_dynamic_and_prefers_live():
    vars_ = Vars(
        {
            "STATIC": Var(value="s"),
            "DYNAMIC": Var(sh="echo x"),
            "LIVE": Var(value="old", live="new"),
        }
    )
    assert vars_.to_cache_map() == {"STATIC": "s", "LIVE": "new"}


def test_deep_copy_is_independent():
    original = Vars({"A": Var(value="1")})
    copied = original.deep_copy()
    assert copied == original
    copied["A"].value = "changed"
    assert original["A"].value == "1"


def test_call_defaults():
    call = Call(task="build")
    assert call.vars is None
    assert call.silent is False
    assert call.indirect is False