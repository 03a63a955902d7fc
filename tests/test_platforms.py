import pytest

from taskfile.ast.location import YamlError, compose
from taskfile.ast.platforms import (
    InvalidPlatformError,
    Platform,
    parse_platform,
    platform_from_node,
)


@pytest.mark.parametrize(
    "text, expected_os, expected_arch",
    [
        ("windows", "windows", ""),
        ("linux", "linux", ""),
        ("darwin", "darwin", ""),
        ("386", "", "386"),
        ("amd64", "", "amd64"),
        ("arm64", "", "arm64"),
        ("windows/386", "windows", "386"),
        ("windows/amd64", "windows", "amd64"),
        ("windows/arm64", "windows", "arm64"),
    ],
)
def test_platform_parsing(text, expected_os, expected_arch):
    platform = parse_platform(text)
    assert platform.os == expected_os
    assert platform.arch == expected_arch


@pytest.mark.parametrize(
    "text, message",
    [
        ("invalid", 'task: Invalid platform "invalid"'),
        ("invalid/invalid", 'task: Invalid platform "invalid/invalid"'),
        ("windows/invalid", 'task: Invalid platform "windows/invalid"'),
        ("invalid/amd64", 'task: Invalid platform "invalid/amd64"'),
    ],
)
def test_platform_parsing_errors(text, message):
    with pytest.raises(InvalidPlatformError) as info:
        parse_platform(text)
    assert str(info.value) == message
    assert info.value.platform == text


def test_too_many_parts_is_invalid():
    with pytest.raises(InvalidPlatformError):
        parse_platform("linux/amd64/extra")


def test_two_architectures_are_invalid():
    with pytest.raises(InvalidPlatformError):
        parse_platform("386/amd64")


def test_platform_from_scalar_node():
    assert platform_from_node(compose("linux/arm64")) == Platform(os="linux", arch="arm64")


def test_platform_from_sequence_node_is_rejected():
    with pytest.raises(YamlError, match="into platform"):
        platform_from_node(compose("- linux"))


def test_platform_deep_copy_is_independent():
    original = Platform(os="linux", arch="amd64")
    copied = original.deep_copy()
    assert copied == original
    copied.os = "windows"
    assert original.os == "linux"