"""Operating system and architecture constraints."""

from __future__ import annotations

from dataclasses import dataclass

from yaml.nodes import Node, ScalarNode

from .location import YamlError, _line, _str, short_tag

_KNOWN_OS = frozenset(
    {
        "aix", "android", "darwin", "dragonfly", "freebsd", "hurd", "illumos", "ios",
        "js", "linux", "nacl", "netbsd", "openbsd", "plan9", "solaris", "wasip1",
        "windows", "zos",
    }
)

_KNOWN_ARCH = frozenset(
    {
        "386", "amd64", "amd64p32", "arm", "armbe", "arm64", "arm64be", "loong64",
        "mips", "mipsle", "mips64", "mips64le", "mips64p32", "mips64p32le", "ppc",
        "ppc64", "ppc64le", "riscv", "riscv64", "s390", "s390x", "sparc", "sparc64",
        "wasm",
    }
)


class InvalidPlatformError(ValueError):
    """A platform string is not a known OS, architecture or OS/architecture pair."""

    def __init__(self, platform: str) -> None:
        super().__init__(f'task: Invalid platform "{platform}"')
        self.platform = platform


@dataclass
class Platform:
    """An OS and architecture pair; an empty field matches anything."""

    os: str = ""
    arch: str = ""

    def deep_copy(self) -> Platform:
        return Platform(os=self.os, arch=self.arch)


def _apply_os_or_arch(platform: Platform, value: str) -> None:
    if not value:
        raise ValueError("task: Blank OS/Arch value provided")
    if value in _KNOWN_OS:
        platform.os = value
    elif value in _KNOWN_ARCH:
        platform.arch = value
    else:
        raise ValueError(f"task: Invalid OS/Arch value provided ({value})")


def _apply_arch(platform: Platform, value: str) -> None:
    if not value:
        raise ValueError("task: Blank Arch value provided")
    if platform.arch:
        raise ValueError("task: Multiple Arch values provided")
    if value not in _KNOWN_ARCH:
        raise ValueError(f"task: Invalid Arch value provided ({value})")
    platform.arch = value


def parse_platform(text: str) -> Platform:
    """Parse ``OS``, ``Arch`` or ``OS/Arch`` into a platform."""
    parts = text.split("/")
    if len(parts) > 2:
        raise InvalidPlatformError(text)
    platform = Platform()
    try:
        _apply_os_or_arch(platform, parts[0])
        if len(parts) == 2:
            _apply_arch(platform, parts[1])
    except ValueError as exc:
        raise InvalidPlatformError(text) from exc
    return platform


def platform_from_node(node: Node) -> Platform:
    """Decode a platform from a scalar YAML node."""
    if isinstance(node, ScalarNode):
        return parse_platform(_str(node))
    raise YamlError(f"yaml: line {_line(node)}: cannot unmarshal {short_tag(node)} into platform")