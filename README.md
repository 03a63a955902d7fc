# taskfile

Read, validate and combine Taskfile definitions: the YAML files that describe
the tasks of a task runner, their commands, dependencies, variables, includes
and platform restrictions.

## Installation

```
pip install taskfile
```

To run the test suite, install the `test` extra and run `pytest`:

```
pip install "taskfile[test]"
pytest
```

## Modules

- `taskfile.ast.taskfile` parses a whole Taskfile (`loads`, `parse_taskfile`)
  into a `Taskfile`. The schema version is a `Version` (`parse_version`
  accepts shortened forms such as `3` or `v3.1`), and the `interval` key is
  read with `parse_duration` (`5s`, `500ms`, `1h30m`). `Taskfile.merge` adds
  an included Taskfile, raising `ValueError` when the versions differ.
- `taskfile.ast.task` holds a single `Task` (`parse_task`, `Task.name`,
  `Task.wildcard_match`, `Task.deep_copy`).
- `taskfile.ast.tasks` holds the ordered `Tasks` mapping.
  `Tasks.find_matching_tasks` returns the task named by a `Call`, or every
  task whose `*` wildcards match it, as `MatchingTask` values.
  `Tasks.merge` adds included tasks under a namespace using
  `task_name_with_namespace`; a leading `:` refers to a root task.
- `taskfile.ast.commands` covers `Cmd`, `Dep`, `For`, `Glob`,
  `Precondition` and `Requires`, each with a `parse_*` function.
- `taskfile.ast.variables` holds `Var`, the ordered `Vars` mapping
  (`to_cache_map`, `merge`, `deep_copy`) and `Call`.
- `taskfile.ast.platforms` parses `OS`, `Arch` or `OS/Arch` strings with
  `parse_platform`, raising `InvalidPlatformError` for anything unknown.
- `taskfile.ast.output` holds the `Output` style and its `OutputGroup`
  options.
- `taskfile.ast.include` holds `Include` and `Includes`, and resolves an
  include's paths (`full_taskfile_path`, `full_dir_path`) against its base
  directory after expanding `~` and environment variables.
- `taskfile.ast.location` holds `Location`, `YamlError` and the YAML helpers
  `compose`, `short_tag` and `to_python`.
- `taskfile.discovery` finds a Taskfile in a directory (`exists`) or walks
  up the tree until it finds one (`exists_walk`), stopping at the root or
  where the directory owner changes and raising `TaskfileNotFoundError`.
- `taskfile.nodes` reads Taskfiles from disk (`FileNode`), over HTTP(S)
  (`HTTPNode`) or from standard input (`StdinNode`). `new_node` picks the
  kind from the URI; remote nodes raise `RemoteTaskfilesDisabledError`
  unless `remote_enabled=True`, and plain `http` needs `insecure=True`
  (otherwise `TaskfileNotSecureError`). Failed downloads raise
  `TaskfileFetchFailedError`. `new_root_node` chooses the main Taskfile.
- `taskfile.cache` keeps copies of remote Taskfiles and their SHA-256
  checksums under `<dir>/remote` (`Cache`, `checksum`).
- `taskfile.watch` decides which paths a file watcher should skip
  (`should_ignore_file`): anything in or ending with `.task`, `.git`, `.hg`
  or `node_modules`.

## Example

```python
from taskfile.ast.taskfile import loads
from taskfile.ast.platforms import parse_platform
from taskfile.watch import should_ignore_file

tf = loads(b"""
version: '3'
tasks:
  build:
    desc: Build the project
    cmds:
      - echo building
""")
print(tf.version)                     # 3.0.0
print(tf.tasks["build"].desc)         # Build the project

platform = parse_platform("windows/amd64")
print(platform.os, platform.arch)      # windows amd64

print(should_ignore_file("/project/.git/hooks"))           # True
print(should_ignore_file("/project/.github/workflows/ci"))  # False
```

Default file names searched for are `Taskfile.yml`, `taskfile.yml`,
`Taskfile.yaml`, `taskfile.yaml` and their `.dist` variants, in that order.

## What it does not do

This package reads and combines Taskfile definitions; it does not run them.
There is no command-line program, no execution of commands or shell
variables, no template expansion of values, no checking of whether a task is
up to date, and no file watcher itself — only the rule for which paths a
watcher should ignore.