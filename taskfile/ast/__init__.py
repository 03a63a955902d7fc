"""Syntax tree of a Taskfile: tasks, commands, variables, includes, output and platforms."""