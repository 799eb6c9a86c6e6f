"""Starter .gitpolicy.toml template."""

DEFAULT_TOML = """\
# gitpolicy configuration
version = "1.0"

[policy]
default_branch = ""       # empty = auto-detect (remote HEAD, init.defaultBranch, main, master)
remote = "origin"

[contributors]
# ignore = ["*[[]bot]*", "*<ci@example.com>"]   # fnmatch globs over "Name <email>"

[git]
timeout = 10              # seconds per git command

[output]
# format = "terminal"     # terminal | json; unset = json in CI, terminal otherwise
show_summary = true
"""
