"""Pre-commit hook installer: gitpolicy install / uninstall."""

from __future__ import annotations

from pathlib import Path
from typing import Tuple

from gitpolicy.git.adapter import MetadataUnavailableError, get_hooks_dir

HOOK_NAME = "pre-commit"

_HOOK_MARKER = "# gitpolicy-hook"
_HOOK_SCRIPT = f"""\
#!/bin/sh
{_HOOK_MARKER}
# Refuses the commit when the checked-out branch breaks the workflow policy.
# To uninstall: gitpolicy uninstall

exec gitpolicy check
"""


def _hook_path(repo_root: Path) -> Path:
    return get_hooks_dir(repo_root) / HOOK_NAME


def is_installed(repo_root: Path) -> bool:
    try:
        hook_path = _hook_path(repo_root)
    except MetadataUnavailableError:
        return False
    if not hook_path.is_file():
        return False
    return _HOOK_MARKER in hook_path.read_text(encoding="utf-8", errors="replace")


def install_hook(repo_root: Path, *, force: bool = False) -> Tuple[bool, str]:
    """Install ``gitpolicy check`` as the repository's pre-commit hook.

    Returns (success, message).
    """
    try:
        hook_path = _hook_path(repo_root)
    except MetadataUnavailableError as exc:
        return False, f"Not a git repository: {repo_root} ({exc})"

    if hook_path.exists():
        if is_installed(repo_root):
            return True, "gitpolicy hook is already installed."
        if not force:
            return (
                False,
                f"A {HOOK_NAME} hook already exists at {hook_path}. "
                "Use --force to overwrite, or add 'gitpolicy check' to it.",
            )

    hook_path.parent.mkdir(parents=True, exist_ok=True)
    hook_path.write_text(_HOOK_SCRIPT, encoding="utf-8")
    try:
        hook_path.chmod(0o755)
    except OSError:
        pass  # Windows

    return True, f"Installed gitpolicy {HOOK_NAME} hook at {hook_path}"


def uninstall_hook(repo_root: Path) -> Tuple[bool, str]:
    """Remove the gitpolicy pre-commit hook.

    Returns (success, message).
    """
    try:
        hook_path = _hook_path(repo_root)
    except MetadataUnavailableError as exc:
        return False, f"Not a git repository: {repo_root} ({exc})"

    if not hook_path.exists():
        return True, f"No {HOOK_NAME} hook found: nothing to remove."
    if not is_installed(repo_root):
        return False, f"{HOOK_NAME} hook exists but was not installed by gitpolicy."

    hook_path.unlink()
    return True, f"Removed gitpolicy {HOOK_NAME} hook from {hook_path}"
