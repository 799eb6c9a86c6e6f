"""gitpolicy CLI: Typer application with check, rules, init, and hook commands."""

from __future__ import annotations

import os
import time
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from gitpolicy import __version__

app = typer.Typer(
    name="gitpolicy",
    help="Check that the checked-out branch follows the repository's git workflow policy.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _detect_ci() -> bool:
    """Auto-detect CI environment."""
    return os.environ.get("CI", "").lower() in ("true", "1", "yes")


def _fail(label: str, exc: Exception) -> typer.Exit:
    console.print(f"[bold red]{label}:[/bold red] {exc}")
    return typer.Exit(code=2)


def _resolve_repo_root() -> Path:
    """Find the git repo root, exit 2 on failure."""
    from gitpolicy.git.adapter import MetadataUnavailableError, get_repo_root

    try:
        return get_repo_root()
    except MetadataUnavailableError as exc:
        raise _fail("Error", exc) from exc


def _load(repo_root: Path, config: Optional[str]):
    from gitpolicy.config.loader import ConfigError, load_config

    try:
        return load_config(repo_root, config)
    except ConfigError as exc:
        raise _fail("Config error", exc) from exc


def _registry(repo_root: Path):
    from gitpolicy.rules.registry import RuleTableError, build_registry

    try:
        return build_registry(repo_root)
    except RuleTableError as exc:
        raise _fail("Rule table error", exc) from exc


# ── check ─────────────────────────────────────────────────────────────────────


@app.command()
def check(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .gitpolicy.toml"),
    format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format: terminal | json (default: config, else json in CI)"
    ),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write JSON report to file"),
    default_branch: Optional[str] = typer.Option(
        None, "--default-branch", "-b", help="Canonical branch (skips auto-detection)"
    ),
    ci: bool = typer.Option(False, "--ci", help="Enable CI mode (forces JSON unless --format is given)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output with timing"),
) -> None:
    """Evaluate the repository against the workflow policy. Exit 1 if non-conformant."""
    from gitpolicy.config.schema import OUTPUT_FORMATS
    from gitpolicy.git.adapter import MetadataUnavailableError
    from gitpolicy.git.snapshot import collect_state
    from gitpolicy.output import json_report, terminal
    from gitpolicy.policy.evaluator import InvalidStateError, evaluate
    from gitpolicy.rules.registry import RuleTableError

    repo_root = _resolve_repo_root()
    cfg = _load(repo_root, config)

    # --- CI auto-detection ---
    # --ci forces JSON; a CI environment only fills in an unset format
    ci_mode = ci or _detect_ci()
    if ci and format is None:
        cfg.output.format = "json"
    elif cfg.output.format is None:
        cfg.output.format = "json" if ci_mode else "terminal"

    # --- CLI overrides ---
    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if default_branch:
        cfg.policy.default_branch = default_branch

    registry = _registry(repo_root)

    if verbose or debug:
        console.print(f"[dim]Repo root: {repo_root}[/dim]")
        console.print(f"[dim]Rules loaded: {len(registry)}[/dim]")
        console.print(f"[dim]CI mode: {ci_mode}[/dim]")

    # --- Snapshot ---
    start = time.perf_counter()
    try:
        state = collect_state(repo_root, cfg)
    except MetadataUnavailableError as exc:
        raise _fail("Git error", exc) from exc
    elapsed = (time.perf_counter() - start) * 1000

    if verbose or debug:
        console.print(f"[dim]Snapshot: {state}[/dim]")
    if debug:
        console.print(f"[dim]Metadata query duration: {elapsed:.0f}ms[/dim]")

    # --- Evaluate ---
    try:
        result = evaluate(state, registry)
    except (InvalidStateError, RuleTableError) as exc:
        raise _fail("Evaluation error", exc) from exc

    # --- Output ---
    if cfg.output.format == "json":
        report_text = json_report.render(result, state)
        print(report_text)
    else:
        terminal.render(result, state, show_summary=cfg.output.show_summary)
        report_text = None

    if output:
        Path(output).write_text(report_text or json_report.render(result, state), encoding="utf-8")
        if verbose:
            console.print(f"[dim]Report written to {output}[/dim]")

    raise typer.Exit(code=0 if result.satisfied else 1)


# ── rules ─────────────────────────────────────────────────────────────────────


@app.command()
def rules() -> None:
    """Show the effective rule table (built-ins plus .gitpolicy-rules/)."""
    from gitpolicy.output import terminal

    repo_root = _resolve_repo_root()
    terminal.render_rules(_registry(repo_root), console=console)


# ── install ───────────────────────────────────────────────────────────────────


@app.command()
def install(
    force: bool = typer.Option(False, "--force", help="Overwrite existing pre-commit hook"),
) -> None:
    """Install gitpolicy as a git pre-commit hook."""
    from gitpolicy.hooks.installer import install_hook

    repo_root = _resolve_repo_root()
    success, msg = install_hook(repo_root, force=force)
    if success:
        console.print(f"[green]✓[/green] {msg}")
    else:
        console.print(f"[red]✗[/red] {msg}")
        raise typer.Exit(code=1)


# ── uninstall ─────────────────────────────────────────────────────────────────


@app.command()
def uninstall() -> None:
    """Remove the gitpolicy pre-commit hook."""
    from gitpolicy.hooks.installer import uninstall_hook

    repo_root = _resolve_repo_root()
    success, msg = uninstall_hook(repo_root)
    if success:
        console.print(f"[green]✓[/green] {msg}")
    else:
        console.print(f"[red]✗[/red] {msg}")
        raise typer.Exit(code=1)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .gitpolicy.toml in the repo root."""
    from gitpolicy.config.defaults import DEFAULT_TOML
    from gitpolicy.config.loader import CONFIG_FILENAME

    repo_root = _resolve_repo_root()
    config_path = repo_root / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"gitpolicy {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """gitpolicy: check the git workflow against the contributor policy."""
