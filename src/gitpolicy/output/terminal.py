"""Rich terminal reporter: verdict, rule, and repository snapshot."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table

from gitpolicy.git.models import RepositoryState
from gitpolicy.policy.models import EvaluationResult
from gitpolicy.rules.models import Action
from gitpolicy.rules.registry import RuleRegistry

_ACTION_LABEL = {
    Action.COMMIT_DIRECT: "commit directly to the default branch",
    Action.REQUIRE_BRANCH: "work on a feature branch",
}


def render(
    result: EvaluationResult,
    state: RepositoryState,
    *,
    show_summary: bool = True,
    console: Optional[Console] = None,
) -> None:
    """Print the evaluation to the terminal using Rich."""
    console = console or Console(stderr=True)

    console.print()
    if result.satisfied:
        console.print(f"[bold green]✅ PASS[/bold green]  [cyan]{result.rule_id}[/cyan]")
    else:
        console.print(f"[bold red]❌ FAIL[/bold red]  [cyan]{result.rule_id}[/cyan]")
    console.print(f"   {result.message}")

    if show_summary:
        _print_summary(console, result, state)

    console.print()
    if result.satisfied:
        console.print("[bold green]Repository is conformant.[/bold green]")
    else:
        console.print(
            f"[bold red]Repository is not conformant, expected to "
            f"{_ACTION_LABEL[result.expected_action]}.[/bold red]"
        )


def _print_summary(console: Console, result: EvaluationResult, state: RepositoryState) -> None:
    console.print()
    console.print(f"[dim]Current branch:[/dim]   {state.current_branch}")
    console.print(f"[dim]Default branch:[/dim]   {state.default_branch}")
    console.print(f"[dim]Contributors:[/dim]     {state.contributor_count}")
    dirty = "yes" if state.has_uncommitted_changes else "no"
    console.print(f"[dim]Uncommitted:[/dim]      {dirty}")
    console.print(f"[dim]Expected action:[/dim]  {result.expected_action.value}")


def render_rules(registry: RuleRegistry, *, console: Optional[Console] = None) -> None:
    """Print the effective rule table."""
    console = console or Console(stderr=True)
    table = Table(
        title="gitpolicy rules",
        show_lines=True,
        title_style="bold",
        border_style="dim",
    )
    table.add_column("Rule", style="cyan", no_wrap=True)
    table.add_column("Contributors", justify="center", style="green")
    table.add_column("Action", style="magenta")
    table.add_column("Message")

    for rule in registry.all_rules:
        table.add_row(rule.id, rule.range_label, rule.expected_action.value, rule.message)

    console.print(table)
