"""Command line interface for git-clean-gone."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from git_clean_gone.branches import DeletionPlan, plan_deletions
from git_clean_gone.cleanup import DeletionResult, execute_plan
from git_clean_gone.git import GitError, GitRepo

app = typer.Typer(help="Clean up local git branches that have been deleted on the remote")
console = Console()
logger = logging.getLogger("git_clean_gone")


def configure_logging(verbose: bool) -> None:
    """Send package log records to the console, at debug level when verbose."""
    handler = RichHandler(console=console, show_time=False, show_path=False, markup=False)
    logger.handlers = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def get_repo(path: Path) -> GitRepo:
    """Get git repository instance."""
    try:
        return GitRepo(path)
    except GitError as err:
        console.print(f"[red]Error:[/red] {escape(str(err))}")
        raise typer.Exit(code=1) from err


def create_branch_table(title: str, names: list[str], title_style: str = "bold blue") -> Table:
    """Create a single-column table of branch names."""
    table = Table(
        title=title,
        show_header=True,
        header_style="bold",
        title_style=title_style,
        show_edge=True,
        min_width=len(title),
    )
    table.add_column("Branch", style="cyan", no_wrap=True)
    for name in names:
        table.add_row(escape(name))
    return table


def show_plan(plan: DeletionPlan) -> None:
    """Show the branches found to be gone."""
    if not plan:
        console.print(
            Panel(
                "[green]No gone branches found.[/green]",
                style="green",
                padding=(0, 2),
                expand=False,
            )
        )
        return

    console.print()
    console.print(create_branch_table(f"Found {len(plan)} gone branch(es)", list(plan.to_delete)))


def show_result(result: DeletionResult) -> None:
    """Show what was deleted and what failed."""
    if result.dry_run:
        console.print(f"\n[yellow]\\[DRY RUN][/yellow] Would delete {len(result.deleted)} branch(es)")
        return

    if result.deleted:
        console.print()
        console.print(
            create_branch_table(
                f"Successfully deleted {len(result.deleted)} branch(es) 🧹",
                result.deleted,
                title_style="bold green",
            )
        )
    for name, message in result.failed.items():
        console.print(f"[yellow]Warning:[/yellow] could not delete {escape(name)}: {escape(message)}")


def show_raw_output(title: str, output: str) -> None:
    """Show git output verbatim, without wrapping it into log columns."""
    console.print(f"\n[dim]{title}[/dim]")
    console.print(escape(output), highlight=False, soft_wrap=True)


def show_remaining(repo: GitRepo) -> None:
    """Show the branches left after cleanup."""
    console.print("\n[bold]Remaining branches:[/bold]")
    try:
        console.print(escape(repo.list_all_branches()), highlight=False)
    except GitError as err:
        console.print(f"[yellow]Warning:[/yellow] {escape(str(err))}")


@app.command()
def main(
    path: Annotated[Path, typer.Option(help="Path to git repository")] = Path("."),
    dry_run: Annotated[
        bool, typer.Option("--dry-run", "-d", help="Show which branches would be deleted without deleting them")
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show diagnostic output")] = False,
) -> None:
    """Delete local branches whose upstream branch is gone."""
    configure_logging(verbose)
    repo = get_repo(path)

    try:
        console.print("Fetching and pruning remote branches...")
        fetch_output = repo.fetch_and_prune()
        if verbose and fetch_output:
            show_raw_output("git fetch output:", fetch_output)

        listing = repo.list_branches_verbose()
        if verbose:
            show_raw_output("Branch output:", listing)
    except GitError as err:
        console.print(f"[red]Error:[/red] {escape(str(err))}")
        raise typer.Exit(code=1) from err

    plan = plan_deletions(listing)
    show_plan(plan)

    if plan:
        result = execute_plan(repo, plan, dry_run=dry_run)
        show_result(result)

    show_remaining(repo)


if __name__ == "__main__":
    app()
