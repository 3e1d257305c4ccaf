"""
CLI entry point for prompt-consolidator.

Provides a command-line interface for combining markdown prompts into one guide.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from . import __version__
from .config_loader import load_config, merge_cli_with_config
from .consolidator import Consolidator
from .errors import ConsolidationError
from .utils import format_kib

# Initialize CLI app
app = typer.Typer(
    name="consolidate-prompts",
    help="Combine the instructions and all markdown prompts into a single guide.",
    add_completion=False,
)

console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"consolidate-prompts version {__version__}")
        raise typer.Exit()


@app.command()
def consolidate(
    root: Path = typer.Option(
        Path("."),
        "--root", "-r",
        help="Project root holding instructions.md, prompts/ and the config file.",
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
    ),
    prompts_dir: Optional[Path] = typer.Option(
        None,
        "--prompts-dir", "-p",
        help="Directory of prompt documents (default: <root>/prompts).",
    ),
    instructions: Optional[Path] = typer.Option(
        None,
        "--instructions", "-i",
        help="Instructions document rendered first (default: <root>/instructions.md).",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Output file, overwritten on every run (default: <root>/CONSOLIDATED_PROMPTS.md).",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Config file (default: first of consolidate.toml/.yml found in the root).",
        dir_okay=False,
    ),
    priority: Optional[List[str]] = typer.Option(
        None,
        "--priority",
        help="Prompt file rendered first; repeat to build the order. Replaces the configured order.",
    ),
    no_atomic: bool = typer.Option(
        False,
        "--no-atomic",
        help="Write the output file in place instead of via a temp file and rename.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show the resolved prompt order without writing the output file.",
    ),
    version: bool = typer.Option(
        False,
        "--version", "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """
    Consolidate all prompts with the instructions into a single markdown file.

    Examples:

        # Use the default layout of the current directory
        consolidate-prompts

        # Preview the order without writing anything
        consolidate-prompts --dry-run

        # Put two prompts first, everything else alphabetically
        consolidate-prompts --priority clean-architecture.md --priority typescript-wizard.md
    """
    console.print("[cyan]🔄 Starting prompt consolidation...[/cyan]")

    try:
        project_config = load_config(root, config_file)
        config = merge_cli_with_config(
            project_config,
            root,
            prompts_dir=prompts_dir,
            instructions=instructions,
            output=output,
            priority=priority,
            no_atomic=no_atomic,
        )

        result = Consolidator(config).run(dry_run=dry_run)
    except ConsolidationError as e:
        console.print(f"[red]❌ {e}[/red]")
        console.print("[red]💥 Consolidation failed![/red]")
        raise typer.Exit(1)

    stats = result.stats
    console.print(f"📂 Found {stats.files_found} prompt files")
    console.print(f"📋 Instructions file: {config.instructions_path}")

    if stats.skipped:
        console.print(f"[yellow]Skipped {len(stats.skipped)} unreadable prompt file(s)[/yellow]")

    if dry_run:
        loaded = project_config.to_dict()
        if loaded:
            console.print()
            console.print("[cyan]Config file settings:[/cyan]")
            for key, value in loaded.items():
                console.print(f"  {key}: {value}", markup=False)
        console.print()
        console.print("[cyan]Prompt order:[/cyan]")
        for index, name in enumerate(result.document_names, start=1):
            console.print(f"  {index}. {name}")
        console.print()
        console.print(f"[dim]Dry run: {result.output_path} was not written.[/dim]")
        return

    console.print(f"[green]✅ Consolidated prompts written to: {result.output_path}[/green]")
    console.print(f"📊 File size: {format_kib(result.size_bytes)}")
    console.print(f"📝 Lines: {result.line_count}")
    console.print("[bold green]🎉 Consolidation completed successfully![/bold green]")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
