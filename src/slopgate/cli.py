"""
Command-line interface for slopgate.
"""

import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import DEFAULT_CONFIG, load_config_file
from .checks.patterns_data import PATTERNS_VERSION
from .dependencies import MANIFEST_PARSERS
from .engine import evaluate
from .errors import SlopGateError, SnapshotError
from .log import configure_logging
from .models import CheckId, PRSnapshot, Verdict, parse_timestamp
from .reporter import Reporter
from .respond import plan_response
from .scoring import format_check_name

# Exit codes by verdict; 3 is reserved for errors
EXIT_CODES = {
    Verdict.PASS: 0,
    Verdict.WARN: 0,
    Verdict.FLAG: 1,
    Verdict.BLOCK: 2,
}
EXIT_ERROR = 3

console = Console()
# Logs and errors go to stderr so json/markdown output can be piped
err_console = Console(stderr=True)


@click.group()
@click.version_option(version=__version__)
def main():
    """
    SlopGate - Score pull requests for AI-generated slop.

    Combines behavioral, content and pattern checks into a 0-100 score
    with a pass/warn/flag/block verdict.
    """
    pass


def _load_snapshot(path: str) -> PRSnapshot:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except ValueError as e:
        raise SnapshotError(f"{path} is not valid JSON: {e}") from e
    return PRSnapshot.from_dict(data)


@main.command()
@click.argument("snapshot", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--config", "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Path to a .slopgate.yml file (defaults are used when absent)"
)
@click.option(
    "--output", "-o",
    type=click.Choice(["console", "json", "markdown"]),
    default="console",
    help="Output format"
)
@click.option(
    "--output-file", "-f",
    type=click.Path(),
    help="Output file path (defaults to stdout for json/markdown)"
)
@click.option(
    "--now",
    help="Reference time for time-relative checks (ISO-8601)"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show debug logging"
)
def score(
    snapshot: str,
    config_path: Optional[str],
    output: str,
    output_file: Optional[str],
    now: Optional[str],
    verbose: bool,
):
    """
    Score a pull request snapshot.

    SNAPSHOT is a JSON file with the pull request, its changed files and the
    author's recent activity.

    Examples:

        slopgate score pr.json

        slopgate score pr.json --config .slopgate.yml -o json -f result.json
    """
    logger = configure_logging(err_console, verbose=verbose)

    try:
        config = load_config_file(config_path, logger) if config_path else DEFAULT_CONFIG
        pr_snapshot = _load_snapshot(snapshot)
        reference_time: Optional[datetime] = parse_timestamp(now) if now else None
    except (SlopGateError, ValueError) as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(EXIT_ERROR)

    evaluation = evaluate(pr_snapshot, config, now=reference_time, logger=logger)
    plan = plan_response(evaluation.result, config)
    reporter = Reporter(console=console)

    if output == "console":
        reporter.print_summary(evaluation, plan)
    else:
        text = reporter.to_json(evaluation, plan) if output == "json" else reporter.to_markdown(evaluation)
        if output_file:
            Path(output_file).write_text(text, encoding="utf-8")
            console.print(f"[green]Report saved to {output_file}[/green]")
        else:
            click.echo(text)

    sys.exit(EXIT_CODES[evaluation.result.verdict])


@main.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
def deps(files: tuple[str, ...]):
    """
    List dependency names declared in manifest files.

    Understands package.json, requirements.txt and Cargo.toml.
    """
    found: set[str] = set()
    for file in files:
        path = Path(file)
        parser = MANIFEST_PARSERS.get(path.name)
        if parser is None:
            console.print(f"[yellow]Skipping {file}: not a known manifest[/yellow]")
            continue
        try:
            content = path.read_text(encoding="utf-8")
        except (UnicodeDecodeError, OSError) as e:
            err_console.print(f"[red]Error:[/red] cannot read {escape(file)}: {escape(str(e))}")
            sys.exit(EXIT_ERROR)
        found |= parser(content)

    for name in sorted(found):
        click.echo(name)


@main.command()
def info():
    """Show the checks and their default weights."""
    console.print()
    console.print("[bold blue]SlopGate[/bold blue]")
    console.print(f"Version: {__version__} (pattern tables v{PATTERNS_VERSION})")
    console.print()

    groups = [
        ("Behavioral", CheckId.VELOCITY, CheckId.ABANDONMENT, CheckId.SHOTGUN, CheckId.NEW_ACCOUNT),
        ("Content", CheckId.PLACEHOLDER, CheckId.HALLUCINATED_IMPORT,
         CheckId.DOCSTRING_INFLATION, CheckId.COPY_PASTE),
        ("Pattern", CheckId.GENERIC_DESCRIPTION, CheckId.OVERSIZED_DIFF,
         CheckId.UNRELATED_CHANGES, CheckId.FORMATTING_ONLY),
    ]
    for title, *check_ids in groups:
        console.print(f"  [cyan]{title} checks[/cyan]")
        for check_id in check_ids:
            weight = DEFAULT_CONFIG.weights.for_check(check_id)
            console.print(f"    • {format_check_name(check_id)} ({check_id.value}): weight {weight}")
        console.print()

    thresholds = DEFAULT_CONFIG.thresholds
    console.print(
        f"[bold]Thresholds:[/bold] warn {thresholds.warn}, flag {thresholds.flag}, block {thresholds.block}"
    )
    console.print()
    console.print("For more details: slopgate --help")


if __name__ == "__main__":
    main()
