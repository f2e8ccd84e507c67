"""
Report generation for scoring results.

Generates human-readable and machine-readable reports.
"""

import json
from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .engine import Evaluation
from .models import ScoringResult, Verdict
from .respond import ResponsePlan, build_results_table
from .scoring import format_check_name

VERDICT_COLORS = {
    Verdict.PASS: "green",
    Verdict.WARN: "yellow",
    Verdict.FLAG: "orange1",
    Verdict.BLOCK: "red",
}


class Reporter:
    """Generate reports from evaluations."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def print_summary(self, evaluation: Evaluation, plan: Optional[ResponsePlan] = None) -> None:
        """Print a summary report to the console."""
        result = evaluation.result
        color = VERDICT_COLORS[result.verdict]

        self.console.print()
        self.console.print(Panel("[bold]SlopGate Report[/bold]", style="blue"))

        body = (
            f"[bold]Score:[/bold] [{color}]{result.final_score}/100[/{color}]\n"
            f"{self._create_score_bar(result.final_score)}\n\n"
            f"[bold]Verdict:[/bold] [{color}]{result.verdict.value.upper()}[/{color}]"
        )
        if evaluation.allowlisted:
            body += "\n[dim]Author is allowlisted; no checks were run.[/dim]"
        self.console.print(Panel(body, title="Summary", border_style=color))

        if result.weighted_checks:
            self._print_checks(result)

        if plan is not None:
            self._print_plan(plan)

    def _create_score_bar(self, score: int, width: int = 40) -> str:
        """Create a visual score bar."""
        filled = int(score / 100 * width)
        empty = width - filled
        color = self._get_score_color(score)

        bar = f"[{color}]{'█' * filled}[/{color}][dim]{'░' * empty}[/dim]"
        return f"Clean {bar} Slop"

    def _get_score_color(self, score: float) -> str:
        """Get color based on a 0-100 score."""
        if score < 30:
            return "green"
        elif score < 60:
            return "yellow"
        elif score < 80:
            return "orange1"
        else:
            return "red"

    def _print_checks(self, result: ScoringResult) -> None:
        """Print every weighted check, highest first."""
        table = Table(title="Checks", box=box.ROUNDED)
        table.add_column("Check", style="bold")
        table.add_column("Score", justify="right")
        table.add_column("Weight", justify="right")
        table.add_column("Weighted", justify="right")
        table.add_column("Details", max_width=70)

        for check in result.weighted_checks:
            color = self._get_score_color(check.score)
            table.add_row(
                format_check_name(check.name),
                f"[{color}]{check.score}[/{color}]",
                f"{check.weight:g}",
                f"{check.weighted_score:.1f}",
                escape(check.reason),
            )

        self.console.print(table)

    def _print_plan(self, plan: ResponsePlan) -> None:
        """Print the actions a hosting integration would take."""
        lines = [f"• Label: [bold]{plan.label.name}[/bold]"]
        if plan.comment:
            kind = "Request changes" if plan.request_changes else "Comment"
            lines.append(f"• {kind}: {plan.comment.splitlines()[0].lstrip('# ')}")
        if plan.close:
            lines.append("• [red]Close the PR[/red]")

        self.console.print(Panel("\n".join(lines), title="Response", border_style="magenta"))

    def to_json(self, evaluation: Evaluation, plan: Optional[ResponsePlan] = None) -> str:
        """Convert an evaluation to JSON format."""
        result = evaluation.result
        data = {
            "score": result.final_score,
            "verdict": result.verdict.value,
            "allowlisted": evaluation.allowlisted,
            "summary": result.summary,
            "checks": [
                {"name": str(c.name), "score": c.score, "reason": c.reason}
                for c in result.checks
            ],
            "weighted_checks": [
                {
                    "name": str(c.name),
                    "score": c.score,
                    "weight": c.weight,
                    "weighted_score": c.weighted_score,
                    "reason": c.reason,
                }
                for c in result.weighted_checks
            ],
        }

        if plan is not None:
            data["response"] = {
                "label": plan.label.name,
                "remove_labels": list(plan.remove_labels),
                "comment": plan.comment,
                "request_changes": plan.request_changes,
                "close": plan.close,
            }

        return json.dumps(data, indent=2)

    def to_markdown(self, evaluation: Evaluation) -> str:
        """Convert an evaluation to Markdown format."""
        result = evaluation.result
        lines = [
            "# SlopGate Report",
            "",
            result.summary,
        ]

        if result.weighted_checks:
            lines.extend([
                "",
                "## All Checks",
                "",
                build_results_table(result),
            ])

        return "\n".join(lines)
