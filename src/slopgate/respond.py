"""
Response planning.

Turns a scoring result into the label, comment and close decision a hosting
integration would apply. Nothing here talks to the network.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from .config import SlopGateConfig
from .models import ScoringResult, Verdict
from .scoring import format_check_name

ABOUT_URL = "https://github.com/A386official/slopgate"


@dataclass(frozen=True)
class Label:
    name: str
    color: str
    description: str


LABELS: Mapping[Verdict, Label] = MappingProxyType({
    Verdict.PASS: Label("slopgate: clean", "0e8a16", "SlopGate: PR passed all AI slop checks"),
    Verdict.WARN: Label("slopgate: review", "fbca04", "SlopGate: PR has some signals worth reviewing"),
    Verdict.FLAG: Label("slopgate: flagged", "e11d48", "SlopGate: PR flagged as potential AI slop"),
    Verdict.BLOCK: Label("slopgate: blocked", "b60205", "SlopGate: PR blocked as likely AI slop"),
})

# Removed before the new label is applied
ALL_LABEL_NAMES = tuple(label.name for label in LABELS.values())


@dataclass(frozen=True)
class ResponsePlan:
    """What to do with the PR."""
    verdict: Verdict
    label: Label
    remove_labels: tuple[str, ...] = ALL_LABEL_NAMES
    comment: Optional[str] = None
    request_changes: bool = False
    close: bool = False


def plan_response(result: ScoringResult, config: SlopGateConfig) -> ResponsePlan:
    """
    Map a verdict to actions.

    pass: label only. warn: informational comment. flag: request-changes
    review. block: comment, plus close when auto_close is on.
    """
    verdict = result.verdict
    label = LABELS[verdict]

    if verdict is Verdict.WARN:
        return ResponsePlan(verdict, label, comment=warning_comment(result))
    if verdict is Verdict.FLAG:
        return ResponsePlan(verdict, label, comment=flag_comment(result), request_changes=True)
    if verdict is Verdict.BLOCK:
        return ResponsePlan(
            verdict,
            label,
            comment=block_comment(result, config.auto_close),
            close=config.auto_close,
        )
    return ResponsePlan(verdict, label)


def _findings_rows(result: ScoringResult, with_weight: bool, limit: Optional[int] = None) -> str:
    flagged = [c for c in result.weighted_checks if c.score > 0][:limit]
    if with_weight:
        rows = (f"| {format_check_name(c.name)} | {c.score} | {c.weight:g} | {c.reason} |" for c in flagged)
    else:
        rows = (f"| {format_check_name(c.name)} | {c.score} | {c.reason} |" for c in flagged)
    return "\n".join(rows)


def warning_comment(result: ScoringResult) -> str:
    """Informational comment for a warn verdict."""
    return f"""## SlopGate Review

**Score: {result.final_score}/100** - This PR has some signals that may warrant closer review.

This is an automated check and may produce false positives. A human reviewer should make the final call.

### Findings

| Check | Score | Details |
|-------|-------|---------|
{_findings_rows(result, with_weight=False, limit=5)}

<details>
<summary>What is SlopGate?</summary>

SlopGate analyzes pull requests for patterns commonly associated with low-quality AI-generated contributions. A warning does not mean this PR is bad; it means some patterns were detected that are worth a second look.

[Learn more]({ABOUT_URL})
</details>"""


def flag_comment(result: ScoringResult) -> str:
    """Request-changes review body for a flag verdict."""
    return f"""## SlopGate: PR Flagged

**Score: {result.final_score}/100** - This PR shows multiple signals consistent with AI-generated content.

Changes have been requested. If this is a false positive, please provide additional context about your changes and a maintainer will review.

### Detailed Analysis

| Check | Score | Weight | Details |
|-------|-------|--------|---------|
{_findings_rows(result, with_weight=True)}

### What to do

1. **If this is a genuine contribution**: Please add more context to your PR description explaining your changes and reasoning. Address the specific findings listed above.
2. **If you used AI tools**: That's fine! But please review the AI-generated code carefully, ensure it actually works, and provide a thorough description of what was changed and why.

<details>
<summary>About SlopGate</summary>

SlopGate is an automated tool that detects patterns commonly found in low-quality AI-generated pull requests. It filters low-effort contributions that waste maintainer time; it is not a judgment on the use of AI tools.

[Learn more]({ABOUT_URL})
</details>"""


def block_comment(result: ScoringResult, will_close: bool) -> str:
    """Comment for a block verdict."""
    if will_close:
        closing_note = (
            "**This PR has been automatically closed.** If this is a mistake, please reach "
            "out to a maintainer to have it reopened."
        )
    else:
        closing_note = "**Auto-close is disabled.** A maintainer will review this PR manually."

    return f"""## SlopGate: PR Blocked

**Score: {result.final_score}/100** - This PR has strong indicators of being low-quality AI-generated content.

{closing_note}

### Full Analysis

| Check | Score | Weight | Details |
|-------|-------|--------|---------|
{_findings_rows(result, with_weight=True)}

### Why was this blocked?

This PR triggered multiple high-confidence detectors for patterns associated with AI-generated slop:
- Automated submission patterns
- Low-quality or placeholder code
- Generic descriptions with large, undocumented changes

If you believe this is a false positive, please open an issue describing your contribution and a maintainer will investigate.

<details>
<summary>About SlopGate</summary>

SlopGate protects open source projects from low-quality AI-generated pull requests. It analyzes behavioral patterns, code quality and PR metadata to identify contributions that waste maintainer time.

[Learn more]({ABOUT_URL})
</details>"""


def build_results_table(result: ScoringResult) -> str:
    """Markdown table of every weighted check and the final score."""
    rows = "\n".join(
        f"| {format_check_name(c.name)} | {c.score} | {c.weight:g} | {c.weighted_score:.1f} | {c.reason} |"
        for c in result.weighted_checks
    )

    return f"""| Check | Raw Score | Weight | Weighted | Details |
|-------|-----------|--------|----------|---------|
{rows}

**Final Score: {result.final_score}/100** (Verdict: {result.verdict.value.upper()})"""
