"""
Aggregation and scoring.

Combines individual check results into a weight-normalized final score,
a verdict and a ranked summary.
"""

import math
from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Union

from .config import SlopGateConfig, Thresholds, Weights
from .log import Logger, null_logger
from .models import CheckId, CheckResult, ScoringResult, Verdict, WeightedCheck

CLEAN_SUMMARY = "All checks passed. No signs of AI-generated slop detected."

# Findings listed in the summary
SUMMARY_LIMIT = 5

DISPLAY_NAMES: Mapping[CheckId, str] = MappingProxyType({
    CheckId.VELOCITY: "PR Velocity",
    CheckId.ABANDONMENT: "Abandonment Rate",
    CheckId.SHOTGUN: "Shotgun Pattern",
    CheckId.NEW_ACCOUNT: "New Account",
    CheckId.PLACEHOLDER: "Placeholder Code",
    CheckId.HALLUCINATED_IMPORT: "Hallucinated Imports",
    CheckId.DOCSTRING_INFLATION: "Docstring Inflation",
    CheckId.COPY_PASTE: "Internal Duplication",
    CheckId.GENERIC_DESCRIPTION: "Generic Description",
    CheckId.OVERSIZED_DIFF: "Oversized Diff",
    CheckId.UNRELATED_CHANGES: "Unrelated Changes",
    CheckId.FORMATTING_ONLY: "Formatting Only",
})

VERDICT_TEXT: Mapping[Verdict, str] = MappingProxyType({
    Verdict.PASS: "This PR looks clean.",
    Verdict.WARN: "This PR has some signals that may warrant closer review.",
    Verdict.FLAG: "This PR shows multiple signals consistent with AI-generated content.",
    Verdict.BLOCK: "This PR has strong indicators of being AI-generated slop.",
})


def format_check_name(name: Union[CheckId, str]) -> str:
    """Display name for a check; unknown names are returned unchanged."""
    check_id = CheckId.lookup(str(name))
    if check_id is None:
        return str(name)
    return DISPLAY_NAMES[check_id]


def get_verdict(score: float, thresholds: Optional[Thresholds] = None) -> Verdict:
    """Highest band whose threshold the score reaches."""
    thresholds = thresholds or Thresholds()
    if score >= thresholds.block:
        return Verdict.BLOCK
    if score >= thresholds.flag:
        return Verdict.FLAG
    if score >= thresholds.warn:
        return Verdict.WARN
    return Verdict.PASS


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class ScoreAggregator:
    """Aggregate check results into a ScoringResult."""

    def __init__(
        self,
        weights: Optional[Weights] = None,
        thresholds: Optional[Thresholds] = None,
        logger: Optional[Logger] = None,
    ):
        self.weights = weights or Weights()
        self.thresholds = thresholds or Thresholds()
        self.logger = logger or null_logger()

    @classmethod
    def from_config(cls, config: SlopGateConfig, logger: Optional[Logger] = None) -> "ScoreAggregator":
        return cls(config.weights, config.thresholds, logger)

    def weigh(self, checks: Sequence[CheckResult]) -> list[WeightedCheck]:
        """Attach weights to enabled checks, in input order."""
        weighted = []
        for check in checks:
            weight = self.weights.for_check(check.name)

            if weight == 0:
                self.logger.debug("Skipping disabled check: %s", check.name)
                continue

            weighted.append(WeightedCheck(
                name=check.name,
                score=check.score,
                reason=check.reason,
                weight=weight,
                weighted_score=check.score * weight / 100,
            ))
        return weighted

    def final_score(self, weighted: Sequence[WeightedCheck]) -> int:
        """
        Weight-normalized mean of the check scores.

        Disabled checks never enter the denominator, so toggling them does not
        change the scale of the result.
        """
        total_weight = sum(c.weight for c in weighted)
        if total_weight <= 0:
            return 0

        total_weighted_score = sum(c.weighted_score for c in weighted)
        score = _round_half_up(total_weighted_score / total_weight * 100)
        return max(0, min(100, score))

    def aggregate(self, checks: Sequence[CheckResult]) -> ScoringResult:
        """Score a list of check results."""
        weighted = self.weigh(checks)
        final_score = self.final_score(weighted)
        verdict = get_verdict(final_score, self.thresholds)

        # Stable: equal weighted scores keep their input order
        ranked = sorted(weighted, key=lambda c: c.weighted_score, reverse=True)

        summary = generate_summary(final_score, verdict, ranked)

        self.logger.info("Final score: %d/100 (%s)", final_score, verdict.value)

        return ScoringResult(
            final_score=final_score,
            verdict=verdict,
            checks=tuple(checks),
            weighted_checks=tuple(ranked),
            summary=summary,
        )


def calculate_score(
    checks: Sequence[CheckResult],
    weights: Optional[Weights] = None,
    thresholds: Optional[Thresholds] = None,
    logger: Optional[Logger] = None,
) -> ScoringResult:
    """Calculate the final weighted score from individual check results."""
    return ScoreAggregator(weights, thresholds, logger).aggregate(checks)


def generate_summary(
    final_score: int,
    verdict: Verdict,
    ranked: Sequence[WeightedCheck],
) -> str:
    """Human-readable summary of the top findings."""
    top_issues = [c for c in ranked if c.score > 0][:SUMMARY_LIMIT]

    if not top_issues:
        return CLEAN_SUMMARY

    issue_list = "\n".join(
        f"- **{format_check_name(c.name)}** (score: {c.score}, weight: {c.weight:g}): {c.reason}"
        for c in top_issues
    )

    return (
        f"**Score: {final_score}/100** ({verdict.value.upper()})\n\n"
        f"{VERDICT_TEXT[verdict]}\n\n"
        f"### Findings\n\n{issue_list}"
    )
