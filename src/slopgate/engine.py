"""
Main engine running every check over a PR snapshot.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .checks import (
    abandonment_check,
    copy_paste_check,
    docstring_inflation_check,
    formatting_only_check,
    generic_description_check,
    hallucinated_import_check,
    new_account_check,
    oversized_diff_check,
    placeholder_check,
    shotgun_check,
    unrelated_changes_check,
    velocity_check,
)
from .config import DEFAULT_CONFIG, SlopGateConfig, is_allowlisted
from .log import Logger, null_logger
from .models import CheckResult, PRSnapshot, ScoringResult, Verdict
from .scoring import ScoreAggregator


@dataclass(frozen=True)
class Evaluation:
    """Outcome of evaluating one PR."""
    result: ScoringResult
    allowlisted: bool = False


def run_checks(
    snapshot: PRSnapshot,
    now: Optional[datetime] = None,
    logger: Optional[Logger] = None,
) -> list[CheckResult]:
    """Run all twelve checks. Results come back in a fixed order."""
    logger = logger or null_logger()
    pr = snapshot.pull_request
    files = snapshot.files

    logger.debug("Behavioral checks")
    checks = [
        velocity_check(snapshot.recent_repo_prs, now=now, logger=logger),
        abandonment_check(snapshot.abandonment, logger=logger),
        shotgun_check(pr, snapshot.public_prs, logger=logger),
        new_account_check(pr, snapshot.recent_repo_prs, now=now, logger=logger),
    ]

    logger.debug("Content checks")
    checks.extend([
        placeholder_check(files, logger=logger),
        hallucinated_import_check(files, snapshot.dependencies, logger=logger),
        docstring_inflation_check(files, logger=logger),
        copy_paste_check(files, logger=logger),
    ])

    logger.debug("Pattern checks")
    checks.extend([
        generic_description_check(pr, logger=logger),
        oversized_diff_check(pr, logger=logger),
        unrelated_changes_check(files, logger=logger),
        formatting_only_check(pr, files, logger=logger),
    ])

    return checks


def evaluate(
    snapshot: PRSnapshot,
    config: Optional[SlopGateConfig] = None,
    now: Optional[datetime] = None,
    logger: Optional[Logger] = None,
) -> Evaluation:
    """
    Score a PR snapshot.

    Allowlisted authors skip every check and pass with a score of 0.

    Args:
        snapshot: PR data gathered by the caller
        config: Weights, thresholds and allowlist
        now: Reference time for the time-relative checks (defaults to now)
        logger: Optional logger for diagnostics

    Returns:
        Evaluation with the scoring result
    """
    config = config or DEFAULT_CONFIG
    logger = logger or null_logger()
    pr = snapshot.pull_request

    logger.info("Analyzing PR #%d", pr.number)

    if is_allowlisted(config, pr.user.login, pr.user.is_bot):
        logger.info("User %s is allowlisted. Skipping all checks.", pr.user.login)
        return Evaluation(
            result=ScoringResult(
                final_score=0,
                verdict=Verdict.PASS,
                checks=(),
                weighted_checks=(),
                summary=f"{pr.user.login} is allowlisted. All checks skipped.",
            ),
            allowlisted=True,
        )

    checks = run_checks(snapshot, now=now, logger=logger)
    result = ScoreAggregator.from_config(config, logger).aggregate(checks)

    return Evaluation(result=result)
