"""
Behavioral checks.

Look at the submitting account and its recent activity for signs of
automated or spray-and-pray PR submission.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

from ..log import Logger, null_logger
from ..models import (
    AbandonmentStats,
    CheckId,
    CheckResult,
    ContributorPR,
    PullRequest,
)
from ..similarity import similarity

VELOCITY_WINDOW = timedelta(hours=24)

TITLE_SIMILARITY = 0.85
BODY_SIMILARITY = 0.80
MIN_COMPARABLE_BODY = 20

MIN_ABANDONMENT_HISTORY = 3


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def velocity_check(
    recent_prs: Sequence[ContributorPR],
    now: Optional[datetime] = None,
    logger: Optional[Logger] = None,
) -> CheckResult:
    """How many PRs has the author opened in the last 24 hours?"""
    logger = logger or null_logger()
    since = (now or _utcnow()) - VELOCITY_WINDOW

    recent_count = sum(
        1 for pr in recent_prs
        if pr.created_at is not None and pr.created_at >= since
    )

    logger.debug("Velocity check: %d PRs in last 24h", recent_count)

    if recent_count <= 3:
        score = 0
        reason = f"Normal activity: {recent_count} PR(s) in the last 24 hours."
    elif recent_count <= 5:
        score = 50
        reason = (
            f"Elevated activity: {recent_count} PRs in the last 24 hours. "
            "This is above typical contributor behavior."
        )
    elif recent_count <= 10:
        score = 80
        reason = (
            f"High velocity: {recent_count} PRs in the last 24 hours. "
            "This pattern is consistent with automated PR generation."
        )
    else:
        score = 100
        reason = f"Extreme velocity: {recent_count} PRs in the last 24 hours. Almost certainly automated."

    return CheckResult(CheckId.VELOCITY, score, reason)


def abandonment_check(
    stats: AbandonmentStats,
    logger: Optional[Logger] = None,
) -> CheckResult:
    """What share of the author's closed PRs here were never merged?"""
    logger = logger or null_logger()
    logger.debug(
        "Abandonment check: %d/%d PRs abandoned (%.1f%%)",
        stats.abandoned, stats.total, stats.rate,
    )

    if stats.total < MIN_ABANDONMENT_HISTORY:
        return CheckResult(
            CheckId.ABANDONMENT,
            0,
            f"Insufficient history: only {stats.total} previous PR(s). "
            "Cannot assess abandonment pattern.",
        )

    rate = stats.rate
    counts = f"{stats.abandoned}/{stats.total}"

    if rate <= 30:
        score = 0
        reason = f"Healthy contribution pattern: {rate:.0f}% abandonment rate ({counts} PRs)."
    elif rate <= 50:
        score = 25
        reason = f"Moderate abandonment: {rate:.0f}% of PRs closed without merge ({counts})."
    elif rate <= 70:
        score = 50
        reason = f"Elevated abandonment: {rate:.0f}% of PRs were never merged ({counts})."
    elif rate <= 90:
        score = 80
        reason = (
            f"High abandonment: {rate:.0f}% of PRs abandoned ({counts}). "
            "Consistent with spray-and-pray behavior."
        )
    else:
        score = 100
        reason = (
            f"Near-total abandonment: {rate:.0f}% of PRs discarded ({counts}). "
            "Strongly suggests automated low-quality contributions."
        )

    return CheckResult(CheckId.ABANDONMENT, score, reason)


def shotgun_check(
    current_pr: PullRequest,
    public_prs: Sequence[ContributorPR],
    logger: Optional[Logger] = None,
) -> CheckResult:
    """
    Is the same title/body being submitted to other repositories?

    Titles match when equal (case-insensitive) or more than 85% similar;
    bodies match when both are non-trivial and more than 80% similar.
    """
    logger = logger or null_logger()
    current_title = current_pr.title.lower().strip()
    current_body = (current_pr.body or "").lower().strip()

    others = [pr for pr in public_prs if pr.number != current_pr.number]

    if not others:
        return CheckResult(
            CheckId.SHOTGUN, 0, "No other recent public PRs found for comparison."
        )

    title_matches = 0
    body_matches = 0

    for pr in others:
        title = pr.title.lower().strip()
        body = (pr.body or "").lower().strip()

        if title == current_title or similarity(title, current_title) > TITLE_SIMILARITY:
            title_matches += 1

        if len(current_body) > MIN_COMPARABLE_BODY and len(body) > MIN_COMPARABLE_BODY:
            if similarity(body, current_body) > BODY_SIMILARITY:
                body_matches += 1

    title_match_rate = title_matches / len(others)

    logger.debug(
        "Shotgun check: %d/%d title matches, %d body matches",
        title_matches, len(others), body_matches,
    )

    if title_matches == 0 and body_matches == 0:
        score = 0
        reason = "PR title and description appear unique across contributor activity."
    elif title_matches >= 3 or body_matches >= 2:
        score = 90
        reason = (
            f"Shotgun pattern detected: PR title matches {title_matches} other recent PRs, "
            f"body matches {body_matches}. This contributor is submitting nearly identical "
            "PRs to multiple repositories."
        )
    elif title_matches >= 2 or title_match_rate > 0.5:
        score = 60
        reason = (
            f"Possible shotgun pattern: PR title matches {title_matches} other PR(s). "
            "Similar PRs found across repos."
        )
    else:
        score = 25
        reason = (
            f"Minor overlap: {title_matches} title match(es), {body_matches} body match(es) "
            "with other recent PRs."
        )

    return CheckResult(CheckId.SHOTGUN, score, reason)


def new_account_check(
    pr: PullRequest,
    recent_repo_prs: Sequence[ContributorPR],
    now: Optional[datetime] = None,
    logger: Optional[Logger] = None,
) -> CheckResult:
    """Young account opening its first PR to this repository."""
    logger = logger or null_logger()
    now = now or _utcnow()

    if pr.user.created_at is None:
        return CheckResult(
            CheckId.NEW_ACCOUNT, 0, "Account creation date unknown. Not assessed."
        )

    account_age_days = (now - pr.user.created_at) // timedelta(days=1)
    is_first_pr = not any(p.number != pr.number for p in recent_repo_prs)

    logger.debug(
        "New account check: account age %d days, first PR: %s",
        account_age_days, is_first_pr,
    )

    if account_age_days >= 30:
        score = 0
        reason = f"Account is {account_age_days} days old. Not flagged as a new account."
    elif not is_first_pr:
        score = 10
        reason = f"Account is {account_age_days} days old but has prior PRs to this repo."
    elif account_age_days >= 14:
        score = 30
        reason = (
            f"New account ({account_age_days} days old) with first PR to this repo. "
            "Worth a closer look."
        )
    elif account_age_days >= 7:
        score = 50
        reason = f"Very new account ({account_age_days} days old) submitting first PR to this repo."
    else:
        score = 70
        reason = (
            f"Brand new account ({account_age_days} days old) submitting first-ever PR to "
            "this repo. Elevated risk of being a throwaway account."
        )

    return CheckResult(CheckId.NEW_ACCOUNT, score, reason)
