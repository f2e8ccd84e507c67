"""Shared builders and fixtures for SlopGate tests."""

from datetime import datetime, timedelta, timezone

import pytest

from slopgate.models import (
    AbandonmentStats,
    ContributorPR,
    PRFile,
    PRSnapshot,
    PRUser,
    PullRequest,
)

# Pinned reference time for every time-relative check
NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)


def make_pr(
    title="Add retry backoff to webhook dispatcher",
    body="",
    number=42,
    additions=10,
    deletions=5,
    login="octocat",
    user_type="User",
    account_age=timedelta(days=365),
):
    return PullRequest(
        number=number,
        title=title,
        body=body,
        user=PRUser(login=login, type=user_type, created_at=NOW - account_age),
        created_at=NOW,
        additions=additions,
        deletions=deletions,
        base_ref="main",
    )


def make_file(patch="", filename="src/app.ts", **kwargs):
    return PRFile(filename=filename, patch=patch, **kwargs)


def make_contributor_pr(number, title="Some change", body=None, age=timedelta(hours=1)):
    return ContributorPR(number=number, title=title, body=body, created_at=NOW - age)


def added_patch(*lines):
    """A hunk adding the given lines."""
    return "@@ -0,0 +1,{} @@\n".format(len(lines)) + "\n".join(f"+{line}" for line in lines)


def make_snapshot(pr, files=(), recent=(), public=(), abandonment=None, deps=()):
    return PRSnapshot(
        pull_request=pr,
        files=tuple(files),
        recent_repo_prs=tuple(recent),
        public_prs=tuple(public),
        abandonment=abandonment or AbandonmentStats(),
        dependencies=frozenset(deps),
    )


ORDER_BLOCK = [
    "def process_order(order, inventory):",
    "    total = 0",
    "    for item in order.items:",
    "        stock = inventory.lookup(item.sku)",
    "        if stock.quantity < item.quantity:",
    "            raise ValueError(item.sku)",
    "        total += item.price * item.quantity",
    "    receipt = Receipt(order.id, total)",
    "    inventory.commit(order)",
    "    return receipt",
]


def clean_patch():
    """30 added and 20 removed lines of ordinary code."""
    removed = [f"-    old_value_{i} = legacy_lookup({i})" for i in range(20)]
    added = [f"+    retry_delay_{i} = compute_backoff(attempt, {i})" for i in range(30)]
    return "\n".join(["@@ -10,20 +10,30 @@"] + removed + added)


@pytest.fixture
def clean_snapshot():
    """An ordinary, well-described PR from an established author."""
    pr = make_pr(
        title="Add retry backoff to webhook dispatcher",
        body=(
            "Webhook deliveries currently retry immediately, which hammers slow "
            "receivers. Deliveries now back off exponentially with jitter and the "
            "delay is capped at five minutes. Covered by the existing dispatcher tests."
        ),
        additions=30,
        deletions=20,
    )
    return make_snapshot(
        pr,
        files=[make_file(clean_patch(), filename="webhooks/dispatcher.py", additions=30, deletions=20)],
        recent=[make_contributor_pr(42, title=pr.title)],
        public=[
            make_contributor_pr(7, title="Document the release checklist", age=timedelta(days=2)),
            make_contributor_pr(8, title="Bump pinned linters", age=timedelta(days=3)),
        ],
        abandonment=AbandonmentStats(total=5, abandoned=1, rate=20.0),
    )
