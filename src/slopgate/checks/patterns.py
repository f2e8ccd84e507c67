"""
Pattern checks.

Inspect PR metadata and the overall shape of the diff: vague titles, large
undocumented changes, scattered files and formatting churn dressed up as
substantive work.
"""

import re
from dataclasses import dataclass
from typing import Optional, Sequence

from ..log import Logger, null_logger
from ..models import CheckId, CheckResult, PRFile, PullRequest
from . import patterns_data as pd

SHORT_TITLE = 15
MIN_BODY = 20

MIN_FORMATTING_LINES = 5

_ALL_WHITESPACE = re.compile(r"\s")
_QUOTES = re.compile(r"[\"'`]")
_TRAILING_PUNCTUATION = re.compile(r"[;,]\s*$")


def is_generic_title(title: str) -> bool:
    """Whether a lowercased, trimmed title matches a known vague title."""
    return any(pattern.search(title) for pattern in pd.GENERIC_TITLES)


def has_templated_description(body: str) -> bool:
    """Whether a lowercased body uses boilerplate AI phrasing."""
    return any(pattern.search(body) for pattern in pd.TEMPLATED_DESCRIPTIONS)


def generic_description_check(pr: PullRequest, logger: Optional[Logger] = None) -> CheckResult:
    """Vague title ("fix bug", "update code") and thin or templated body."""
    logger = logger or null_logger()
    title = pr.title.lower().strip()
    body = (pr.body or "").lower().strip()

    generic = is_generic_title(title)
    short_title = len(title) < SHORT_TITLE
    no_body = len(body) < MIN_BODY
    templated = has_templated_description(body)

    logger.debug(
        'Generic description check: title="%s" (generic=%s, short=%s), body length=%d',
        title, generic, short_title, len(body),
    )

    if generic and no_body:
        score = 85
        reason = (
            f'Generic PR title ("{pr.title}") with no meaningful description. '
            "AI-generated PRs frequently use vague titles like this."
        )
    elif generic and templated:
        score = 70
        reason = (
            f'Generic title ("{pr.title}") paired with template-like description. '
            "Both the title and body follow common AI-generation patterns."
        )
    elif generic:
        score = 50
        reason = (
            f'Generic PR title ("{pr.title}"). Consider being more specific about what '
            "was changed and why."
        )
    elif short_title and no_body:
        score = 35
        reason = (
            f'Very short title ("{pr.title}") with no description. Not necessarily '
            "AI-generated, but lacks the context reviewers need."
        )
    elif templated:
        score = 20
        reason = "PR description uses template-like language, but the title is specific enough."
    else:
        score = 0
        reason = "PR title and description appear specific and well-written."

    return CheckResult(CheckId.GENERIC_DESCRIPTION, score, reason)


def oversized_diff_check(pr: PullRequest, logger: Optional[Logger] = None) -> CheckResult:
    """Large change set with a description too short to explain it."""
    logger = logger or null_logger()
    total = pr.additions + pr.deletions
    description_length = len((pr.body or "").strip())

    logger.debug(
        "Oversized diff check: %d lines changed, %d char description", total, description_length
    )

    if total <= 100:
        return CheckResult(
            CheckId.OVERSIZED_DIFF,
            0,
            f"Small PR ({total} lines changed). No size concern.",
        )

    # Scales with the diff, capped at 200 characters
    expected_min_description = min(total * 0.1, 200)
    underdocumented = description_length < expected_min_description

    if total > 2000 and description_length < 50:
        score = 95
        reason = (
            f"Massive PR ({total} lines) with only {description_length} characters of "
            "description. A change this large requires thorough explanation."
        )
    elif total > 1000 and description_length < 50:
        score = 80
        reason = (
            f"Very large PR ({total} lines) with a {description_length}-character description. "
            "The diff-to-description ratio is extremely unbalanced."
        )
    elif total > 500 and description_length < 50:
        score = 65
        reason = (
            f"Large PR ({total} lines changed) with minimal description ({description_length} "
            "chars). AI-generated PRs often dump large changes without explanation."
        )
    elif total > 500 and underdocumented:
        score = 40
        reason = (
            f"PR changes {total} lines but the description is shorter than expected "
            f"({description_length} < {expected_min_description:.0f} chars). Consider adding more context."
        )
    elif total > 300 and description_length < 30:
        score = 30
        reason = (
            f"Moderately large PR ({total} lines) with brief description "
            f"({description_length} chars)."
        )
    else:
        score = 0
        reason = (
            f"PR size ({total} lines) and description length ({description_length} chars) "
            "are proportional."
        )

    return CheckResult(CheckId.OVERSIZED_DIFF, score, reason)


@dataclass(frozen=True)
class DirectorySpread:
    """Where the changed files live."""
    top_level: tuple[str, ...]
    second_level: tuple[str, ...]
    likely_related: bool


def directory_spread(files: Sequence[PRFile]) -> DirectorySpread:
    """Group changed files by first and second path segment ("." for root files)."""
    top: dict[str, None] = {}
    deep: dict[str, None] = {}

    for file in files:
        parts = file.filename.split("/")
        top[parts[0] if len(parts) > 1 else "."] = None
        if len(parts) > 2:
            deep[f"{parts[0]}/{parts[1]}"] = None
        else:
            deep[parts[0] if len(parts) > 1 else "."] = None

    names = [f.filename for f in files]
    has_tests = any(m in n for n in names for m in pd.TEST_MARKERS)
    has_config = any(m in n for n in names for m in pd.CONFIG_MARKERS)
    has_docs = any(m in n for n in names for m in pd.DOC_MARKERS)

    return DirectorySpread(
        top_level=tuple(top),
        second_level=tuple(deep),
        likely_related=has_tests or has_config or has_docs,
    )


def unrelated_changes_check(files: Sequence[PRFile], logger: Optional[Logger] = None) -> CheckResult:
    """Files scattered across many top-level directories."""
    logger = logger or null_logger()

    if len(files) <= 1:
        return CheckResult(
            CheckId.UNRELATED_CHANGES, 0, "Single file changed. No cross-directory concern."
        )

    spread = directory_spread(files)
    dir_count = len(spread.top_level)

    logger.debug(
        "Unrelated changes: %d top-level dirs, %d second-level dirs, %d files",
        dir_count, len(spread.second_level), len(files),
    )

    if dir_count <= 3:
        score = 0
        noun = "directory" if dir_count == 1 else "directories"
        reason = f"Files span {dir_count} {noun}. Within normal range."
    elif dir_count <= 5 and spread.likely_related:
        score = 10
        reason = (
            f"Files span {dir_count} directories, but include tests/config/docs that are "
            "typically updated alongside code."
        )
    elif dir_count <= 5:
        score = 35
        reason = (
            f"Files span {dir_count} directories ({', '.join(spread.top_level[:5])}). "
            "This may indicate unrelated changes bundled together."
        )
    elif dir_count <= 8:
        score = 60
        reason = (
            f"Wide scope: files touch {dir_count} directories ({', '.join(spread.top_level[:6])}). "
            "AI-generated PRs often make scattered, unrelated changes."
        )
    else:
        score = 85
        reason = (
            f"Extremely scattered: {dir_count} directories affected "
            f"({', '.join(spread.top_level[:6])}, ...). This pattern is characteristic of "
            "AI-generated bulk changes."
        )

    return CheckResult(CheckId.UNRELATED_CHANGES, score, reason)


def is_formatting_pair(removed: str, added: str) -> bool:
    """Whether a removed/added line pair differs only in formatting."""
    if removed.strip() == added.strip():
        return True
    if _ALL_WHITESPACE.sub("", removed) == _ALL_WHITESPACE.sub("", added):
        return True
    if _QUOTES.sub('"', removed) == _QUOTES.sub('"', added):
        return True
    return (
        _TRAILING_PUNCTUATION.sub("", removed.strip())
        == _TRAILING_PUNCTUATION.sub("", added.strip())
    )


def count_formatting_lines(patch: str) -> tuple[int, int]:
    """Return (formatting, substantive) line tallies for one patch."""
    formatting = 0
    substantive = 0
    lines = patch.split("\n")
    i = 0

    while i < len(lines):
        line = lines[i]

        if line.startswith(pd.DIFF_HEADER_PREFIXES):
            i += 1
            continue

        if line.startswith("-") and i + 1 < len(lines) and lines[i + 1].startswith("+"):
            if is_formatting_pair(line[1:], lines[i + 1][1:]):
                formatting += 2
            else:
                substantive += 2
            i += 2
            continue

        if line.startswith(("+", "-")):
            content = line[1:].strip()
            if content in ("", "{", "}"):
                formatting += 1
            else:
                substantive += 1

        i += 1

    return formatting, substantive


def formatting_only_check(
    pr: PullRequest,
    files: Sequence[PRFile],
    logger: Optional[Logger] = None,
) -> CheckResult:
    """Mostly whitespace/quote/punctuation churn under a title that claims real work."""
    logger = logger or null_logger()
    formatting = 0
    substantive = 0

    for file in files:
        if not file.patch:
            continue
        f, s = count_formatting_lines(file.patch)
        formatting += f
        substantive += s

    total = formatting + substantive

    logger.debug(
        "Formatting check: %d formatting, %d substantive lines", formatting, substantive
    )

    if total < MIN_FORMATTING_LINES:
        return CheckResult(CheckId.FORMATTING_ONLY, 0, "Too few changes to assess.")

    rate = formatting / total
    pct = f"{rate * 100:.0f}%"
    claims_work = bool(pd.SUBSTANTIVE_CLAIM.search(pr.title.lower()))

    if rate < 0.5:
        score = 0
        reason = "PR contains substantive code changes."
    elif rate < 0.8:
        if claims_work:
            score = 30
            reason = (
                f"{pct} of changes are formatting-only, but the title claims substantive "
                f'work ("{pr.title}").'
            )
        else:
            score = 10
            reason = f"{pct} of changes are formatting-only. The title doesn't overclaim."
    elif rate < 0.95:
        if claims_work:
            score = 65
            reason = (
                f'{pct} of changes are whitespace/formatting, yet the title ("{pr.title}") '
                "implies bug fixes or features. This is a common AI slop pattern."
            )
        else:
            score = 25
            reason = f"Mostly formatting changes ({pct}). The title accurately represents the scope."
    else:
        if claims_work:
            score = 90
            reason = (
                f'Almost entirely formatting changes ({pct}) but claims to "{pr.title}". '
                "This is misleading and a hallmark of AI-generated contributions."
            )
        else:
            score = 35
            reason = (
                f"PR is nearly all formatting ({pct}). While not necessarily slop, "
                "formatting-only PRs add noise."
            )

    return CheckResult(CheckId.FORMATTING_ONLY, score, reason)
