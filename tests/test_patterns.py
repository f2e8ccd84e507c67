"""Tests for the pattern checks."""

import pytest

from slopgate.checks.patterns import (
    count_formatting_lines,
    directory_spread,
    formatting_only_check,
    generic_description_check,
    is_formatting_pair,
    is_generic_title,
    oversized_diff_check,
    unrelated_changes_check,
)
from slopgate.models import CheckId

from conftest import make_file, make_pr

SPECIFIC_BODY = (
    "Moves the retry loop out of the HTTP client so that callers can configure "
    "backoff per request. The old behavior is kept as the default."
)


class TestGenericTitle:
    @pytest.mark.parametrize("title", [
        "fix bug", "fixed bugs", "update code", "refactor", "cleanup", "minor fixes",
        "improve code quality", "various improvements", "bug fix", "changes",
    ])
    def test_generic(self, title):
        assert is_generic_title(title)

    @pytest.mark.parametrize("title", [
        "fix race in webhook retry loop",
        "add exponential backoff to webhook retries",
    ])
    def test_specific(self, title):
        assert not is_generic_title(title)


class TestGenericDescriptionCheck:
    def test_generic_title_no_body(self):
        result = generic_description_check(make_pr(title="Fix bug", body=""))
        assert result.name == CheckId.GENERIC_DESCRIPTION
        assert result.score == 85

    def test_title_is_normalized(self):
        assert generic_description_check(make_pr(title="  FIX BUG  ")).score == 85

    def test_generic_title_templated_body(self):
        pr = make_pr(title="Update code", body="This PR improves the overall code quality and fixes issues.")
        assert generic_description_check(pr).score == 70

    def test_generic_title_real_body(self):
        assert generic_description_check(make_pr(title="Refactor", body=SPECIFIC_BODY)).score == 50

    def test_short_title_no_body(self):
        assert generic_description_check(make_pr(title="Tweak", body="")).score == 35

    def test_templated_body_specific_title(self):
        pr = make_pr(
            title="Add exponential backoff to webhook retries",
            body="This PR updates the retry logic so webhooks back off exponentially.",
        )
        assert generic_description_check(pr).score == 20

    def test_specific(self):
        pr = make_pr(title="Add exponential backoff to webhook retries", body=SPECIFIC_BODY)
        assert generic_description_check(pr).score == 0


class TestOversizedDiffCheck:
    @pytest.mark.parametrize("additions,deletions,body_length,expected", [
        (50, 40, 0, 0),
        (60, 40, 0, 0),
        (1500, 600, 0, 95),
        (1500, 600, 49, 95),
        (800, 400, 0, 80),
        (400, 200, 10, 65),
        # 600 lines expect 60 characters
        (400, 200, 55, 40),
        (400, 200, 70, 0),
        (300, 100, 20, 30),
        (300, 100, 35, 0),
        (2500, 500, 250, 0),
    ])
    def test_bands(self, additions, deletions, body_length, expected):
        pr = make_pr(additions=additions, deletions=deletions, body="x" * body_length)
        result = oversized_diff_check(pr)
        assert result.name == CheckId.OVERSIZED_DIFF
        assert result.score == expected

    def test_underdocumented_reason_has_expected_length(self):
        pr = make_pr(additions=600, deletions=200, body="x" * 60)
        result = oversized_diff_check(pr)
        assert result.score == 40
        assert "60 < 80" in result.reason

    def test_expected_description_capped(self):
        pr = make_pr(additions=4000, deletions=1000, body="x" * 199)
        assert oversized_diff_check(pr).score == 40
        pr = make_pr(additions=4000, deletions=1000, body="x" * 200)
        assert oversized_diff_check(pr).score == 0

    def test_body_whitespace_ignored(self):
        pr = make_pr(additions=1500, deletions=600, body=" " * 80)
        assert oversized_diff_check(pr).score == 95


def files_in(*names):
    return [make_file("", filename=name) for name in names]


class TestDirectorySpread:
    def test_root_files_grouped_under_dot(self):
        spread = directory_spread(files_in("main.py", "setup.py", "src/app/x.py", "src/lib/y.py"))
        assert spread.top_level == (".", "src")
        assert spread.second_level == (".", "src/app", "src/lib")

    def test_related_markers(self):
        assert directory_spread(files_in("src/a.py", "tests/test_a.py")).likely_related
        assert directory_spread(files_in("src/a.py", "README.md")).likely_related
        assert not directory_spread(files_in("src/a.py", "lib/b.py")).likely_related


class TestUnrelatedChangesCheck:
    def test_single_file(self):
        result = unrelated_changes_check(files_in("src/a.py"))
        assert result.name == CheckId.UNRELATED_CHANGES
        assert result.score == 0

    def test_few_directories(self):
        assert unrelated_changes_check(files_in("src/a.py", "src/b.py", "lib/c.py")).score == 0

    def test_root_files(self):
        assert unrelated_changes_check(files_in("main.py", "setup.py", "src/a.py")).score == 0

    def test_spread_with_tests(self):
        files = files_in("src/a.py", "lib/b.py", "api/c.py", "tests/test_x.py")
        assert unrelated_changes_check(files).score == 10

    def test_spread_without_related_files(self):
        files = files_in("src/a.py", "lib/b.py", "api/c.py", "web/d.py")
        assert unrelated_changes_check(files).score == 35

    def test_wide(self):
        files = files_in(*[f"dir{i}/a.py" for i in range(7)])
        assert unrelated_changes_check(files).score == 60

    def test_scattered(self):
        files = files_in(*[f"dir{i}/a.py" for i in range(9)])
        assert unrelated_changes_check(files).score == 85


class TestFormattingPair:
    @pytest.mark.parametrize("removed,added", [
        ("  x = 1", "    x = 1"),
        ("x=1", "x = 1"),
        ("name = 'a'", 'name = "a"'),
        ("call(a);", "call(a)"),
        ("items = [a, b],", "items = [a, b]"),
    ])
    def test_formatting(self, removed, added):
        assert is_formatting_pair(removed, added)

    def test_substantive(self):
        assert not is_formatting_pair("x = 1", "x = 2")


def pairs_patch(formatting, substantive):
    lines = ["diff --git a/app.py b/app.py", "index 1a2b3c..4d5e6f 100644", "--- a/app.py", "+++ b/app.py", "@@ -1,9 +1,9 @@"]
    for i in range(formatting):
        lines += [f"-  value_{i} = load({i})", f"+    value_{i} = load({i})"]
    for i in range(substantive):
        lines += [f"-value_{i} = load({i})", f"+value_{i} = fetch({i}, retries=3)"]
    return "\n".join(lines)


class TestCountFormattingLines:
    def test_headers_skipped(self):
        assert count_formatting_lines(pairs_patch(2, 1)) == (4, 2)

    def test_brace_and_blank_lines(self):
        patch = "@@ -1,3 +1,3 @@\n+}\n+{\n+\n+return x"
        assert count_formatting_lines(patch) == (3, 1)


class TestFormattingOnlyCheck:
    def test_too_few(self):
        result = formatting_only_check(make_pr(title="Fix crash"), [make_file(pairs_patch(1, 0))])
        assert result.name == CheckId.FORMATTING_ONLY
        assert result.score == 0
        assert result.reason == "Too few changes to assess."

    def test_substantive(self):
        assert formatting_only_check(make_pr(), [make_file(pairs_patch(0, 5))]).score == 0

    @pytest.mark.parametrize("formatting,substantive,claims,expected", [
        (5, 0, True, 90),
        (5, 0, False, 35),
        (17, 1, True, 65),
        (17, 1, False, 25),
        (3, 1, True, 30),
        (3, 1, False, 10),
    ])
    def test_bands(self, formatting, substantive, claims, expected):
        title = "Fix crash in parser" if claims else "Reindent parser module"
        files = [make_file(pairs_patch(formatting, substantive), filename="parser.py")]
        assert formatting_only_check(make_pr(title=title), files).score == expected

    def test_files_without_patch_skipped(self):
        files = [make_file(None), make_file(pairs_patch(5, 0))]
        assert formatting_only_check(make_pr(title="Fix crash in parser"), files).score == 90
