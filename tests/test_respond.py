"""Tests for response planning."""

import pytest

from slopgate.config import DEFAULT_CONFIG, parse_config
from slopgate.models import CheckId, CheckResult, Verdict
from slopgate.respond import (
    ALL_LABEL_NAMES,
    LABELS,
    build_results_table,
    plan_response,
)
from slopgate.scoring import calculate_score


def result_with(score):
    """A result whose only check is velocity at the given score."""
    return calculate_score([CheckResult(CheckId.VELOCITY, score, f"{score} points of velocity")])


class TestLabels:
    def test_one_label_per_verdict(self):
        assert set(LABELS) == set(Verdict)
        assert LABELS[Verdict.PASS].name == "slopgate: clean"
        assert LABELS[Verdict.BLOCK].name == "slopgate: blocked"

    def test_all_names_removed_first(self):
        plan = plan_response(result_with(0), DEFAULT_CONFIG)
        assert plan.remove_labels == ALL_LABEL_NAMES
        assert len(ALL_LABEL_NAMES) == 4


class TestPlanResponse:
    def test_pass(self):
        plan = plan_response(result_with(10), DEFAULT_CONFIG)
        assert plan.verdict is Verdict.PASS
        assert plan.label == LABELS[Verdict.PASS]
        assert plan.comment is None
        assert not plan.request_changes
        assert not plan.close

    def test_warn(self):
        plan = plan_response(result_with(40), DEFAULT_CONFIG)
        assert plan.label.name == "slopgate: review"
        assert plan.comment.startswith("## SlopGate Review")
        assert "40 points of velocity" in plan.comment
        assert not plan.request_changes

    def test_flag_requests_changes(self):
        plan = plan_response(result_with(65), DEFAULT_CONFIG)
        assert plan.label.name == "slopgate: flagged"
        assert plan.comment.startswith("## SlopGate: PR Flagged")
        assert plan.request_changes
        assert not plan.close

    def test_block_without_auto_close(self):
        plan = plan_response(result_with(90), DEFAULT_CONFIG)
        assert plan.label.name == "slopgate: blocked"
        assert plan.comment.startswith("## SlopGate: PR Blocked")
        assert "Auto-close is disabled" in plan.comment
        assert not plan.close

    def test_block_with_auto_close(self):
        plan = plan_response(result_with(90), parse_config("auto_close: true\n"))
        assert plan.close
        assert "automatically closed" in plan.comment

    @pytest.mark.parametrize("score", [0, 40, 65])
    def test_auto_close_only_applies_to_block(self, score):
        assert not plan_response(result_with(score), parse_config("auto_close: true\n")).close


class TestResultsTable:
    def test_rows_and_total(self):
        result = calculate_score([
            CheckResult(CheckId.VELOCITY, 100, "Extreme velocity"),
            CheckResult(CheckId.SHOTGUN, 0, "Unique"),
        ])
        table = build_results_table(result)
        assert "| PR Velocity | 100 | 80 | 80.0 | Extreme velocity |" in table
        assert "| Shotgun Pattern | 0 | 90 | 0.0 | Unique |" in table
        assert table.endswith("**Final Score: 47/100** (Verdict: WARN)")
