"""Tests for the overall warning-count increase condition."""

from __future__ import annotations

import pytest

from warn_gate.conditions import RuleConfig, WarningCountIncreaseOverallCondition, build_condition
from warn_gate.snapshot import Snapshot
from warn_gate.tiers import DEFAULT_TIERS, TierVocabulary


def _condition(percentage: float = 5.0, warranted: str = "UNSTABLE"):
    return WarningCountIncreaseOverallCondition(
        percentage=percentage,
        warranted=DEFAULT_TIERS.tier(warranted),
        ok=DEFAULT_TIERS.ok,
    )


def test_increase_above_threshold_reports_warranted_tier() -> None:
    verdict = _condition().validate(Snapshot(110), Snapshot(100))
    assert verdict.severity.name == "UNSTABLE"
    assert verdict.triggered is True
    assert verdict.condition_id == "warningCountIncreaseOverall"
    assert verdict.description == (
        "More than 5.00% increase in warnings (10.00%, 10 out of 100)"
    )


def test_increase_below_threshold_is_ok() -> None:
    verdict = _condition().validate(Snapshot(104), Snapshot(100))
    assert verdict.severity == DEFAULT_TIERS.ok
    assert verdict.triggered is False
    assert verdict.description == "At most 5.00% increase in warnings (4.00%, 4 out of 100)"


@pytest.mark.parametrize(
    ("previous", "current", "threshold"),
    [(100, 105, 5.0), (200, 214, 7.0), (40, 50, 25.0), (100, 100, 0.0)],
)
def test_ratio_equal_to_threshold_is_ok(previous: int, current: int, threshold: float) -> None:
    verdict = _condition(percentage=threshold).validate(Snapshot(current), Snapshot(previous))
    assert verdict.severity == DEFAULT_TIERS.ok


def test_any_increase_triggers_with_zero_threshold() -> None:
    verdict = _condition(percentage=0.0).validate(Snapshot(1001), Snapshot(1000))
    assert verdict.triggered is True


def test_decrease_is_ok_with_negative_ratio_in_description() -> None:
    verdict = _condition().validate(Snapshot(90), Snapshot(100))
    assert verdict.severity == DEFAULT_TIERS.ok
    assert "(-10.00%, -10 out of 100)" in verdict.description


def test_missing_current_is_ok_regardless_of_previous() -> None:
    for previous in (None, Snapshot(0), Snapshot(500)):
        verdict = _condition().validate(None, previous)
        assert verdict.severity == DEFAULT_TIERS.ok
        assert verdict.triggered is False
        assert "no current analysis" in verdict.description


def test_missing_previous_is_ok_regardless_of_current() -> None:
    for current in (Snapshot(0), Snapshot(10_000)):
        verdict = _condition().validate(current, None)
        assert verdict.severity == DEFAULT_TIERS.ok
        assert "no previous analysis" in verdict.description


def test_zero_baseline_with_new_warnings_reports_warranted_tier() -> None:
    verdict = _condition(warranted="FAILURE").validate(Snapshot(3), Snapshot(0))
    assert verdict.severity.name == "FAILURE"
    assert verdict.triggered is True
    assert "baseline was zero" in verdict.description
    assert "3 new warnings" in verdict.description


def test_zero_baseline_without_new_warnings_is_ok() -> None:
    verdict = _condition().validate(Snapshot(0), Snapshot(0))
    assert verdict.severity == DEFAULT_TIERS.ok
    assert "baseline was zero" in verdict.description


def test_same_inputs_give_identical_verdicts() -> None:
    condition = _condition()
    current, previous = Snapshot(130), Snapshot(100)
    first = condition.validate(current, previous)
    second = condition.validate(current, previous)
    assert first == second
    assert condition.validate(Snapshot(101), previous) != first


def test_condition_instances_are_immutable() -> None:
    condition = _condition()
    with pytest.raises(AttributeError):
        condition.percentage = 50.0  # type: ignore[misc]


def test_built_condition_defaults_to_unstable_and_five_percent() -> None:
    condition = build_condition(RuleConfig("warningCountIncreaseOverall", {}))
    assert isinstance(condition, WarningCountIncreaseOverallCondition)
    assert condition.percentage == 5.0
    assert condition.warranted.name == "UNSTABLE"


def test_built_condition_uses_host_vocabulary() -> None:
    tiers = TierVocabulary(
        names=("pass", "warn", "block"),
        ok_name="pass",
        default_warranted_name="warn",
    )
    condition = build_condition(
        RuleConfig("warningCountIncreaseOverall", {"percentage": "10", "warrantedResult": "BLOCK"}),
        tiers,
    )
    breach = condition.validate(Snapshot(12), Snapshot(10))
    assert breach.severity.name == "block"
    assert breach.severity == tiers.tier("block")

    fine = condition.validate(Snapshot(11), Snapshot(10))
    assert fine.severity.name == "pass"
