"""Tests for condition evaluation orchestration."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from warn_gate.conditions import RuleConfig, build_condition, build_conditions
from warn_gate.evaluator import evaluate, evaluate_conditions
from warn_gate.snapshot import Snapshot
from warn_gate.tiers import DEFAULT_TIERS


def test_evaluate_returns_rule_verdict_unchanged() -> None:
    rule = build_condition(RuleConfig("warningCountIncreaseOverall", {"percentage": "5.0"}))
    current, previous = Snapshot(110), Snapshot(100)
    assert evaluate(rule, current, previous) == rule.validate(current, previous)


def test_evaluate_conditions_uses_worst_verdict() -> None:
    rules = build_conditions(
        [
            RuleConfig("warningCountIncreaseOverall", {"percentage": "5.0"}),
            RuleConfig("warningCountAbsolute", {"count": "100", "warrantedResult": "FAILURE"}),
        ]
    )
    result = evaluate_conditions(rules, Snapshot(120), Snapshot(100))
    assert result.result.name == "FAILURE"
    assert [verdict.severity.name for verdict in result.verdicts] == ["UNSTABLE", "FAILURE"]
    assert len(result.triggered) == 2


def test_evaluate_conditions_is_ok_when_nothing_triggers() -> None:
    rules = build_conditions([RuleConfig("warningCountIncreaseOverall", {})])
    result = evaluate_conditions(rules, Snapshot(101), Snapshot(100))
    assert result.result == DEFAULT_TIERS.ok
    assert result.triggered == []


def test_evaluate_conditions_without_rules_is_ok() -> None:
    result = evaluate_conditions([], Snapshot(1), None)
    assert result.result == DEFAULT_TIERS.ok
    assert result.verdicts == []
    assert result.to_dict() == {"result": "SUCCESS", "verdicts": []}


def test_shared_rule_instance_is_safe_across_threads() -> None:
    rule = build_condition(RuleConfig("warningCountIncreaseOverall", {"percentage": "10"}))
    pairs = [(Snapshot(100 + step), Snapshot(100)) for step in range(40)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        verdicts = list(pool.map(lambda pair: evaluate(rule, *pair), pairs))

    for (current, _previous), verdict in zip(pairs, verdicts, strict=True):
        expected_triggered = current.warning_count - 100 > 10
        assert verdict.triggered is expected_triggered
        assert f"{current.warning_count - 100} out of 100" in verdict.description
