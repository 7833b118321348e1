"""Condition evaluation orchestration."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from warn_gate.conditions.base import ConditionRule, Verdict
from warn_gate.snapshot import Snapshot
from warn_gate.tiers import DEFAULT_TIERS, Tier, TierVocabulary

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class EvaluationResult:
    """Overall result and per-condition verdicts for one build."""

    result: Tier
    verdicts: list[Verdict] = field(default_factory=list)

    @property
    def triggered(self) -> list[Verdict]:
        return [verdict for verdict in self.verdicts if verdict.triggered]

    def to_dict(self) -> dict[str, Any]:
        return {
            "result": self.result.name,
            "verdicts": [verdict.to_dict() for verdict in self.verdicts],
        }


def evaluate(
    rule: ConditionRule,
    current: Snapshot | None,
    previous: Snapshot | None,
) -> Verdict:
    """Apply one configured condition and return its verdict unchanged."""
    verdict = rule.validate(current, previous)
    logger.debug(
        "Condition %s -> %s: %s",
        rule.condition_id,
        verdict.severity.name,
        verdict.description,
    )
    return verdict


def evaluate_conditions(
    rules: Iterable[ConditionRule],
    current: Snapshot | None,
    previous: Snapshot | None,
    *,
    tiers: TierVocabulary = DEFAULT_TIERS,
) -> EvaluationResult:
    """Apply each condition in order; the overall result is the worst verdict."""
    verdicts = [evaluate(rule, current, previous) for rule in rules]
    result = tiers.worst(verdict.severity for verdict in verdicts)
    logger.debug("Overall result %s from %d condition(s)", result.name, len(verdicts))
    return EvaluationResult(result=result, verdicts=verdicts)
