"""Absolute warning-count ceiling condition."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from warn_gate.conditions.base import Verdict
from warn_gate.conditions.checks import check_non_negative_integer, check_result_name
from warn_gate.conditions.registry import ConditionSpec, ParameterSpec, register_condition
from warn_gate.snapshot import Snapshot
from warn_gate.tiers import Tier, TierVocabulary

NAME = "Warning count absolute"


@dataclass(frozen=True, slots=True)
class WarningCountAbsoluteCondition:
    """Flags builds whose warning count is above a fixed ceiling."""

    count: int
    warranted: Tier
    ok: Tier
    condition_id: str = "warningCountAbsolute"
    name: str = NAME

    def validate(self, current: Snapshot | None, previous: Snapshot | None) -> Verdict:
        _ = previous
        if current is None:
            return Verdict(
                condition_id=self.condition_id,
                severity=self.ok,
                description=f"{NAME}: no current analysis to check",
            )
        if current.warning_count > self.count:
            return Verdict(
                condition_id=self.condition_id,
                severity=self.warranted,
                description=f"More than {self.count} warnings ({current.warning_count})",
                triggered=True,
            )
        return Verdict(
            condition_id=self.condition_id,
            severity=self.ok,
            description=f"At most {self.count} warnings ({current.warning_count})",
        )


def _build(
    parameters: Mapping[str, str],
    tiers: TierVocabulary,
) -> WarningCountAbsoluteCondition:
    warranted_name = parameters.get("warrantedResult")
    return WarningCountAbsoluteCondition(
        count=int(parameters["count"].strip(), 10),
        warranted=tiers.tier(warranted_name) if warranted_name else tiers.default_warranted,
        ok=tiers.ok,
    )


SPEC = register_condition(
    ConditionSpec(
        condition_id="warningCountAbsolute",
        name=NAME,
        description=(WarningCountAbsoluteCondition.__doc__ or "").strip(),
        parameters=(
            ParameterSpec(
                name="count",
                check=check_non_negative_integer,
                default="0",
                description="Highest warning count that still passes.",
            ),
            ParameterSpec(
                name="warrantedResult",
                check=check_result_name,
                description="Result reported when the ceiling is exceeded.",
            ),
        ),
        factory=_build,
    )
)
