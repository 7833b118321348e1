"""Overall warning-count increase condition."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from warn_gate.conditions.base import Verdict
from warn_gate.conditions.checks import check_non_negative_decimal, check_result_name
from warn_gate.conditions.registry import ConditionSpec, ParameterSpec, register_condition
from warn_gate.snapshot import Snapshot
from warn_gate.tiers import Tier, TierVocabulary

NAME = "Warning count increase: overall"
DEFAULT_PERCENTAGE = "5.0"


@dataclass(frozen=True, slots=True)
class WarningCountIncreaseOverallCondition:
    """Flags builds whose warning count grew by more than a percentage of the previous build."""

    percentage: float
    warranted: Tier
    ok: Tier
    condition_id: str = "warningCountIncreaseOverall"
    name: str = NAME

    def validate(self, current: Snapshot | None, previous: Snapshot | None) -> Verdict:
        if current is None:
            return self._ok(f"{NAME}: no current analysis to compare")
        if previous is None:
            return self._ok(f"{NAME}: no previous analysis to compare against")

        previous_count = previous.warning_count
        diff = current.warning_count - previous_count

        if previous_count == 0:
            if diff > 0:
                return self._warranted(
                    f"More than {self.percentage:.2f}% increase in warnings "
                    f"(baseline was zero, {diff} new warnings)"
                )
            return self._ok(
                f"At most {self.percentage:.2f}% increase in warnings "
                "(baseline was zero, no new warnings)"
            )

        ratio = diff * 100 / previous_count
        detail = f"({ratio:.2f}%, {diff} out of {previous_count})"
        if ratio > self.percentage:
            return self._warranted(
                f"More than {self.percentage:.2f}% increase in warnings {detail}"
            )
        return self._ok(f"At most {self.percentage:.2f}% increase in warnings {detail}")

    def _ok(self, description: str) -> Verdict:
        return Verdict(
            condition_id=self.condition_id,
            severity=self.ok,
            description=description,
        )

    def _warranted(self, description: str) -> Verdict:
        return Verdict(
            condition_id=self.condition_id,
            severity=self.warranted,
            description=description,
            triggered=True,
        )


def _build(
    parameters: Mapping[str, str],
    tiers: TierVocabulary,
) -> WarningCountIncreaseOverallCondition:
    warranted_name = parameters.get("warrantedResult")
    return WarningCountIncreaseOverallCondition(
        percentage=float(parameters["percentage"]),
        warranted=tiers.tier(warranted_name) if warranted_name else tiers.default_warranted,
        ok=tiers.ok,
    )


SPEC = register_condition(
    ConditionSpec(
        condition_id="warningCountIncreaseOverall",
        name=NAME,
        description=(WarningCountIncreaseOverallCondition.__doc__ or "").strip(),
        parameters=(
            ParameterSpec(
                name="percentage",
                check=check_non_negative_decimal,
                default=DEFAULT_PERCENTAGE,
                description="Allowed increase, in percent of the previous warning count.",
            ),
            ParameterSpec(
                name="warrantedResult",
                check=check_result_name,
                description="Result reported when the threshold is exceeded.",
            ),
        ),
        factory=_build,
    )
)
