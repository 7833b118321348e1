"""Base condition protocol and verdict model."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from warn_gate.snapshot import Snapshot
from warn_gate.tiers import Tier


@dataclass(frozen=True, slots=True)
class Verdict:
    """Result tier and explanation produced by one condition evaluation."""

    condition_id: str
    severity: Tier
    description: str
    triggered: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "condition_id": self.condition_id,
            "severity": self.severity.name,
            "description": self.description,
            "triggered": self.triggered,
        }


@dataclass(frozen=True, slots=True)
class RuleConfig:
    """Untyped condition configuration, validated when a rule is built."""

    condition_id: str
    parameters: Mapping[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.condition_id, **dict(self.parameters)}


class ConditionRule(Protocol):
    """Protocol for configured regression conditions."""

    condition_id: str
    name: str

    def validate(self, current: Snapshot | None, previous: Snapshot | None) -> Verdict:
        """Compare the current snapshot with the previous one and return a verdict."""
