"""Output rendering."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any

import click

from warn_gate import __version__
from warn_gate.evaluator import EvaluationResult
from warn_gate.snapshot import Snapshot
from warn_gate.tiers import Tier, TierVocabulary


def render_human(
    evaluation: EvaluationResult,
    *,
    tiers: TierVocabulary,
    current: Snapshot | None,
    previous: Snapshot | None,
) -> str:
    """Render a compact colorized summary."""
    color = _tier_color(evaluation.result, tiers)
    lines: list[str] = [
        click.style(f"Result: {evaluation.result.name}", fg=color, bold=True),
        f"Current warnings: {_describe_snapshot(current)}",
        f"Previous warnings: {_describe_snapshot(previous)}",
    ]
    if evaluation.verdicts:
        lines.append(click.style("Conditions:", bold=True))
        for verdict in evaluation.verdicts:
            marker = click.style(
                verdict.severity.name,
                fg=_tier_color(verdict.severity, tiers),
            )
            lines.append(f"- [{verdict.condition_id}] {marker} {verdict.description}")
    return "\n".join(lines)


def render_json(
    evaluation: EvaluationResult,
    *,
    current: Snapshot | None,
    previous: Snapshot | None,
    config_source: str | None = None,
) -> str:
    """Render stable JSON output for CI and automation."""
    payload = build_json_payload(
        evaluation,
        current=current,
        previous=previous,
        config_source=config_source,
    )
    return json.dumps(payload, sort_keys=True)


def build_json_payload(
    evaluation: EvaluationResult,
    *,
    current: Snapshot | None,
    previous: Snapshot | None,
    config_source: str | None = None,
) -> dict[str, Any]:
    """Build stable JSON payload for CI and automation."""
    payload = evaluation.to_dict()
    payload["current"] = current.to_dict() if current is not None else None
    payload["previous"] = previous.to_dict() if previous is not None else None
    payload["meta"] = {
        "generated_at": datetime.now(tz=UTC)
        .replace(microsecond=0)
        .isoformat()
        .replace("+00:00", "Z"),
        "config_source": config_source,
        "version": __version__,
    }
    return payload


def _describe_snapshot(snapshot: Snapshot | None) -> str:
    if snapshot is None:
        return "n/a"
    if snapshot.label:
        return f"{snapshot.warning_count} ({snapshot.label})"
    return str(snapshot.warning_count)


def _tier_color(tier: Tier, tiers: TierVocabulary) -> str:
    if tier == tiers.ok:
        return "green"
    if tier.rank >= len(tiers.names) - 1:
        return "red"
    return "yellow"
