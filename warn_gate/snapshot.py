"""Build analysis snapshots."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Warning count recorded for one build."""

    warning_count: int
    label: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.warning_count, bool) or not isinstance(self.warning_count, int):
            raise ValueError("warning_count must be an integer")
        if self.warning_count < 0:
            raise ValueError(f"warning_count must be zero or greater, got {self.warning_count}")

    def to_dict(self) -> dict[str, Any]:
        return {"warning_count": self.warning_count, "label": self.label}


def load_snapshot(path: Path) -> Snapshot:
    """Load a snapshot from a JSON file.

    The file holds an object with either an integer ``warning_count`` or a
    ``warnings`` list whose length is used as the count.
    """
    try:
        loaded = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(loaded, dict):
        raise ValueError(f"Snapshot file {path} must contain a JSON object")
    return snapshot_from_mapping(loaded, source=str(path))


def snapshot_from_mapping(mapping: dict[str, Any], *, source: str = "snapshot") -> Snapshot:
    """Build a snapshot from a decoded mapping."""
    raw_label = mapping.get("label")
    if raw_label is not None and not isinstance(raw_label, str):
        raise ValueError(f"{source}: label must be a string")

    if "warning_count" in mapping:
        raw_count = mapping["warning_count"]
        if isinstance(raw_count, bool) or not isinstance(raw_count, int):
            raise ValueError(f"{source}: warning_count must be an integer")
        count = raw_count
    elif "warnings" in mapping:
        warnings = mapping["warnings"]
        if not isinstance(warnings, list):
            raise ValueError(f"{source}: warnings must be a list")
        count = len(warnings)
    else:
        raise ValueError(f"{source}: expected a 'warning_count' or 'warnings' key")

    try:
        return Snapshot(warning_count=count, label=raw_label)
    except ValueError as exc:
        raise ValueError(f"{source}: {exc}") from exc
