"""Tests for result tiers and snapshot loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.helpers_snapshot import write_snapshot
from warn_gate.snapshot import Snapshot, load_snapshot
from warn_gate.tiers import DEFAULT_TIERS, Tier, TierVocabulary


def test_default_tiers_order_and_defaults() -> None:
    assert DEFAULT_TIERS.names == ("SUCCESS", "UNSTABLE", "FAILURE")
    assert DEFAULT_TIERS.ok.name == "SUCCESS"
    assert DEFAULT_TIERS.default_warranted.name == "UNSTABLE"
    assert DEFAULT_TIERS.ok < DEFAULT_TIERS.tier("UNSTABLE") < DEFAULT_TIERS.tier("FAILURE")


def test_tier_lookup_is_case_insensitive_and_closed() -> None:
    assert DEFAULT_TIERS.tier("failure") == Tier(rank=2, name="FAILURE")
    with pytest.raises(ValueError, match="Expected one of: SUCCESS, UNSTABLE, FAILURE"):
        DEFAULT_TIERS.tier("ABORTED")


def test_worst_picks_most_severe_tier() -> None:
    tiers = [DEFAULT_TIERS.tier("UNSTABLE"), DEFAULT_TIERS.ok, DEFAULT_TIERS.tier("FAILURE")]
    assert DEFAULT_TIERS.worst(tiers).name == "FAILURE"
    assert DEFAULT_TIERS.worst([]) == DEFAULT_TIERS.ok


def test_vocabulary_rejects_invalid_definitions() -> None:
    with pytest.raises(ValueError, match="cannot be empty"):
        TierVocabulary(names=(), ok_name="ok", default_warranted_name="ok")
    with pytest.raises(ValueError, match="Duplicate"):
        TierVocabulary(names=("ok", "OK"), ok_name="ok", default_warranted_name="ok")
    with pytest.raises(ValueError, match="Unknown result 'red'"):
        TierVocabulary(names=("green", "amber"), ok_name="green", default_warranted_name="red")


def test_snapshot_rejects_negative_and_non_integer_counts() -> None:
    with pytest.raises(ValueError, match="zero or greater"):
        Snapshot(-1)
    with pytest.raises(ValueError, match="must be an integer"):
        Snapshot(True)
    with pytest.raises(ValueError, match="must be an integer"):
        Snapshot(1.5)  # type: ignore[arg-type]


def test_load_snapshot_reads_warning_count(tmp_path: Path) -> None:
    path = write_snapshot(tmp_path, "current.json", 42, label="build #12")
    assert load_snapshot(path) == Snapshot(warning_count=42, label="build #12")


def test_load_snapshot_counts_warning_list(tmp_path: Path) -> None:
    path = write_snapshot(tmp_path, "current.json", 7, as_list=True)
    assert load_snapshot(path).warning_count == 7


def test_load_snapshot_reports_bad_files(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid JSON"):
        load_snapshot(broken)

    wrong_shape = tmp_path / "list.json"
    wrong_shape.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError, match="must contain a JSON object"):
        load_snapshot(wrong_shape)

    missing_key = tmp_path / "empty.json"
    missing_key.write_text("{}", encoding="utf-8")
    with pytest.raises(ValueError, match="expected a 'warning_count' or 'warnings' key"):
        load_snapshot(missing_key)

    negative = tmp_path / "negative.json"
    negative.write_text('{"warning_count": -4}', encoding="utf-8")
    with pytest.raises(ValueError, match="zero or greater"):
        load_snapshot(negative)
