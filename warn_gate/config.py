"""Configuration loading for warn-gate."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from warn_gate.conditions.base import RuleConfig
from warn_gate.tiers import DEFAULT_TIERS, TierVocabulary

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = (".warn-gate.toml", "warn-gate.toml")
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TOOL_KEYS = ("warn_gate", "warn-gate")

DEFAULT_CONDITION_ID = "warningCountIncreaseOverall"


def default_conditions() -> list[RuleConfig]:
    """Condition set used when the config names none."""
    return [RuleConfig(condition_id=DEFAULT_CONDITION_ID, parameters={"percentage": "5.0"})]


@dataclass(slots=True)
class AppConfig:
    """Runtime configuration values resolved from project files."""

    format: str = "human"
    fail_on: str | None = None
    results: TierVocabulary = DEFAULT_TIERS
    conditions: list[RuleConfig] = field(default_factory=default_conditions)
    source: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "format": self.format,
            "fail_on": self.fail_on,
            "results": self.results.to_dict(),
            "conditions": [item.to_dict() for item in self.conditions],
            "source": self.source,
        }


def load_app_config(repo: Path, config_path: Path | None = None) -> AppConfig:
    """Load config from explicit path or repository-local files with precedence."""
    repo = repo.resolve()
    if config_path is not None:
        resolved = config_path if config_path.is_absolute() else (repo / config_path)
        if not resolved.exists():
            raise ValueError(f"Config file does not exist: {resolved}")
        mapping = _extract_config_mapping(_load_toml(resolved), source_path=resolved)
        return _from_mapping(mapping, source=str(resolved))

    for filename in CONFIG_FILENAMES:
        resolved = repo / filename
        if resolved.exists():
            mapping = _extract_config_mapping(_load_toml(resolved), source_path=resolved)
            return _from_mapping(mapping, source=str(resolved))

    pyproject_path = repo / PYPROJECT_FILENAME
    if pyproject_path.exists():
        mapping = _extract_config_mapping(_load_toml(pyproject_path), source_path=pyproject_path)
        if mapping:
            return _from_mapping(mapping, source=str(pyproject_path))

    logger.debug("No config found under %s; using defaults", repo)
    return AppConfig()


def default_config_template() -> str:
    """Return a starter config template."""
    return "\n".join(
        [
            'format = "human"',
            '# fail_on = "UNSTABLE"',
            "",
            "[results]",
            'order = ["SUCCESS", "UNSTABLE", "FAILURE"]',
            'ok = "SUCCESS"',
            'default_warranted = "UNSTABLE"',
            "",
            "[[conditions]]",
            'id = "warningCountIncreaseOverall"',
            'percentage = "5.0"',
            'warrantedResult = "UNSTABLE"',
            "",
            "# [[conditions]]",
            '# id = "warningCountAbsolute"',
            '# count = "250"',
            '# warrantedResult = "FAILURE"',
            "",
        ]
    )


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as file_obj:
            loaded = tomllib.load(file_obj)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in {path}: {exc}") from exc
    if not isinstance(loaded, dict):
        return {}
    return loaded


def _extract_config_mapping(loaded: dict[str, Any], *, source_path: Path) -> dict[str, Any]:
    if source_path.name == PYPROJECT_FILENAME:
        section = _find_pyproject_tool_section(loaded)
        return section if section is not None else {}

    tool_section = _find_pyproject_tool_section(loaded)
    if tool_section is not None:
        return tool_section
    return loaded


def _find_pyproject_tool_section(loaded: dict[str, Any]) -> dict[str, Any] | None:
    tool = loaded.get("tool")
    if not isinstance(tool, dict):
        return None
    for key in PYPROJECT_TOOL_KEYS:
        section = tool.get(key)
        if isinstance(section, dict):
            return section
    return None


def _from_mapping(mapping: dict[str, Any], *, source: str) -> AppConfig:
    results = _parse_results(_as_table(mapping.get("results"), "results"))

    raw_format = mapping.get("format", "human")
    format_value = str(raw_format).lower()
    if format_value not in {"human", "json"}:
        format_value = "human"

    raw_fail_on = mapping.get("fail_on")
    if raw_fail_on is None:
        fail_on: str | None = None
    else:
        fail_on = results.tier(_as_str(raw_fail_on, "fail_on")).name

    raw_conditions = mapping.get("conditions")
    if raw_conditions is None:
        conditions = default_conditions()
    else:
        conditions = _parse_conditions(raw_conditions)

    logger.debug("Loaded config from %s with %d condition(s)", source, len(conditions))
    return AppConfig(
        format=format_value,
        fail_on=fail_on,
        results=results,
        conditions=conditions,
        source=source,
    )


def _parse_results(value: dict[str, Any]) -> TierVocabulary:
    if not value:
        return DEFAULT_TIERS

    raw_order = value.get("order")
    names = tuple(_as_str_list(raw_order, "results.order")) if raw_order is not None else None
    if names is None:
        names = DEFAULT_TIERS.names
        default_ok = DEFAULT_TIERS.ok_name
        default_warranted = DEFAULT_TIERS.default_warranted_name
    else:
        if not names:
            raise ValueError("results.order cannot be empty")
        default_ok = names[0]
        default_warranted = names[1] if len(names) > 1 else names[0]

    return TierVocabulary(
        names=names,
        ok_name=_as_str(value.get("ok", default_ok), "results.ok"),
        default_warranted_name=_as_str(
            value.get("default_warranted", default_warranted),
            "results.default_warranted",
        ),
    )


def _parse_conditions(value: Any) -> list[RuleConfig]:
    items = _as_table_list(value, "conditions")
    parsed: list[RuleConfig] = []
    for index, item in enumerate(items):
        field_name = f"conditions[{index}]"
        condition_id = _as_str(item.get("id"), f"{field_name}.id")
        parameters: dict[str, str] = {}
        for key, raw in item.items():
            if key == "id":
                continue
            parameters[key] = _as_param(raw, f"{field_name}.{key}")
        parsed.append(RuleConfig(condition_id=condition_id, parameters=parameters))
    return parsed


def _as_param(raw: Any, field_name: str) -> str:
    if isinstance(raw, bool) or not isinstance(raw, (str, int, float)):
        raise ValueError(f"{field_name} must be a string or number")
    return str(raw)


def _as_table(value: Any, field_name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{field_name} must be a table/object")
    return value


def _as_table_list(value: Any, field_name: str) -> list[dict[str, Any]]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{field_name} must be a list of tables")
    output: list[dict[str, Any]] = []
    for item in value:
        if not isinstance(item, dict):
            raise ValueError(f"{field_name} must be a list of tables")
        output.append(item)
    return output


def _as_str_list(value: Any, field_name: str) -> list[str]:
    if not isinstance(value, list):
        raise ValueError(f"{field_name} must be a list of strings")
    items: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"{field_name} must be a list of strings")
        items.append(item)
    return items


def _as_str(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string")
    return value
