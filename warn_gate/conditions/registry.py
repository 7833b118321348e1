"""Process-wide registry of condition types."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass

from warn_gate.conditions.base import ConditionRule, RuleConfig
from warn_gate.conditions.errors import ConditionConfigError
from warn_gate.tiers import DEFAULT_TIERS, TierVocabulary

logger = logging.getLogger(__name__)

FieldCheck = Callable[[str, TierVocabulary], str | None]
ConditionFactory = Callable[[Mapping[str, str], TierVocabulary], ConditionRule]


@dataclass(frozen=True, slots=True)
class ParameterSpec:
    """One configurable parameter of a condition type.

    ``check`` returns an error message for an invalid raw value, or ``None``.
    A parameter without a ``default`` is left out of the validated mapping
    when unset, so the factory applies its own fallback.
    """

    name: str
    check: FieldCheck
    default: str | None = None
    description: str = ""


@dataclass(frozen=True, slots=True)
class ConditionSpec:
    """Registration record for a condition type."""

    condition_id: str
    name: str
    description: str
    parameters: tuple[ParameterSpec, ...]
    factory: ConditionFactory


@dataclass(frozen=True, slots=True)
class ConditionInfo:
    """Condition metadata for listing."""

    condition_id: str
    name: str
    description: str
    parameters: tuple[str, ...]


_REGISTRY: dict[str, ConditionSpec] = {}


def register_condition(spec: ConditionSpec) -> ConditionSpec:
    """Register a condition type under its symbolic id."""
    if spec.condition_id in _REGISTRY:
        raise ValueError(f"Condition id already registered: {spec.condition_id}")
    _REGISTRY[spec.condition_id] = spec
    logger.debug("Registered condition %s (%s)", spec.condition_id, spec.name)
    return spec


def unregister_condition(condition_id: str) -> None:
    """Remove a registered condition type."""
    if _REGISTRY.pop(condition_id, None) is None:
        raise ValueError(f"Unknown condition id: {condition_id}")


def get_condition_spec(condition_id: str) -> ConditionSpec:
    spec = _REGISTRY.get(condition_id)
    if spec is None:
        choices = ", ".join(sorted(_REGISTRY))
        raise ValueError(f"Unknown condition id '{condition_id}'. Expected one of: {choices}")
    return spec


def list_condition_info() -> list[ConditionInfo]:
    """Return metadata for all registered conditions, in registration order."""
    return [
        ConditionInfo(
            condition_id=spec.condition_id,
            name=spec.name,
            description=spec.description,
            parameters=tuple(param.name for param in spec.parameters),
        )
        for spec in _REGISTRY.values()
    ]


def check_field(
    condition_id: str,
    field: str,
    value: str,
    tiers: TierVocabulary = DEFAULT_TIERS,
) -> str | None:
    """Validate a single raw parameter value; return the error message or ``None``."""
    spec = get_condition_spec(condition_id)
    param = _find_parameter(spec, field)
    if param is None:
        return "Unknown parameter"
    return param.check(value, tiers)


def build_condition(config: RuleConfig, tiers: TierVocabulary = DEFAULT_TIERS) -> ConditionRule:
    """Validate raw parameters and build an immutable condition instance.

    Fields are checked in declaration order; the first failure raises
    ``ConditionConfigError`` and no instance is created.
    """
    spec = get_condition_spec(config.condition_id)
    known = {param.name for param in spec.parameters}
    for key in config.parameters:
        if key not in known:
            raise ConditionConfigError(spec.condition_id, key, "Unknown parameter")

    resolved: dict[str, str] = {}
    for param in spec.parameters:
        raw = config.parameters.get(param.name)
        if raw is None:
            if param.default is None:
                continue
            raw = param.default
        error = param.check(raw, tiers)
        if error is not None:
            raise ConditionConfigError(spec.condition_id, param.name, error)
        resolved[param.name] = raw

    rule = spec.factory(resolved, tiers)
    logger.debug("Built condition %s with %s", spec.condition_id, resolved)
    return rule


def build_conditions(
    configs: Iterable[RuleConfig],
    tiers: TierVocabulary = DEFAULT_TIERS,
) -> list[ConditionRule]:
    """Build several conditions, preserving order."""
    return [build_condition(config, tiers) for config in configs]


def _find_parameter(spec: ConditionSpec, field: str) -> ParameterSpec | None:
    for param in spec.parameters:
        if param.name == field:
            return param
    return None
