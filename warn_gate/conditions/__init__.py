"""Conditions package.

Importing this package registers the built-in condition types.
"""

# Registration order is listing order.
from warn_gate.conditions import warning_count_increase  # isort: skip
from warn_gate.conditions import warning_count_absolute  # isort: skip
from warn_gate.conditions.base import ConditionRule, RuleConfig, Verdict
from warn_gate.conditions.errors import ConditionConfigError
from warn_gate.conditions.registry import (
    ConditionInfo,
    ConditionSpec,
    ParameterSpec,
    build_condition,
    build_conditions,
    check_field,
    get_condition_spec,
    list_condition_info,
    register_condition,
    unregister_condition,
)
from warn_gate.conditions.warning_count_absolute import WarningCountAbsoluteCondition
from warn_gate.conditions.warning_count_increase import WarningCountIncreaseOverallCondition

__all__ = [
    "ConditionConfigError",
    "ConditionInfo",
    "ConditionRule",
    "ConditionSpec",
    "ParameterSpec",
    "RuleConfig",
    "Verdict",
    "WarningCountAbsoluteCondition",
    "WarningCountIncreaseOverallCondition",
    "build_condition",
    "build_conditions",
    "check_field",
    "get_condition_spec",
    "list_condition_info",
    "register_condition",
    "unregister_condition",
    "warning_count_absolute",
    "warning_count_increase",
]
