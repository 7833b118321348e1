"""Condition configuration errors."""

from __future__ import annotations


class ConditionConfigError(ValueError):
    """Raised when a condition parameter fails validation."""

    def __init__(self, condition_id: str, field: str, message: str) -> None:
        super().__init__(f"{condition_id}.{field}: {message}")
        self.condition_id = condition_id
        self.field = field
        self.message = message
