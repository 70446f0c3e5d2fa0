from __future__ import annotations

from typing import Optional


class EngineError(Exception):
    """Base class for failures the engine converts into synthetic findings."""

    def __init__(self, rule_id: str, message: str):
        super().__init__(message)
        self.rule_id = rule_id
        self.message = message


class RuleExecutionError(EngineError):
    def __init__(self, rule_id: str, cause: Optional[BaseException] = None, message: str = ""):
        if not message:
            message = f"Rule execution failed: {cause}" if cause is not None else "Rule execution failed"
        super().__init__(rule_id, message)
        self.cause = cause


class RuleTimeoutError(EngineError):
    def __init__(self, rule_id: str, timeout_seconds: float):
        super().__init__(rule_id, f"Rule execution timed out after {timeout_seconds:g}s")
        self.timeout_seconds = timeout_seconds


class UnknownRuleError(EngineError, KeyError):
    def __init__(self, rule_id: str):
        super().__init__(rule_id, f"Validation rule not found: {rule_id}")

    def __str__(self) -> str:
        return self.message
