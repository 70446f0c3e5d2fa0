from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional, Type

from .config import RuleConfigBase
from .models import RuleCategory, RuleType, Severity, ValidationResult, ValidationStatus
from .snapshot import ValidationSnapshot


class Rule(ABC):
    rule_id: str
    name: str
    category: RuleCategory
    severity: Severity
    rule_type: RuleType
    description: str = ""
    config_model: Type[RuleConfigBase] = RuleConfigBase

    def __init__(self, config: Optional[RuleConfigBase] = None):
        if not getattr(self, "rule_id", None):
            raise ValueError("Rule must define rule_id")
        for attr in ("name", "category", "severity", "rule_type"):
            if getattr(self, attr, None) is None:
                raise ValueError(f"Rule {self.rule_id} must define {attr}")
        self.config = config if config is not None else self.config_model()
        self._sealed = True

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_sealed", False):
            raise AttributeError(f"Rule {self.rule_id} is immutable once constructed")
        super().__setattr__(name, value)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.rule_id}>"

    @abstractmethod
    def evaluate(self, snapshot: ValidationSnapshot) -> List[ValidationResult]:  # pragma: no cover
        raise NotImplementedError

    def finding(
        self,
        snapshot: ValidationSnapshot,
        *,
        message: str,
        status: ValidationStatus = ValidationStatus.FAIL,
        severity: Optional[Severity] = None,
        record_id: Optional[str] = None,
        record_type: Optional[str] = None,
        field_name: Optional[str] = None,
        current_value: Any = None,
        expected_value: Any = None,
        impact: Optional[str] = None,
    ) -> ValidationResult:
        return ValidationResult(
            rule_id=self.rule_id,
            status=status,
            severity=severity or self.severity,
            message=message,
            record_id=record_id,
            record_type=record_type,
            field_name=field_name,
            current_value=current_value,
            expected_value=expected_value,
            impact=impact,
            category=self.category,
            rule_type=self.rule_type,
            timestamp=snapshot.generated_at,
        )

    def passed(self, snapshot: ValidationSnapshot, message: str = "") -> ValidationResult:
        return ValidationResult(
            rule_id=self.rule_id,
            status=ValidationStatus.PASS,
            severity=self.severity,
            message=message or f"{self.name}: no issues found.",
            category=self.category,
            rule_type=self.rule_type,
            timestamp=snapshot.generated_at,
        )

    def conclude(
        self, snapshot: ValidationSnapshot, findings: List[ValidationResult]
    ) -> List[ValidationResult]:
        if findings:
            return findings
        return [self.passed(snapshot)]


class RecordRule(Rule):
    """Rule that inspects records one at a time and reports at most one finding each."""

    @abstractmethod
    def records(self, snapshot: ValidationSnapshot) -> Iterable[Any]:  # pragma: no cover
        raise NotImplementedError

    @abstractmethod
    def check(self, record: Any, snapshot: ValidationSnapshot) -> Optional[ValidationResult]:  # pragma: no cover
        raise NotImplementedError

    def evaluate(self, snapshot: ValidationSnapshot) -> List[ValidationResult]:
        findings: List[ValidationResult] = []
        for record in self.records(snapshot):
            result = self.check(record, snapshot)
            if result is not None:
                findings.append(result)
        return self.conclude(snapshot, findings)
