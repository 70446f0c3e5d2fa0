from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ValidationStatus(str, Enum):
    PASS = "Pass"
    FAIL = "Fail"
    WARNING = "Warning"


class Severity(str, Enum):
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class RuleCategory(str, Enum):
    BUSINESS = "Business"
    DATA_QUALITY = "Schema/DataQuality"
    REGULATORY = "Regulatory"


class RuleType(str, Enum):
    SCALAR_TYPE_CHECK = "ScalarTypeCheck"
    BUSINESS_LOGIC = "BusinessLogic"
    CROSS_REFERENCE = "CrossReference"
    REGULATORY_COMPLIANCE = "RegulatoryCompliance"
    SUB_LEDGER_RECONCILIATION = "SubLedgerReconciliation"


class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    rule_id: str
    status: ValidationStatus
    severity: Severity
    message: str = ""

    record_id: Optional[str] = None
    record_type: Optional[str] = None
    field_name: Optional[str] = None
    current_value: Any = None
    expected_value: Any = None
    impact: Optional[str] = None

    # Only the synthetic result for an unknown rule id leaves these unset.
    category: Optional[RuleCategory] = None
    rule_type: Optional[RuleType] = None
    timestamp: datetime

    @property
    def is_issue(self) -> bool:
        return self.status != ValidationStatus.PASS


class ValidationSummary(BaseModel):
    total_rules: int
    evaluated_rules: int
    total_records: int

    # Unique rule ids, classified by the worst status each rule produced.
    passed_rules: int
    failed_rules: int
    warning_rules: int

    failed_results: int
    warning_results: int

    # Fail results only.
    critical_issues: int
    high_issues: int
    medium_issues: int
    low_issues: int

    overall_score: float
    category_scores: Dict[RuleCategory, float] = Field(default_factory=dict)
    category_rule_scores: Dict[RuleCategory, float] = Field(default_factory=dict)

    results: List[ValidationResult] = Field(default_factory=list)
    execution_time: float = 0.0
    last_run_timestamp: datetime

    incomplete: bool = False
    cache_hit: bool = False

    def results_for_rule(self, rule_id: str) -> List[ValidationResult]:
        return [r for r in self.results if r.rule_id == rule_id]

    def results_for_record(self, record_id: str) -> List[ValidationResult]:
        return [r for r in self.results if r.record_id == record_id]

    def failures(self) -> List[ValidationResult]:
        return [r for r in self.results if r.status == ValidationStatus.FAIL]


class RuleStatistics(BaseModel):
    total_rules: int
    by_category: Dict[RuleCategory, int] = Field(default_factory=dict)
    by_rule_type: Dict[RuleType, int] = Field(default_factory=dict)
    by_severity: Dict[Severity, int] = Field(default_factory=dict)


@dataclass(frozen=True)
class StatusOrdering:
    order: Dict[ValidationStatus, int]

    @classmethod
    def default(cls) -> "StatusOrdering":
        # Higher wins.
        return cls(
            order={
                ValidationStatus.FAIL: 30,
                ValidationStatus.WARNING: 20,
                ValidationStatus.PASS: 10,
            }
        )

    def worst(self, statuses: List[ValidationStatus]) -> ValidationStatus:
        if not statuses:
            return ValidationStatus.PASS
        return max(statuses, key=lambda s: self.order.get(s, 0))
