from __future__ import annotations

from typing import List

from ..config import CurrencyCodeRuleConfig
from ..models import RuleCategory, RuleType, Severity, ValidationResult
from ..rule import Rule
from ..snapshot import ValidationSnapshot


class SCH002_CURRENCY_CODE(Rule):
    rule_id = "SCH002"
    name = "Currency codes are recognised ISO codes"
    category = RuleCategory.DATA_QUALITY
    severity = Severity.MEDIUM
    rule_type = RuleType.SCALAR_TYPE_CHECK
    config_model = CurrencyCodeRuleConfig

    def evaluate(self, snapshot: ValidationSnapshot) -> List[ValidationResult]:
        cfg: CurrencyCodeRuleConfig = self.config
        allowed = set(cfg.valid_currencies)
        findings: List[ValidationResult] = []

        # Missing facility currency is reported by SCH001.
        for facility in snapshot.facilities:
            if facility.currency is None or facility.currency in allowed:
                continue
            findings.append(self._invalid(snapshot, facility.facility_id, "Facility", facility.currency))

        for txn in snapshot.gl_transactions:
            if txn.currency in allowed:
                continue
            findings.append(self._invalid(snapshot, txn.transaction_id, "GLTransaction", txn.currency))

        return self.conclude(snapshot, findings)

    def _invalid(
        self, snapshot: ValidationSnapshot, record_id: str | None, record_type: str, currency: str
    ) -> ValidationResult:
        return self.finding(
            snapshot,
            message=f"{record_type} {record_id} has unrecognised currency {currency!r}.",
            record_id=record_id,
            record_type=record_type,
            field_name="currency",
            current_value=currency,
            expected_value=sorted(self.config.valid_currencies),
        )
