from __future__ import annotations

from typing import Iterable, Optional

from ..entities import Derivative
from ..models import RuleCategory, RuleType, Severity, ValidationResult
from ..rule import RecordRule
from ..snapshot import ValidationSnapshot


class BR007_DERIVATIVE_NOTIONAL_POSITIVE(RecordRule):
    rule_id = "BR007"
    name = "Derivative notional amount is positive"
    category = RuleCategory.BUSINESS
    severity = Severity.HIGH
    rule_type = RuleType.BUSINESS_LOGIC

    def records(self, snapshot: ValidationSnapshot) -> Iterable[Derivative]:
        return snapshot.derivatives

    def check(self, trade: Derivative, snapshot: ValidationSnapshot) -> Optional[ValidationResult]:
        if trade.notional_amount > 0:
            return None
        return self.finding(
            snapshot,
            message=f"Derivative {trade.trade_id} has non-positive notional {trade.notional_amount}.",
            record_id=trade.trade_id,
            record_type="Derivative",
            field_name="notional_amount",
            current_value=trade.notional_amount,
            expected_value="> 0",
        )
