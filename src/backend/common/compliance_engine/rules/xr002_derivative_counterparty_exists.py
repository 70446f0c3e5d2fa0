from __future__ import annotations

from typing import Iterable, Optional

from ..entities import Derivative
from ..models import RuleCategory, RuleType, Severity, ValidationResult
from ..rule import RecordRule
from ..snapshot import ValidationSnapshot


class XR002_DERIVATIVE_COUNTERPARTY_EXISTS(RecordRule):
    rule_id = "XR002"
    name = "Derivative counterparty exists"
    category = RuleCategory.DATA_QUALITY
    severity = Severity.HIGH
    rule_type = RuleType.CROSS_REFERENCE

    def records(self, snapshot: ValidationSnapshot) -> Iterable[Derivative]:
        return snapshot.derivatives

    def check(self, trade: Derivative, snapshot: ValidationSnapshot) -> Optional[ValidationResult]:
        if trade.counterparty_id in snapshot.counterparties_by_id:
            return None
        return self.finding(
            snapshot,
            message=f"Derivative {trade.trade_id} references unknown counterparty {trade.counterparty_id!r}.",
            record_id=trade.trade_id,
            record_type="Derivative",
            field_name="counterparty_id",
            current_value=trade.counterparty_id,
        )
