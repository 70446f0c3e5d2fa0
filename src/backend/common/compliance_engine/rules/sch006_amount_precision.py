from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Tuple

from ..models import RuleCategory, RuleType, Severity, ValidationResult
from ..rule import Rule
from ..snapshot import ValidationSnapshot
from ..type_validators import is_number_14_2

FACILITY_AMOUNTS = ("outstanding_amount", "limit_amount", "loss_allowance", "property_value")
DERIVATIVE_AMOUNTS = ("notional_amount", "positive_fair_value", "negative_fair_value")


class SCH006_AMOUNT_PRECISION(Rule):
    rule_id = "SCH006"
    name = "Monetary amounts fit the 14.2 reporting format"
    category = RuleCategory.DATA_QUALITY
    severity = Severity.MEDIUM
    rule_type = RuleType.SCALAR_TYPE_CHECK

    def _records(self, snapshot: ValidationSnapshot) -> Iterator[Tuple[str, Optional[str], object, Sequence[str]]]:
        for facility in snapshot.facilities:
            yield "Facility", facility.facility_id, facility, FACILITY_AMOUNTS
        for trade in snapshot.derivatives:
            yield "Derivative", trade.trade_id, trade, DERIVATIVE_AMOUNTS
        for txn in snapshot.gl_transactions:
            yield "GLTransaction", txn.transaction_id, txn, ("amount",)

    def evaluate(self, snapshot: ValidationSnapshot) -> List[ValidationResult]:
        findings: List[ValidationResult] = []
        for record_type, record_id, record, names in self._records(snapshot):
            bad = [
                (name, getattr(record, name))
                for name in names
                if getattr(record, name) is not None and not is_number_14_2(getattr(record, name))
            ]
            if not bad:
                continue
            listed = ", ".join(f"{name} {value}" for name, value in bad)
            findings.append(
                self.finding(
                    snapshot,
                    message=f"{record_type} {record_id} amounts do not fit 14.2: {listed}.",
                    record_id=record_id,
                    record_type=record_type,
                    field_name=",".join(name for name, _ in bad),
                    current_value=bad[0][1] if len(bad) == 1 else [value for _, value in bad],
                    expected_value="at most 14 integer and 2 decimal digits",
                )
            )
        return self.conclude(snapshot, findings)
