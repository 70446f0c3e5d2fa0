from __future__ import annotations

from typing import Iterable, Optional

from ..entities import GLTransaction
from ..models import RuleCategory, RuleType, Severity, ValidationResult, ValidationStatus
from ..rule import RecordRule
from ..snapshot import ValidationSnapshot


class XR003_GL_FACILITY_EXISTS(RecordRule):
    rule_id = "XR003"
    name = "GL transaction facility exists"
    category = RuleCategory.DATA_QUALITY
    severity = Severity.MEDIUM
    rule_type = RuleType.CROSS_REFERENCE

    def records(self, snapshot: ValidationSnapshot) -> Iterable[GLTransaction]:
        return (t for t in snapshot.gl_transactions if t.facility_id)

    def check(self, txn: GLTransaction, snapshot: ValidationSnapshot) -> Optional[ValidationResult]:
        if txn.facility_id in snapshot.facilities_by_id:
            return None
        return self.finding(
            snapshot,
            status=ValidationStatus.WARNING,
            message=f"GL transaction {txn.transaction_id} references unknown facility {txn.facility_id}.",
            record_id=txn.transaction_id,
            record_type="GLTransaction",
            field_name="facility_id",
            current_value=txn.facility_id,
        )
