from __future__ import annotations

from typing import Iterable, Optional

from ..entities import Counterparty
from ..models import RuleCategory, RuleType, Severity, ValidationResult, ValidationStatus
from ..rule import RecordRule
from ..snapshot import ValidationSnapshot
from ..type_validators import is_valid_sector_code


class SCH004_SECTOR_CODE_FORMAT(RecordRule):
    rule_id = "SCH004"
    name = "Sector code is a 5-digit SSIC code"
    category = RuleCategory.DATA_QUALITY
    severity = Severity.LOW
    rule_type = RuleType.SCALAR_TYPE_CHECK

    def records(self, snapshot: ValidationSnapshot) -> Iterable[Counterparty]:
        return (cp for cp in snapshot.counterparties if cp.sector_code is not None)

    def check(self, cp: Counterparty, snapshot: ValidationSnapshot) -> Optional[ValidationResult]:
        if is_valid_sector_code(cp.sector_code):
            return None
        return self.finding(
            snapshot,
            status=ValidationStatus.WARNING,
            message=f"Counterparty {cp.counterparty_id} sector code {cp.sector_code!r} is not 5 digits.",
            record_id=cp.counterparty_id,
            record_type="Counterparty",
            field_name="sector_code",
            current_value=cp.sector_code,
            expected_value="5 digits",
        )
