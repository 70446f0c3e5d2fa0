from __future__ import annotations

from typing import Iterable, Optional

from ..entities import Counterparty
from ..models import RuleCategory, RuleType, Severity, ValidationResult
from ..rule import RecordRule
from ..snapshot import ValidationSnapshot
from ..type_validators import TEXT_MAX_LENGTH, is_valid_text


class SCH008_COUNTERPARTY_NAME(RecordRule):
    rule_id = "SCH008"
    name = "Counterparty name present and within length"
    category = RuleCategory.DATA_QUALITY
    severity = Severity.LOW
    rule_type = RuleType.SCALAR_TYPE_CHECK

    def records(self, snapshot: ValidationSnapshot) -> Iterable[Counterparty]:
        return snapshot.counterparties

    def check(self, cp: Counterparty, snapshot: ValidationSnapshot) -> Optional[ValidationResult]:
        if cp.name.strip() and is_valid_text(cp.name, max_length=TEXT_MAX_LENGTH, min_length=1):
            return None
        return self.finding(
            snapshot,
            message=f"Counterparty {cp.counterparty_id} name is empty or longer than {TEXT_MAX_LENGTH} characters.",
            record_id=cp.counterparty_id,
            record_type="Counterparty",
            field_name="name",
            current_value=cp.name,
            expected_value=f"1..{TEXT_MAX_LENGTH} characters",
        )
