from __future__ import annotations

from typing import Iterable, Optional

from ..entities import Counterparty
from ..models import RuleCategory, RuleType, Severity, ValidationResult
from ..rule import RecordRule
from ..snapshot import ValidationSnapshot
from ..type_validators import VALID_ENTITY_TYPES, is_valid_entity_type


class SCH003_ENTITY_TYPE(RecordRule):
    rule_id = "SCH003"
    name = "Counterparty entity type is enumerated"
    category = RuleCategory.DATA_QUALITY
    severity = Severity.MEDIUM
    rule_type = RuleType.SCALAR_TYPE_CHECK

    def records(self, snapshot: ValidationSnapshot) -> Iterable[Counterparty]:
        return snapshot.counterparties

    def check(self, cp: Counterparty, snapshot: ValidationSnapshot) -> Optional[ValidationResult]:
        if is_valid_entity_type(cp.entity_type):
            return None
        return self.finding(
            snapshot,
            message=f"Counterparty {cp.counterparty_id} has unknown entity type {cp.entity_type!r}.",
            record_id=cp.counterparty_id,
            record_type="Counterparty",
            field_name="entity_type",
            current_value=cp.entity_type,
            expected_value=sorted(VALID_ENTITY_TYPES),
        )
