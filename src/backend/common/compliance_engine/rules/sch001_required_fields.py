from __future__ import annotations

from typing import Iterable, List, Optional

from ..config import RequiredFieldsRuleConfig
from ..entities import Facility
from ..models import RuleCategory, RuleType, Severity, ValidationResult
from ..rule import RecordRule
from ..snapshot import ValidationSnapshot


def _missing(value: object) -> bool:
    # Zero is a legitimate amount; only absent or blank values are missing.
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


class SCH001_REQUIRED_FIELDS(RecordRule):
    rule_id = "SCH001"
    name = "Facility mandatory fields present"
    category = RuleCategory.DATA_QUALITY
    severity = Severity.CRITICAL
    rule_type = RuleType.SCALAR_TYPE_CHECK
    description = "Every facility must carry its identifier, counterparty, outstanding amount and currency."
    config_model = RequiredFieldsRuleConfig

    def records(self, snapshot: ValidationSnapshot) -> Iterable[Facility]:
        return snapshot.facilities

    def check(self, facility: Facility, snapshot: ValidationSnapshot) -> Optional[ValidationResult]:
        cfg: RequiredFieldsRuleConfig = self.config
        missing: List[str] = [
            field_name for field_name in cfg.required_fields if _missing(getattr(facility, field_name, None))
        ]
        if not missing:
            return None
        return self.finding(
            snapshot,
            message=f"Facility {facility.facility_id or '<unknown>'} is missing: {', '.join(missing)}.",
            record_id=facility.facility_id,
            record_type="Facility",
            field_name=",".join(missing),
            expected_value="non-empty",
            impact="Record cannot be included in regulatory returns.",
        )
