from __future__ import annotations

from typing import Iterable, Optional

from ..entities import Facility
from ..models import RuleCategory, RuleType, Severity, ValidationResult
from ..rule import RecordRule
from ..snapshot import ValidationSnapshot


class XR001_FACILITY_COUNTERPARTY_EXISTS(RecordRule):
    rule_id = "XR001"
    name = "Facility counterparty exists"
    category = RuleCategory.DATA_QUALITY
    severity = Severity.HIGH
    rule_type = RuleType.CROSS_REFERENCE

    def records(self, snapshot: ValidationSnapshot) -> Iterable[Facility]:
        # Facilities with no counterparty id at all are reported by SCH001.
        return (f for f in snapshot.facilities if f.counterparty_id)

    def check(self, facility: Facility, snapshot: ValidationSnapshot) -> Optional[ValidationResult]:
        if facility.counterparty_id in snapshot.counterparties_by_id:
            return None
        return self.finding(
            snapshot,
            message=(
                f"Facility {facility.facility_id} references unknown counterparty "
                f"{facility.counterparty_id}."
            ),
            record_id=facility.facility_id,
            record_type="Facility",
            field_name="counterparty_id",
            current_value=facility.counterparty_id,
            impact="Exposure cannot be attributed to an obligor.",
        )
