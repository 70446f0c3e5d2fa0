from __future__ import annotations

from typing import Iterable, List, Optional

from ..entities import Facility
from ..models import RuleCategory, RuleType, Severity, ValidationResult, ValidationStatus
from ..rule import RecordRule
from ..snapshot import ValidationSnapshot
from ..type_validators import is_past_date, is_valid_date

DATE_FIELDS = ("origination_date", "maturity_date", "repricing_date")


class SCH005_FACILITY_DATES(RecordRule):
    rule_id = "SCH005"
    name = "Facility dates are valid ISO dates"
    category = RuleCategory.DATA_QUALITY
    severity = Severity.MEDIUM
    rule_type = RuleType.SCALAR_TYPE_CHECK
    description = (
        "Origination, maturity and repricing dates must be YYYY-MM-DD calendar dates; "
        "an origination date after the snapshot date is flagged."
    )

    def records(self, snapshot: ValidationSnapshot) -> Iterable[Facility]:
        return snapshot.facilities

    def check(self, facility: Facility, snapshot: ValidationSnapshot) -> Optional[ValidationResult]:
        invalid = [
            name
            for name in DATE_FIELDS
            if getattr(facility, name) is not None and not is_valid_date(getattr(facility, name))
        ]
        origination = facility.origination_date
        future = is_valid_date(origination) and not is_past_date(origination, today=snapshot.as_of_date)
        if not invalid and not future:
            return None

        details: List[str] = [f"invalid {name} {getattr(facility, name)!r}" for name in invalid]
        fields = list(invalid)
        if future:
            details.append(f"originates on {origination}, after the snapshot date {snapshot.as_of_date.isoformat()}")
            fields.append("origination_date")

        # An invalid date outranks the future-origination warning.
        if invalid:
            status, severity, expected = ValidationStatus.FAIL, None, "YYYY-MM-DD"
        else:
            status, severity = ValidationStatus.WARNING, Severity.LOW
            expected = f"<= {snapshot.as_of_date.isoformat()}"
        values = [getattr(facility, name) for name in fields]

        return self.finding(
            snapshot,
            status=status,
            severity=severity,
            message=f"Facility {facility.facility_id} has {'; '.join(details)}.",
            record_id=facility.facility_id,
            record_type="Facility",
            field_name=",".join(fields),
            current_value=values[0] if len(values) == 1 else values,
            expected_value=expected,
        )
