from __future__ import annotations

from typing import Iterable, Optional

from ..entities import Facility
from ..models import RuleCategory, RuleType, Severity, ValidationResult
from ..rule import RecordRule
from ..snapshot import ValidationSnapshot, parse_iso_date


class BR005_MATURITY_AFTER_ORIGINATION(RecordRule):
    rule_id = "BR005"
    name = "Maturity date after origination date"
    category = RuleCategory.DATA_QUALITY
    severity = Severity.LOW
    rule_type = RuleType.BUSINESS_LOGIC
    description = "A facility must mature strictly after it was originated."

    def records(self, snapshot: ValidationSnapshot) -> Iterable[Facility]:
        return snapshot.facilities

    def check(self, facility: Facility, snapshot: ValidationSnapshot) -> Optional[ValidationResult]:
        origination = parse_iso_date(facility.origination_date)
        maturity = parse_iso_date(facility.maturity_date)
        # Unparseable dates are reported by SCH005.
        if origination is None or maturity is None or maturity > origination:
            return None
        return self.finding(
            snapshot,
            message=(
                f"Facility {facility.facility_id} matures on {facility.maturity_date}, "
                f"not after origination on {facility.origination_date}."
            ),
            record_id=facility.facility_id,
            record_type="Facility",
            field_name="maturity_date",
            current_value=facility.maturity_date,
            expected_value=f"> {facility.origination_date}",
            impact="Remaining maturity buckets will be misreported.",
        )
