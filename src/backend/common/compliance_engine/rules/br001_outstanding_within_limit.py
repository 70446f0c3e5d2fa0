from __future__ import annotations

from typing import Iterable, Optional

from ..entities import Facility
from ..models import RuleCategory, RuleType, Severity, ValidationResult
from ..rule import RecordRule
from ..snapshot import ValidationSnapshot


class BR001_OUTSTANDING_WITHIN_LIMIT(RecordRule):
    rule_id = "BR001"
    name = "Outstanding amount within approved limit"
    category = RuleCategory.BUSINESS
    severity = Severity.CRITICAL
    rule_type = RuleType.BUSINESS_LOGIC
    description = "A facility's outstanding amount must not exceed its approved limit."

    def records(self, snapshot: ValidationSnapshot) -> Iterable[Facility]:
        return snapshot.facilities

    def check(self, facility: Facility, snapshot: ValidationSnapshot) -> Optional[ValidationResult]:
        if facility.outstanding_amount is None or facility.limit_amount is None:
            return None
        if facility.outstanding_amount <= facility.limit_amount:
            return None
        return self.finding(
            snapshot,
            message=(
                f"Facility {facility.facility_id} outstanding amount {facility.outstanding_amount} "
                f"exceeds limit {facility.limit_amount}."
            ),
            record_id=facility.facility_id,
            record_type="Facility",
            field_name="outstanding_amount",
            current_value=facility.outstanding_amount,
            expected_value=facility.limit_amount,
            impact="Limit breach must be escalated to credit risk before the return is filed.",
        )
