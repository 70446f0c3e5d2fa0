from __future__ import annotations

from typing import Iterable, Optional

from ..config import LtvRatioRuleConfig
from ..entities import Facility
from ..models import RuleCategory, RuleType, Severity, ValidationResult, ValidationStatus
from ..rule import RecordRule
from ..snapshot import ValidationSnapshot


class BR004_PROPERTY_LTV(RecordRule):
    rule_id = "BR004"
    name = "Property loans report a plausible LTV ratio"
    category = RuleCategory.BUSINESS
    severity = Severity.MEDIUM
    rule_type = RuleType.BUSINESS_LOGIC
    description = "Facilities secured on property need an LTV ratio no greater than the configured maximum."
    config_model = LtvRatioRuleConfig

    def records(self, snapshot: ValidationSnapshot) -> Iterable[Facility]:
        return (f for f in snapshot.facilities if f.property_type)

    def check(self, facility: Facility, snapshot: ValidationSnapshot) -> Optional[ValidationResult]:
        cfg: LtvRatioRuleConfig = self.config
        # A zero or negative ratio is as good as absent.
        if facility.ltv_ratio is None or facility.ltv_ratio <= 0:
            message = f"Property facility {facility.facility_id} has no valid LTV ratio."
        elif facility.ltv_ratio > cfg.max_ltv_ratio:
            message = (
                f"Property facility {facility.facility_id} LTV ratio {facility.ltv_ratio} "
                f"exceeds {cfg.max_ltv_ratio}."
            )
        else:
            return None
        return self.finding(
            snapshot,
            status=ValidationStatus.WARNING,
            message=message,
            record_id=facility.facility_id,
            record_type="Facility",
            field_name="ltv_ratio",
            current_value=facility.ltv_ratio,
            expected_value=f"<= {cfg.max_ltv_ratio}",
            impact="Property exposure limits cannot be assessed reliably.",
        )
