from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional

from ..config import ImpairedAllowanceRuleConfig
from ..entities import Facility
from ..models import RuleCategory, RuleType, Severity, ValidationResult, ValidationStatus
from ..rule import RecordRule
from ..snapshot import ValidationSnapshot


class BR003_IMPAIRED_ALLOWANCE(RecordRule):
    rule_id = "BR003"
    name = "Impaired facilities carry a loss allowance"
    category = RuleCategory.BUSINESS
    severity = Severity.MEDIUM
    rule_type = RuleType.BUSINESS_LOGIC
    description = "Substandard and Doubtful facilities are expected to have a non-zero loss allowance."
    config_model = ImpairedAllowanceRuleConfig

    def records(self, snapshot: ValidationSnapshot) -> Iterable[Facility]:
        return snapshot.facilities

    def check(self, facility: Facility, snapshot: ValidationSnapshot) -> Optional[ValidationResult]:
        cfg: ImpairedAllowanceRuleConfig = self.config
        if facility.risk_classification not in cfg.impaired_classifications:
            return None
        if facility.loss_allowance != Decimal("0"):
            return None
        return self.finding(
            snapshot,
            status=ValidationStatus.WARNING,
            message=(
                f"Facility {facility.facility_id} is classified {facility.risk_classification} "
                "but has no loss allowance."
            ),
            record_id=facility.facility_id,
            record_type="Facility",
            field_name="loss_allowance",
            current_value=facility.loss_allowance,
            expected_value="> 0",
            impact="Provisioning may be understated.",
        )
