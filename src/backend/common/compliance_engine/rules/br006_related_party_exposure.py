from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional

from ..config import RelatedPartyExposureRuleConfig
from ..entities import Counterparty
from ..models import RuleCategory, RuleType, Severity, ValidationResult, ValidationStatus
from ..rule import RecordRule
from ..snapshot import ValidationSnapshot


class BR006_RELATED_PARTY_EXPOSURE(RecordRule):
    rule_id = "BR006"
    name = "Related-party exposure above approval threshold"
    category = RuleCategory.REGULATORY
    severity = Severity.HIGH
    rule_type = RuleType.CROSS_REFERENCE
    description = (
        "Total outstanding exposure to a related party above the threshold requires board approval."
    )
    config_model = RelatedPartyExposureRuleConfig

    def records(self, snapshot: ValidationSnapshot) -> Iterable[Counterparty]:
        return (cp for cp in snapshot.counterparties if cp.is_related_party)

    def check(self, cp: Counterparty, snapshot: ValidationSnapshot) -> Optional[ValidationResult]:
        cfg: RelatedPartyExposureRuleConfig = self.config
        facilities = snapshot.facilities_by_counterparty.get(cp.counterparty_id, ())
        exposure = sum((f.outstanding_amount or Decimal("0") for f in facilities), Decimal("0"))
        if exposure <= cfg.exposure_threshold:
            return None
        return self.finding(
            snapshot,
            status=ValidationStatus.WARNING,
            message=(
                f"Related party {cp.counterparty_id} has total exposure {exposure} across "
                f"{len(facilities)} facilities, above {cfg.exposure_threshold}."
            ),
            record_id=cp.counterparty_id,
            record_type="Counterparty",
            field_name="outstanding_amount",
            current_value=exposure,
            expected_value=cfg.exposure_threshold,
            impact="Board approval evidence required for related-party exposure.",
        )
