from __future__ import annotations

from typing import Iterable, Optional

from ..config import SectorCodeMandatoryRuleConfig
from ..entities import Counterparty
from ..models import RuleCategory, RuleType, Severity, ValidationResult
from ..rule import RecordRule
from ..snapshot import ValidationSnapshot


class BR002_SECTOR_CODE_MANDATORY(RecordRule):
    rule_id = "BR002"
    name = "Sector code mandatory for corporates and NBFIs"
    category = RuleCategory.REGULATORY
    severity = Severity.HIGH
    rule_type = RuleType.REGULATORY_COMPLIANCE
    description = (
        "Non-financial corporates and non-bank financial institutions must carry an SSIC "
        "sector code for sectoral exposure reporting."
    )
    config_model = SectorCodeMandatoryRuleConfig

    def records(self, snapshot: ValidationSnapshot) -> Iterable[Counterparty]:
        return snapshot.counterparties

    def check(self, cp: Counterparty, snapshot: ValidationSnapshot) -> Optional[ValidationResult]:
        cfg: SectorCodeMandatoryRuleConfig = self.config
        if cp.entity_type not in cfg.entity_types:
            return None
        if cp.sector_code and cp.sector_code.strip():
            return None
        return self.finding(
            snapshot,
            message=f"Counterparty {cp.counterparty_id} ({cp.entity_type}) has no sector code.",
            record_id=cp.counterparty_id,
            record_type="Counterparty",
            field_name="sector_code",
            current_value=cp.sector_code,
            expected_value="5-digit SSIC code",
            impact="Exposure cannot be allocated to an industry sector.",
        )
