from __future__ import annotations

from typing import Iterable, Optional

from ..config import SmeClassificationRuleConfig
from ..entities import Counterparty
from ..models import RuleCategory, RuleType, Severity, ValidationResult, ValidationStatus
from ..rule import RecordRule
from ..snapshot import ValidationSnapshot


class REG001_SME_CLASSIFICATION(RecordRule):
    rule_id = "REG001"
    name = "SME flag only on eligible entity types"
    category = RuleCategory.REGULATORY
    severity = Severity.LOW
    rule_type = RuleType.REGULATORY_COMPLIANCE
    config_model = SmeClassificationRuleConfig

    def records(self, snapshot: ValidationSnapshot) -> Iterable[Counterparty]:
        return (cp for cp in snapshot.counterparties if cp.is_sme)

    def check(self, cp: Counterparty, snapshot: ValidationSnapshot) -> Optional[ValidationResult]:
        cfg: SmeClassificationRuleConfig = self.config
        if cp.entity_type in cfg.sme_entity_types:
            return None
        return self.finding(
            snapshot,
            status=ValidationStatus.WARNING,
            message=f"Counterparty {cp.counterparty_id} is flagged SME but is a {cp.entity_type or 'unclassified entity'}.",
            record_id=cp.counterparty_id,
            record_type="Counterparty",
            field_name="is_sme",
            current_value=cp.entity_type,
            expected_value=cfg.sme_entity_types,
        )
