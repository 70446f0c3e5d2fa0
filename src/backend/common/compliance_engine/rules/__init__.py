from __future__ import annotations

from typing import List, Optional, Tuple, Type

from ..config import RulesConfig
from ..rule import Rule
from .br001_outstanding_within_limit import BR001_OUTSTANDING_WITHIN_LIMIT
from .br002_sector_code_mandatory import BR002_SECTOR_CODE_MANDATORY
from .br003_impaired_allowance import BR003_IMPAIRED_ALLOWANCE
from .br004_property_ltv import BR004_PROPERTY_LTV
from .br005_maturity_after_origination import BR005_MATURITY_AFTER_ORIGINATION
from .br006_related_party_exposure import BR006_RELATED_PARTY_EXPOSURE
from .br007_derivative_notional_positive import BR007_DERIVATIVE_NOTIONAL_POSITIVE
from .gl001_transaction_integrity import GL001_TRANSACTION_INTEGRITY
from .ic001_intercompany_matching import IC001_INTERCOMPANY_MATCHING
from .rec001_subledger_reconciles import REC001_SUBLEDGER_RECONCILES
from .rec002_journal_entry_balanced import REC002_JOURNAL_ENTRY_BALANCED
from .rec003_accounting_equation import REC003_ACCOUNTING_EQUATION
from .reg001_sme_classification import REG001_SME_CLASSIFICATION
from .sch001_required_fields import SCH001_REQUIRED_FIELDS
from .sch002_currency_code import SCH002_CURRENCY_CODE
from .sch003_entity_type import SCH003_ENTITY_TYPE
from .sch004_sector_code_format import SCH004_SECTOR_CODE_FORMAT
from .sch005_facility_dates import SCH005_FACILITY_DATES
from .sch006_amount_precision import SCH006_AMOUNT_PRECISION
from .sch007_duplicate_identifiers import SCH007_DUPLICATE_IDENTIFIERS
from .sch008_counterparty_name import SCH008_COUNTERPARTY_NAME
from .xr001_facility_counterparty_exists import XR001_FACILITY_COUNTERPARTY_EXISTS
from .xr002_derivative_counterparty_exists import XR002_DERIVATIVE_COUNTERPARTY_EXISTS
from .xr003_gl_facility_exists import XR003_GL_FACILITY_EXISTS

# Registry order; results are always reported in this order.
BUILTIN_RULES: Tuple[Type[Rule], ...] = (
    BR001_OUTSTANDING_WITHIN_LIMIT,
    BR002_SECTOR_CODE_MANDATORY,
    BR003_IMPAIRED_ALLOWANCE,
    BR004_PROPERTY_LTV,
    BR005_MATURITY_AFTER_ORIGINATION,
    BR006_RELATED_PARTY_EXPOSURE,
    BR007_DERIVATIVE_NOTIONAL_POSITIVE,
    SCH001_REQUIRED_FIELDS,
    SCH002_CURRENCY_CODE,
    SCH003_ENTITY_TYPE,
    SCH004_SECTOR_CODE_FORMAT,
    SCH005_FACILITY_DATES,
    SCH006_AMOUNT_PRECISION,
    SCH007_DUPLICATE_IDENTIFIERS,
    SCH008_COUNTERPARTY_NAME,
    XR001_FACILITY_COUNTERPARTY_EXISTS,
    XR002_DERIVATIVE_COUNTERPARTY_EXISTS,
    XR003_GL_FACILITY_EXISTS,
    GL001_TRANSACTION_INTEGRITY,
    IC001_INTERCOMPANY_MATCHING,
    REG001_SME_CLASSIFICATION,
    REC001_SUBLEDGER_RECONCILES,
    REC002_JOURNAL_ENTRY_BALANCED,
    REC003_ACCOUNTING_EQUATION,
)


def default_rules(rules_config: Optional[RulesConfig] = None) -> List[Rule]:
    """Instantiate the built-in rules with their per-rule config, skipping disabled ones."""
    rules_config = rules_config or RulesConfig()
    out: List[Rule] = []
    for rule_cls in BUILTIN_RULES:
        cfg = rules_config.get_rule_config(rule_cls.rule_id, rule_cls.config_model)
        if not cfg.enabled:
            continue
        out.append(rule_cls(cfg))
    return out


__all__ = [cls.__name__ for cls in BUILTIN_RULES] + ["BUILTIN_RULES", "default_rules"]
