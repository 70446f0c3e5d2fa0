from __future__ import annotations

from decimal import Decimal
from typing import Dict, List

from ..config import LedgerBalanceRuleConfig
from ..entities import AccountType
from ..models import RuleCategory, RuleType, Severity, ValidationResult
from ..rule import Rule
from ..snapshot import ValidationSnapshot, quantize_amount, within_tolerance


class REC003_ACCOUNTING_EQUATION(Rule):
    rule_id = "REC003"
    name = "Assets equal liabilities plus equity"
    category = RuleCategory.BUSINESS
    severity = Severity.CRITICAL
    rule_type = RuleType.SUB_LEDGER_RECONCILIATION
    config_model = LedgerBalanceRuleConfig

    def evaluate(self, snapshot: ValidationSnapshot) -> List[ValidationResult]:
        cfg: LedgerBalanceRuleConfig = self.config
        if not snapshot.ledger_accounts:
            return [self.passed(snapshot, "No ledger accounts supplied.")]

        totals: Dict[AccountType, Decimal] = {t: Decimal("0") for t in AccountType}
        for account in snapshot.ledger_accounts:
            totals[account.account_type] += account.balance

        assets = totals[AccountType.ASSET]
        claims = totals[AccountType.LIABILITY] + totals[AccountType.EQUITY]
        if cfg.include_current_earnings:
            claims += totals[AccountType.REVENUE] - totals[AccountType.EXPENSE]
        assets = quantize_amount(assets, cfg.amount_quantize)
        claims = quantize_amount(claims, cfg.amount_quantize)

        if within_tolerance(assets, claims, cfg.tolerance):
            return [self.passed(snapshot)]
        return [
            self.finding(
                snapshot,
                message=(
                    f"Ledger does not balance: assets {assets} vs liabilities and equity {claims} "
                    f"(difference {assets - claims})."
                ),
                record_id="LEDGER",
                record_type="Ledger",
                field_name="balance",
                current_value=assets,
                expected_value=claims,
                impact="Balance sheet cannot be produced from this ledger.",
            )
        ]
