from __future__ import annotations

from decimal import Decimal
from typing import List

from ..config import ReconciliationRuleConfig
from ..models import RuleCategory, RuleType, Severity, ValidationResult
from ..rule import Rule
from ..snapshot import ValidationSnapshot, quantize_amount, within_tolerance


class REC001_SUBLEDGER_RECONCILES(Rule):
    rule_id = "REC001"
    name = "Sub-ledger totals reconcile to GL control accounts"
    category = RuleCategory.BUSINESS
    severity = Severity.HIGH
    rule_type = RuleType.SUB_LEDGER_RECONCILIATION
    description = (
        "For every GL control account with sub-ledger accounts, the GL balance must equal the sum "
        "of its sub-ledger balances within tolerance. Sub-ledgers pointing at a missing GL account fail."
    )
    config_model = ReconciliationRuleConfig

    def evaluate(self, snapshot: ValidationSnapshot) -> List[ValidationResult]:
        cfg: ReconciliationRuleConfig = self.config
        findings: List[ValidationResult] = []

        for gl_account_id, subs in snapshot.sub_ledger_by_parent.items():
            sub_total = quantize_amount(sum((s.balance for s in subs), Decimal("0")), cfg.amount_quantize)
            account = snapshot.ledger_accounts_by_id.get(gl_account_id)
            if account is None:
                findings.append(
                    self.finding(
                        snapshot,
                        message=(
                            f"{len(subs)} sub-ledger account(s) reference GL account {gl_account_id}, "
                            "which does not exist."
                        ),
                        record_id=gl_account_id,
                        record_type="LedgerAccount",
                        field_name="gl_account_id",
                        current_value=sub_total,
                        impact="Sub-ledger balances are excluded from the general ledger.",
                    )
                )
                continue
            balance = quantize_amount(account.balance, cfg.amount_quantize)
            if within_tolerance(balance, sub_total, cfg.tolerance):
                continue
            findings.append(
                self.finding(
                    snapshot,
                    message=(
                        f"GL account {account.account_id} balance {balance} differs from "
                        f"sub-ledger total {sub_total} by {balance - sub_total}."
                    ),
                    record_id=account.account_id,
                    record_type="LedgerAccount",
                    field_name="balance",
                    current_value=balance,
                    expected_value=sub_total,
                    impact="Control account does not agree to its supporting detail.",
                )
            )
        return self.conclude(snapshot, findings)
