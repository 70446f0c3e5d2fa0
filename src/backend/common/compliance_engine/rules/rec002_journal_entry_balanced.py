from __future__ import annotations

from decimal import Decimal
from typing import List

from ..config import JournalBalanceRuleConfig
from ..entities import PostingType
from ..models import RuleCategory, RuleType, Severity, ValidationResult, ValidationStatus
from ..rule import Rule
from ..snapshot import ValidationSnapshot, quantize_amount, within_tolerance


class REC002_JOURNAL_ENTRY_BALANCED(Rule):
    rule_id = "REC002"
    name = "Journal entries balance"
    category = RuleCategory.BUSINESS
    severity = Severity.CRITICAL
    rule_type = RuleType.SUB_LEDGER_RECONCILIATION
    description = "Total debits must equal total credits in every journal entry."
    config_model = JournalBalanceRuleConfig

    def evaluate(self, snapshot: ValidationSnapshot) -> List[ValidationResult]:
        cfg: JournalBalanceRuleConfig = self.config
        findings: List[ValidationResult] = []

        for entry in snapshot.journal_entries:
            if entry.status in cfg.excluded_statuses:
                continue
            if len(entry.postings) < cfg.min_postings:
                findings.append(
                    self.finding(
                        snapshot,
                        status=ValidationStatus.WARNING,
                        severity=Severity.MEDIUM,
                        message=(
                            f"Journal entry {entry.entry_id} has {len(entry.postings)} posting(s); "
                            f"at least {cfg.min_postings} expected."
                        ),
                        record_id=entry.entry_id,
                        record_type="JournalEntry",
                        field_name="postings",
                        current_value=len(entry.postings),
                        expected_value=cfg.min_postings,
                    )
                )
                continue

            debits = sum((p.amount for p in entry.postings if p.type == PostingType.DEBIT), Decimal("0"))
            credits = sum((p.amount for p in entry.postings if p.type == PostingType.CREDIT), Decimal("0"))
            debits = quantize_amount(debits, cfg.amount_quantize)
            credits = quantize_amount(credits, cfg.amount_quantize)
            if within_tolerance(debits, credits, cfg.tolerance):
                continue
            findings.append(
                self.finding(
                    snapshot,
                    message=(
                        f"Journal entry {entry.entry_id} is out of balance: debits {debits}, "
                        f"credits {credits}."
                    ),
                    record_id=entry.entry_id,
                    record_type="JournalEntry",
                    field_name="postings",
                    current_value=debits,
                    expected_value=credits,
                    impact="Unbalanced entries break the double-entry invariant of the ledger.",
                )
            )
        return self.conclude(snapshot, findings)
