from __future__ import annotations

from collections import Counter
from typing import Iterable, List, Optional, Tuple

from ..models import RuleCategory, RuleType, Severity, ValidationResult
from ..rule import Rule
from ..snapshot import ValidationSnapshot


class SCH007_DUPLICATE_IDENTIFIERS(Rule):
    rule_id = "SCH007"
    name = "Record identifiers are unique"
    category = RuleCategory.DATA_QUALITY
    severity = Severity.HIGH
    rule_type = RuleType.CROSS_REFERENCE

    def _collections(self, snapshot: ValidationSnapshot) -> Iterable[Tuple[str, str, List[Optional[str]]]]:
        yield "Counterparty", "counterparty_id", [c.counterparty_id for c in snapshot.counterparties]
        yield "Facility", "facility_id", [f.facility_id for f in snapshot.facilities]
        yield "Derivative", "trade_id", [d.trade_id for d in snapshot.derivatives]
        yield "GLTransaction", "transaction_id", [t.transaction_id for t in snapshot.gl_transactions]
        yield "LedgerAccount", "account_id", [a.account_id for a in snapshot.ledger_accounts]
        yield "JournalEntry", "entry_id", [j.entry_id for j in snapshot.journal_entries]
        yield "SubLedgerAccount", "sub_ledger_account_id", [
            s.sub_ledger_account_id for s in snapshot.sub_ledger_accounts
        ]

    def evaluate(self, snapshot: ValidationSnapshot) -> List[ValidationResult]:
        findings: List[ValidationResult] = []
        for record_type, field_name, ids in self._collections(snapshot):
            counts = Counter(i for i in ids if i)
            for record_id, count in counts.items():
                if count < 2:
                    continue
                findings.append(
                    self.finding(
                        snapshot,
                        message=f"{record_type} id {record_id} appears {count} times.",
                        record_id=record_id,
                        record_type=record_type,
                        field_name=field_name,
                        current_value=count,
                        expected_value=1,
                        impact="Duplicate records double-count exposures and balances.",
                    )
                )
        return self.conclude(snapshot, findings)
