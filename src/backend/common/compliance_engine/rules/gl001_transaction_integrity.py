from __future__ import annotations

from typing import Iterable, Optional

from ..entities import GLTransaction
from ..models import RuleCategory, RuleType, Severity, ValidationResult
from ..rule import RecordRule
from ..snapshot import ValidationSnapshot


class GL001_TRANSACTION_INTEGRITY(RecordRule):
    rule_id = "GL001"
    name = "GL transaction amount positive and accounts distinct"
    category = RuleCategory.BUSINESS
    severity = Severity.MEDIUM
    rule_type = RuleType.BUSINESS_LOGIC

    def records(self, snapshot: ValidationSnapshot) -> Iterable[GLTransaction]:
        return snapshot.gl_transactions

    def check(self, txn: GLTransaction, snapshot: ValidationSnapshot) -> Optional[ValidationResult]:
        problems = []
        if txn.amount <= 0:
            problems.append(f"non-positive amount {txn.amount}")
        if txn.debit_account and txn.debit_account == txn.credit_account:
            problems.append(f"debit and credit both post to {txn.debit_account}")
        if not problems:
            return None
        return self.finding(
            snapshot,
            message=f"GL transaction {txn.transaction_id}: {'; '.join(problems)}.",
            record_id=txn.transaction_id,
            record_type="GLTransaction",
            field_name="amount" if txn.amount <= 0 else "credit_account",
            current_value=txn.amount if txn.amount <= 0 else txn.credit_account,
        )
