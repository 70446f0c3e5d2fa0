from __future__ import annotations

from typing import List, Optional, Set

from ..entities import Counterparty, GLTransaction
from ..models import RuleCategory, RuleType, Severity, ValidationResult, ValidationStatus
from ..rule import Rule
from ..snapshot import ValidationSnapshot


def _mirrors(a: GLTransaction, b: GLTransaction) -> bool:
    return (
        a.entity_code != b.entity_code
        and a.currency == b.currency
        and a.amount == b.amount
        and a.debit_account == b.credit_account
        and a.credit_account == b.debit_account
    )


class IC001_INTERCOMPANY_MATCHING(Rule):
    rule_id = "IC001"
    name = "Intercompany transactions eliminate"
    category = RuleCategory.BUSINESS
    severity = Severity.HIGH
    rule_type = RuleType.CROSS_REFERENCE
    description = (
        "Every intercompany transaction must be mirrored one-to-one by another entity, and any "
        "facility it references must belong to a related party."
    )

    @staticmethod
    def _unrelated_counterparty(txn: GLTransaction, snapshot: ValidationSnapshot) -> Optional[Counterparty]:
        if not txn.facility_id:
            return None
        facility = snapshot.facilities_by_id.get(txn.facility_id)
        if facility is None or not facility.counterparty_id:
            return None
        cp = snapshot.counterparties_by_id.get(facility.counterparty_id)
        if cp is None or cp.is_related_party:
            return None
        return cp

    def evaluate(self, snapshot: ValidationSnapshot) -> List[ValidationResult]:
        txns = [t for t in snapshot.gl_transactions if t.is_intercompany]
        matched: Set[int] = set()
        findings: List[ValidationResult] = []

        for i, txn in enumerate(txns):
            if i in matched:
                continue
            partner = next(
                (j for j in range(i + 1, len(txns)) if j not in matched and _mirrors(txn, txns[j])),
                None,
            )
            if partner is None:
                continue
            matched.update((i, partner))

        for i, txn in enumerate(txns):
            fields: List[str] = []
            problems: List[str] = []
            if i not in matched:
                fields.append("is_intercompany")
                problems.append(f"has no mirroring entry in another entity ({txn.entity_code})")
            cp = self._unrelated_counterparty(txn, snapshot)
            if cp is not None:
                fields.append("facility_id")
                problems.append(
                    f"is booked against facility {txn.facility_id} whose counterparty "
                    f"{cp.counterparty_id} is not a related party"
                )
            if not fields:
                continue
            findings.append(
                self.finding(
                    snapshot,
                    status=ValidationStatus.WARNING,
                    message=f"Intercompany transaction {txn.transaction_id} {' and '.join(problems)}.",
                    record_id=txn.transaction_id,
                    record_type="GLTransaction",
                    field_name=",".join(fields),
                    current_value=txn.amount if i not in matched else cp.counterparty_id,
                    expected_value="related party" if cp is not None else None,
                    impact="Intercompany balances will not eliminate on consolidation.",
                )
            )

        return self.conclude(snapshot, findings)
