import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import common...` work.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

from datetime import datetime, timezone

import pytest

from common.compliance_engine.snapshot import ValidationSnapshot


@pytest.fixture
def generated_at() -> datetime:
    return datetime(2025, 12, 31, 18, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_counterparty():
    def _make(counterparty_id: str = "CP001", **overrides) -> dict:
        data = {
            "counterparty_id": counterparty_id,
            "name": f"Counterparty {counterparty_id}",
            "country": "SG",
            "entity_type": "Non-financial Corporates",
            "sector_code": "41001",
            "segment": "Corporate",
            "is_sme": False,
            "is_related_party": False,
        }
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def make_facility():
    def _make(facility_id: str = "FAC001", **overrides) -> dict:
        data = {
            "facility_id": facility_id,
            "counterparty_id": "CP001",
            "facility_type": "Term Loan",
            "origination_date": "2023-01-15",
            "maturity_date": "2028-01-15",
            "outstanding_amount": "500000.00",
            "limit_amount": "1000000.00",
            "currency": "SGD",
            "risk_classification": "Pass",
            "loss_allowance": "0",
        }
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def make_gl_transaction():
    def _make(transaction_id: str = "GL001", **overrides) -> dict:
        data = {
            "transaction_id": transaction_id,
            "transaction_date": "2025-12-15",
            "amount": "2500.00",
            "currency": "SGD",
            "debit_account": "1200",
            "credit_account": "4100",
            "transaction_type": "Interest",
            "entity_code": "SG01",
        }
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def make_journal_entry():
    def _make(entry_id: str = "JE001", *, debits=("100.00",), credits=("100.00",), **overrides) -> dict:
        postings = [
            {"posting_id": f"{entry_id}-D{i}", "account_id": "1000", "amount": amt, "type": "Debit"}
            for i, amt in enumerate(debits)
        ] + [
            {"posting_id": f"{entry_id}-C{i}", "account_id": "2000", "amount": amt, "type": "Credit"}
            for i, amt in enumerate(credits)
        ]
        data = {"entry_id": entry_id, "status": "Posted", "postings": postings}
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def make_snapshot(generated_at):
    def _make(**collections) -> ValidationSnapshot:
        collections.setdefault("dataset_version", "v1")
        return ValidationSnapshot.build(generated_at=generated_at, **collections)

    return _make


@pytest.fixture
def clean_snapshot(make_snapshot, make_counterparty, make_facility, make_gl_transaction, make_journal_entry):
    return make_snapshot(
        counterparties=[
            make_counterparty("CP001"),
            make_counterparty("CP002", entity_type="Natural persons", sector_code=None),
        ],
        facilities=[
            make_facility("FAC001"),
            make_facility("FAC002", counterparty_id="CP002", outstanding_amount="0"),
        ],
        derivatives=[
            {
                "trade_id": "TRD001",
                "counterparty_id": "CP001",
                "risk_category": "Interest Rate",
                "product_type": "IRS",
                "notional_amount": "5000000.00",
                "positive_fair_value": "12500.50",
            }
        ],
        gl_transactions=[make_gl_transaction("GL001", facility_id="FAC001")],
        ledger_accounts=[
            {"account_id": "1000", "name": "Loans", "account_type": "Asset", "balance": "1500000.00"},
            {"account_id": "2000", "name": "Deposits", "account_type": "Liability", "balance": "1200000.00"},
            {"account_id": "3000", "name": "Share capital", "account_type": "Equity", "balance": "300000.00"},
        ],
        sub_ledger_accounts=[
            {"sub_ledger_account_id": "SL1", "gl_account_id": "1000", "balance": "1000000.00"},
            {"sub_ledger_account_id": "SL2", "gl_account_id": "1000", "balance": "500000.00"},
        ],
        journal_entries=[make_journal_entry("JE001")],
    )
