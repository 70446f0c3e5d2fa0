"""Read-only entity shapes supplied by the ledger, sub-ledger and entity providers.

Dates stay as the raw strings the providers emit so that malformed values can
be reported by the data-quality rules instead of being rejected on load.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict


class _Entity(BaseModel):
    model_config = ConfigDict(frozen=True)


class AccountType(str, Enum):
    ASSET = "Asset"
    LIABILITY = "Liability"
    EQUITY = "Equity"
    REVENUE = "Revenue"
    EXPENSE = "Expense"


class PostingType(str, Enum):
    DEBIT = "Debit"
    CREDIT = "Credit"


class Counterparty(_Entity):
    counterparty_id: str
    name: str = ""
    country: str = ""
    entity_type: str = ""
    sector_code: Optional[str] = None
    segment: str = ""
    is_sme: bool = False
    is_related_party: bool = False


class Facility(_Entity):
    facility_id: Optional[str] = None
    counterparty_id: Optional[str] = None
    facility_type: str = ""

    origination_date: Optional[str] = None
    maturity_date: Optional[str] = None
    repricing_date: Optional[str] = None

    outstanding_amount: Optional[Decimal] = None
    limit_amount: Optional[Decimal] = None
    currency: Optional[str] = None

    risk_classification: str = "Pass"
    loss_allowance: Decimal = Decimal("0")
    is_secured: bool = False
    is_restructured: bool = False
    collateral_id: Optional[str] = None

    property_type: Optional[str] = None
    property_value: Optional[Decimal] = None
    ltv_ratio: Optional[Decimal] = None


class Derivative(_Entity):
    trade_id: str
    counterparty_id: str = ""
    risk_category: str = ""
    product_type: str = ""
    notional_amount: Decimal = Decimal("0")
    positive_fair_value: Decimal = Decimal("0")
    negative_fair_value: Decimal = Decimal("0")
    booking_location: str = ""
    trading_location: str = ""


class GLTransaction(_Entity):
    transaction_id: str
    facility_id: Optional[str] = None
    transaction_date: Optional[str] = None
    amount: Decimal = Decimal("0")
    currency: str = ""
    debit_account: str = ""
    credit_account: str = ""
    transaction_type: str = ""
    description: str = ""
    is_intercompany: bool = False
    entity_code: str = ""


class LedgerAccount(_Entity):
    account_id: str
    name: str = ""
    account_type: AccountType
    balance: Decimal = Decimal("0")


class Posting(_Entity):
    posting_id: str = ""
    account_id: str
    amount: Decimal
    type: PostingType
    sub_ledger_account_id: Optional[str] = None


class JournalEntry(_Entity):
    entry_id: str
    status: str = "Posted"
    description: str = ""
    postings: Tuple[Posting, ...] = ()


class SubLedgerAccount(_Entity):
    sub_ledger_account_id: str
    gl_account_id: str
    name: str = ""
    balance: Decimal = Decimal("0")
