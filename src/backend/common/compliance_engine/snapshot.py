from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from functools import cached_property
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel

from .entities import (
    Counterparty,
    Derivative,
    Facility,
    GLTransaction,
    JournalEntry,
    LedgerAccount,
    SubLedgerAccount,
)

E = TypeVar("E", bound=BaseModel)

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _coerce(model: Type[E], items: Optional[Iterable[Any]]) -> Tuple[E, ...]:
    if not items:
        return ()
    return tuple(item if isinstance(item, model) else model.model_validate(item) for item in items)


@dataclass(frozen=True)
class ValidationSnapshot:
    """Composite, immutable view of every entity collection a rule may read.

    Rules receive the whole snapshot and pick the collections they need. The
    lookup indexes below are built lazily, once per snapshot, and shared by
    every rule in a run.
    """

    generated_at: datetime
    dataset_version: str = ""
    counterparties: Tuple[Counterparty, ...] = ()
    facilities: Tuple[Facility, ...] = ()
    derivatives: Tuple[Derivative, ...] = ()
    gl_transactions: Tuple[GLTransaction, ...] = ()
    ledger_accounts: Tuple[LedgerAccount, ...] = ()
    journal_entries: Tuple[JournalEntry, ...] = ()
    sub_ledger_accounts: Tuple[SubLedgerAccount, ...] = ()

    @classmethod
    def build(
        cls,
        *,
        generated_at: datetime,
        dataset_version: str = "",
        counterparties: Optional[Iterable[Any]] = None,
        facilities: Optional[Iterable[Any]] = None,
        derivatives: Optional[Iterable[Any]] = None,
        gl_transactions: Optional[Iterable[Any]] = None,
        ledger_accounts: Optional[Iterable[Any]] = None,
        journal_entries: Optional[Iterable[Any]] = None,
        sub_ledger_accounts: Optional[Iterable[Any]] = None,
    ) -> "ValidationSnapshot":
        return cls(
            generated_at=generated_at,
            dataset_version=dataset_version,
            counterparties=_coerce(Counterparty, counterparties),
            facilities=_coerce(Facility, facilities),
            derivatives=_coerce(Derivative, derivatives),
            gl_transactions=_coerce(GLTransaction, gl_transactions),
            ledger_accounts=_coerce(LedgerAccount, ledger_accounts),
            journal_entries=_coerce(JournalEntry, journal_entries),
            sub_ledger_accounts=_coerce(SubLedgerAccount, sub_ledger_accounts),
        )

    @property
    def as_of_date(self) -> date:
        return self.generated_at.date()

    @property
    def total_records(self) -> int:
        return (
            len(self.counterparties)
            + len(self.facilities)
            + len(self.derivatives)
            + len(self.gl_transactions)
            + len(self.ledger_accounts)
            + len(self.journal_entries)
            + len(self.sub_ledger_accounts)
        )

    def cache_key(self) -> str:
        return f"{self.dataset_version}@{self.generated_at.isoformat()}"

    @cached_property
    def counterparties_by_id(self) -> Mapping[str, Counterparty]:
        out: dict[str, Counterparty] = {}
        for cp in self.counterparties:
            out.setdefault(cp.counterparty_id, cp)
        return MappingProxyType(out)

    @cached_property
    def facilities_by_id(self) -> Mapping[str, Facility]:
        out: dict[str, Facility] = {}
        for fac in self.facilities:
            if fac.facility_id:
                out.setdefault(fac.facility_id, fac)
        return MappingProxyType(out)

    @cached_property
    def facilities_by_counterparty(self) -> Mapping[str, Tuple[Facility, ...]]:
        grouped: dict[str, list[Facility]] = {}
        for fac in self.facilities:
            if fac.counterparty_id:
                grouped.setdefault(fac.counterparty_id, []).append(fac)
        return MappingProxyType({k: tuple(v) for k, v in grouped.items()})

    @cached_property
    def ledger_accounts_by_id(self) -> Mapping[str, LedgerAccount]:
        out: dict[str, LedgerAccount] = {}
        for acct in self.ledger_accounts:
            out.setdefault(acct.account_id, acct)
        return MappingProxyType(out)

    @cached_property
    def sub_ledger_by_parent(self) -> Mapping[str, Tuple[SubLedgerAccount, ...]]:
        grouped: dict[str, list[SubLedgerAccount]] = {}
        for acct in self.sub_ledger_accounts:
            grouped.setdefault(acct.gl_account_id, []).append(acct)
        return MappingProxyType({k: tuple(v) for k, v in grouped.items()})


def quantize_amount(value: Decimal, quantize: Optional[Decimal] = Decimal("0.01")) -> Decimal:
    if quantize is None:
        return value
    return value.quantize(quantize, rounding=ROUND_HALF_UP)


def within_tolerance(actual: Decimal, expected: Decimal, tolerance: Decimal) -> bool:
    return abs(actual - expected) <= tolerance


def parse_iso_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    s = value.strip()
    if not _ISO_DATE.match(s):
        return None
    try:
        return date.fromisoformat(s)
    except ValueError:
        return None
