"""Domain models for the Jama/Kharch (credit/debit) ledgers."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class LedgerDirection(Enum):
    """Incoming (jama) or outgoing (kharch) ledger entry."""

    JAMA = "JAMA"
    KHARCH = "KHARCH"

    @classmethod
    def from_label(cls, value: str | None) -> "LedgerDirection":
        normalized = (value or "").strip().upper()
        if normalized == "KHARCH":
            return cls.KHARCH
        return cls.JAMA


class SilverType(Enum):
    FINE = "fine"
    RAW = "raw"


@dataclass(frozen=True)
class CashEntry:
    date: date
    direction: LedgerDirection
    amount: float
    name: str
    description: str = ""

    @property
    def quantity(self) -> float:
        return self.amount


@dataclass(frozen=True)
class SilverEntry:
    """Silver handed over or received, in grams of fine silver.

    Raw entries keep the gross weight and touch they were derived from.
    """

    date: date
    direction: LedgerDirection
    silver_weight: float
    name: str
    description: str = ""
    silver_type: SilverType = SilverType.FINE
    form_no: str = ""
    gross_weight: Optional[float] = None
    touch: Optional[float] = None

    @property
    def quantity(self) -> float:
        return self.silver_weight


@dataclass(frozen=True)
class LedgerSummary:
    total_jama: float = 0.0
    total_kharch: float = 0.0
    entry_count: int = 0

    @property
    def net(self) -> float:
        return self.total_jama - self.total_kharch
