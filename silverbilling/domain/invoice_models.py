"""Domain models supporting invoice calculations."""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

DEFAULT_TOUCH = 13.0
DEFAULT_LABOR_RATE_PER_KG = 500.0
DEFAULT_CGST_PERCENT = 1.5
DEFAULT_SGST_PERCENT = 1.5

WEIGHT_PLACES = 3
MONEY_PLACES = 2


def _parse_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def coerce_number(value: Any, default: float = 0.0) -> float:
    """Return ``value`` as a float, treating blank or non-numeric input as ``default``."""
    number = _parse_number(value)
    return default if number is None else number


def coerce_optional_number(value: Any) -> Optional[float]:
    """Like :func:`coerce_number` but keep missing input as ``None``."""
    return _parse_number(value)


def coerce_pieces(value: Any, default: int = 1) -> int:
    """Return a piece count, falling back to ``default`` for blank input."""
    number = coerce_number(value, default=float(default))
    return int(number)


class BillingType(Enum):
    """Billing flows sharing the invoice calculator."""

    REGULAR = "regular"
    WHOLESALE = "wholesale"

    @classmethod
    def from_label(cls, value: str | None) -> "BillingType":
        """Map UI or payload text to the corresponding billing type."""
        normalized = (value or "").strip().lower()
        if normalized in {"wholesale", "gst", "with gst"}:
            return cls.WHOLESALE
        return cls.REGULAR

    @property
    def gst_applicable(self) -> bool:
        return self is BillingType.WHOLESALE


class PaymentMode(Enum):
    CASH = "cash"
    CARD = "card"
    UPI = "upi"
    BANK_TRANSFER = "bank_transfer"
    CHEQUE = "cheque"

    @classmethod
    def from_label(cls, value: str | None) -> "PaymentMode":
        normalized = (value or "").strip().lower().replace(" ", "_")
        for mode in cls:
            if mode.value == normalized:
                return mode
        return cls.CASH


@dataclass(frozen=True)
class GstConfig:
    """GST policy applied to an invoice subtotal."""

    applicable: bool = False
    cgst_percent: float = DEFAULT_CGST_PERCENT
    sgst_percent: float = DEFAULT_SGST_PERCENT

    @classmethod
    def for_billing_type(
        cls,
        billing_type: BillingType,
        *,
        cgst_percent: float = DEFAULT_CGST_PERCENT,
        sgst_percent: float = DEFAULT_SGST_PERCENT,
    ) -> "GstConfig":
        return cls(
            applicable=billing_type.gst_applicable,
            cgst_percent=cgst_percent,
            sgst_percent=sgst_percent,
        )


@dataclass(frozen=True)
class Payment:
    """Two-part payment: cash plus silver handed over in kind."""

    paid_amount: float = 0.0
    paid_silver: float = 0.0
    mode: PaymentMode = PaymentMode.CASH
    notes: str = ""


@dataclass(frozen=True)
class LineItem:
    """A single invoice row as entered by the operator.

    ``gross_weight`` is ``None`` while the field is still blank. Net weight is
    always derived and never stored.
    """

    description: str = ""
    pieces: int = 1
    gross_weight: Optional[float] = None
    stone_weight: float = 0.0
    wastage: float = 0.0
    touch: float = DEFAULT_TOUCH
    labor_rate_per_kg: float = DEFAULT_LABOR_RATE_PER_KG

    @property
    def net_weight(self) -> float:
        return coerce_number(self.gross_weight) - coerce_number(self.stone_weight)

    @property
    def has_gross_weight(self) -> bool:
        return self.gross_weight is not None


@dataclass(frozen=True)
class ItemComputation:
    """Unrounded per-item results."""

    net_weight: float
    silver_weight: float
    labor_charge: float
    amount: float


@dataclass(frozen=True)
class SaleComputation:
    """Aggregate invoice figures kept at full precision."""

    items: tuple[ItemComputation, ...]
    total_net_weight: float
    total_wastage: float
    total_silver_weight: float
    total_labor: float
    subtotal: float
    cgst: float
    sgst: float
    total_amount: float
    paid_silver_value: float
    effective_paid: float
    balance_amount: float

    @property
    def is_overpaid(self) -> bool:
        return self.balance_amount < 0

    def as_display(self) -> dict[str, str]:
        """Return the fixed-decimal strings consumed by reports and exports."""
        return {
            "totalNetWeight": format_weight(self.total_net_weight),
            "totalWastage": format_weight(self.total_wastage),
            "totalSilverWeight": format_weight(self.total_silver_weight),
            "totalLabor": format_money(self.total_labor),
            "subtotal": format_money(self.subtotal),
            "cgst": format_money(self.cgst),
            "sgst": format_money(self.sgst),
            "totalAmount": format_money(self.total_amount),
            "paidSilverValue": format_money(self.paid_silver_value),
            "effectivePaid": format_money(self.effective_paid),
            "balanceAmount": format_money(self.balance_amount),
        }


@dataclass(frozen=True)
class FieldError:
    """A single validation problem tied to a form field."""

    field: str
    message: str
    item_index: Optional[int] = None

    def __str__(self) -> str:
        if self.item_index is None:
            return f"{self.field}: {self.message}"
        return f"items[{self.item_index}].{self.field}: {self.message}"


def _format(value: float, places: int) -> str:
    text = f"{value:.{places}f}"
    # Avoid "-0.00" for values that round to zero.
    if text.startswith("-") and float(text) == 0:
        return text[1:]
    return text


def format_weight(value: float) -> str:
    return _format(value, WEIGHT_PLACES)


def format_money(value: float) -> str:
    return _format(value, MONEY_PLACES)
