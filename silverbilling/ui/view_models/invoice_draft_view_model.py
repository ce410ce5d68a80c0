from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional, Sequence, Union

from silverbilling.domain.invoice_models import (
    DEFAULT_CGST_PERCENT,
    DEFAULT_LABOR_RATE_PER_KG,
    DEFAULT_SGST_PERCENT,
    DEFAULT_TOUCH,
    BillingType,
    FieldError,
    GstConfig,
    LineItem,
    Payment,
    PaymentMode,
    SaleComputation,
    coerce_number,
    coerce_optional_number,
    coerce_pieces,
)
from silverbilling.services.invoice_calculator import compute_totals
from silverbilling.services.invoice_validation import validate_draft

# Form field name -> (LineItem attribute, coercion)
_ITEM_FIELDS = {
    "description": ("description", lambda value: str(value or "")),
    "pieces": ("pieces", coerce_pieces),
    "grossWeight": ("gross_weight", coerce_optional_number),
    "stoneWeight": ("stone_weight", coerce_number),
    "wastage": ("wastage", coerce_number),
    "touch": ("touch", coerce_number),
    "laborRatePerKg": ("labor_rate_per_kg", coerce_number),
}


@dataclass(frozen=True)
class InvoiceDraft:
    """Immutable snapshot of an invoice being entered.

    Every ``with_*`` method returns a new draft; derived values (net weight,
    totals) are computed on demand and never stored.
    """

    items: tuple[LineItem, ...] = field(default_factory=lambda: (LineItem(),))
    customer_id: Optional[Any] = None
    billing_type: BillingType = BillingType.REGULAR
    silver_rate: float = 0.0
    cgst_percent: float = DEFAULT_CGST_PERCENT
    sgst_percent: float = DEFAULT_SGST_PERCENT
    payment: Payment = field(default_factory=Payment)
    default_touch: float = DEFAULT_TOUCH
    default_labor_rate_per_kg: float = DEFAULT_LABOR_RATE_PER_KG

    # ------------------------------------------------------------------ #
    # Derived values
    # ------------------------------------------------------------------ #
    @property
    def gst_config(self) -> GstConfig:
        return GstConfig.for_billing_type(
            self.billing_type,
            cgst_percent=self.cgst_percent,
            sgst_percent=self.sgst_percent,
        )

    def compute(self) -> SaleComputation:
        return compute_totals(
            self.items,
            silver_rate=self.silver_rate,
            gst=self.gst_config,
            payment=self.payment,
        )

    def validate(self) -> list[FieldError]:
        return validate_draft(
            customer_id=self.customer_id,
            items=self.items,
            silver_rate=self.silver_rate,
        )

    def blank_item(self) -> LineItem:
        return LineItem(
            touch=self.default_touch,
            labor_rate_per_kg=self.default_labor_rate_per_kg,
        )

    # ------------------------------------------------------------------ #
    # Transitions
    # ------------------------------------------------------------------ #
    def with_item_added(self) -> "InvoiceDraft":
        return replace(self, items=self.items + (self.blank_item(),))

    def with_item_removed(self, index: int) -> "InvoiceDraft":
        """Drop an item; the last remaining item is never removed."""
        if len(self.items) <= 1:
            return self
        self._check_index(index)
        return replace(self, items=self.items[:index] + self.items[index + 1:])

    def with_item_field(self, index: int, name: str, value: Any) -> "InvoiceDraft":
        """Set one form field on an item, coercing the raw input."""
        self._check_index(index)
        try:
            attribute, coerce = _ITEM_FIELDS[name]
        except KeyError:
            raise KeyError(f"Unknown item field: {name}") from None
        updated = replace(self.items[index], **{attribute: coerce(value)})
        return replace(self, items=self.items[:index] + (updated,) + self.items[index + 1:])

    def with_billing_type(self, billing_type: Union[BillingType, str]) -> "InvoiceDraft":
        if not isinstance(billing_type, BillingType):
            billing_type = BillingType.from_label(billing_type)
        return replace(self, billing_type=billing_type)

    def with_silver_rate(self, rate: Any) -> "InvoiceDraft":
        return replace(self, silver_rate=coerce_number(rate))

    def with_customer(self, customer_id: Optional[Any]) -> "InvoiceDraft":
        return replace(self, customer_id=customer_id)

    def with_gst_percents(self, *, cgst: Any = None, sgst: Any = None) -> "InvoiceDraft":
        return replace(
            self,
            cgst_percent=self.cgst_percent if cgst is None else coerce_number(cgst),
            sgst_percent=self.sgst_percent if sgst is None else coerce_number(sgst),
        )

    def with_payment(
        self,
        *,
        paid_amount: Any = None,
        paid_silver: Any = None,
        mode: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> "InvoiceDraft":
        current = self.payment
        payment = Payment(
            paid_amount=current.paid_amount if paid_amount is None else coerce_number(paid_amount),
            paid_silver=current.paid_silver if paid_silver is None else coerce_number(paid_silver),
            mode=current.mode if mode is None else PaymentMode.from_label(mode),
            notes=current.notes if notes is None else notes,
        )
        return replace(self, payment=payment)

    def reset(self) -> "InvoiceDraft":
        """Return a fresh draft keeping the rate, GST percents and item defaults."""
        return InvoiceDraft(
            items=(self.blank_item(),),
            silver_rate=self.silver_rate,
            cgst_percent=self.cgst_percent,
            sgst_percent=self.sgst_percent,
            default_touch=self.default_touch,
            default_labor_rate_per_kg=self.default_labor_rate_per_kg,
        )

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self.items):
            raise IndexError(f"Item index {index} out of range")


class InvoiceDraftViewModel:
    """Holds the current draft and applies form events to it."""

    def __init__(self, draft: Optional[InvoiceDraft] = None) -> None:
        self._draft = draft or InvoiceDraft()

    @property
    def draft(self) -> InvoiceDraft:
        return self._draft

    def items(self) -> Sequence[LineItem]:
        return self._draft.items

    def dispatch(self, action: str, **kwargs: Any) -> InvoiceDraft:
        """Apply a named transition (``item_field``, ``add_item`` ...) and return the new draft."""
        handler = {
            "add_item": self._draft.with_item_added,
            "remove_item": self._draft.with_item_removed,
            "item_field": self._draft.with_item_field,
            "billing_type": self._draft.with_billing_type,
            "silver_rate": self._draft.with_silver_rate,
            "customer": self._draft.with_customer,
            "gst_percents": self._draft.with_gst_percents,
            "payment": self._draft.with_payment,
            "reset": self._draft.reset,
        }.get(action)
        if handler is None:
            raise ValueError(f"Unsupported draft action: {action}")
        self._draft = handler(**kwargs)
        return self._draft

    def update_item_from_form(self, index: int, values: Mapping[str, Any]) -> InvoiceDraft:
        """Apply several raw form values to one item."""
        draft = self._draft
        for name, value in values.items():
            draft = draft.with_item_field(index, name, value)
        self._draft = draft
        return draft

    def compute_totals(self) -> SaleComputation:
        return self._draft.compute()

    def display_totals(self) -> dict[str, str]:
        return self._draft.compute().as_display()
