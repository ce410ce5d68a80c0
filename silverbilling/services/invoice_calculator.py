"""Pure calculation helpers for invoice entry."""
from __future__ import annotations

from typing import Iterable, Optional

from silverbilling.domain.invoice_models import (
    GstConfig,
    ItemComputation,
    LineItem,
    Payment,
    SaleComputation,
    coerce_number,
)


def compute_net_weight(item: LineItem) -> float:
    """Return gross minus stone weight at full precision.

    Blank weights count as zero. A stone weight above the gross weight yields a
    negative net weight; rejecting that is left to validation.
    """
    gross = coerce_number(item.gross_weight)
    stone = coerce_number(item.stone_weight)
    return gross - stone


def compute_silver_weight(*, wastage: float, touch: float, net_weight: float) -> float:
    """Return the billable silver content for an item."""
    return (wastage + touch) * net_weight / 100.0


def compute_labor_charge(*, gross_weight: float, labor_rate_per_kg: float) -> float:
    """Return the labor charge; the rate is quoted per kilogram of gross weight."""
    return gross_weight * labor_rate_per_kg / 1000.0


def compute_item(item: LineItem, silver_rate: float) -> ItemComputation:
    """Compute unrounded silver weight, labor and amount for a single item."""
    gross = coerce_number(item.gross_weight)
    net_weight = compute_net_weight(item)
    silver_weight = compute_silver_weight(
        wastage=coerce_number(item.wastage),
        touch=coerce_number(item.touch),
        net_weight=net_weight,
    )
    labor = compute_labor_charge(
        gross_weight=gross,
        labor_rate_per_kg=coerce_number(item.labor_rate_per_kg),
    )
    return ItemComputation(
        net_weight=net_weight,
        silver_weight=silver_weight,
        labor_charge=labor,
        amount=silver_weight * silver_rate + labor,
    )


def compute_gst(subtotal: float, gst: GstConfig) -> tuple[float, float]:
    """Return ``(cgst, sgst)`` for the subtotal, both zero when GST does not apply."""
    if not gst.applicable:
        return 0.0, 0.0
    return subtotal * gst.cgst_percent / 100.0, subtotal * gst.sgst_percent / 100.0


def compute_totals(
    items: Iterable[LineItem],
    *,
    silver_rate: float,
    gst: Optional[GstConfig] = None,
    payment: Optional[Payment] = None,
) -> SaleComputation:
    """Compute aggregate invoice totals and reconcile the two-part payment.

    Per-item values are accumulated unrounded; rounding happens only when the
    result is formatted for display.
    """
    gst = gst or GstConfig()
    payment = payment or Payment()
    rate = coerce_number(silver_rate)

    computed: list[ItemComputation] = []
    total_net = total_wastage = total_silver = total_labor = subtotal = 0.0
    for item in items:
        result = compute_item(item, rate)
        computed.append(result)
        total_net += result.net_weight
        total_wastage += coerce_number(item.wastage)
        total_silver += result.silver_weight
        total_labor += result.labor_charge
        subtotal += result.amount

    cgst, sgst = compute_gst(subtotal, gst)
    total_amount = subtotal + cgst + sgst

    paid_silver_value = coerce_number(payment.paid_silver) * rate
    effective_paid = coerce_number(payment.paid_amount) + paid_silver_value

    return SaleComputation(
        items=tuple(computed),
        total_net_weight=total_net,
        total_wastage=total_wastage,
        total_silver_weight=total_silver,
        total_labor=total_labor,
        subtotal=subtotal,
        cgst=cgst,
        sgst=sgst,
        total_amount=total_amount,
        paid_silver_value=paid_silver_value,
        effective_paid=effective_paid,
        balance_amount=total_amount - effective_paid,
    )
