"""Translate invoice drafts into the payload expected by the sale API."""
from __future__ import annotations

from typing import Any, Dict, List

from silverbilling.domain.invoice_models import LineItem, coerce_number
from silverbilling.services.invoice_calculator import compute_net_weight


def item_payload(item: LineItem) -> Dict[str, Any]:
    """Return a line item with every numeric field coerced to a number."""
    return {
        "description": item.description.strip(),
        "pieces": int(item.pieces or 1),
        "grossWeight": coerce_number(item.gross_weight),
        "stoneWeight": coerce_number(item.stone_weight),
        "netWeight": round(compute_net_weight(item), 3),
        "wastage": coerce_number(item.wastage),
        "touch": coerce_number(item.touch),
        "laborRatePerKg": coerce_number(item.labor_rate_per_kg),
    }


def build_sale_payload(draft) -> Dict[str, Any]:
    """Package an :class:`InvoiceDraft` for submission.

    The totals are recomputed by the backend; only inputs are sent.
    """
    gst = draft.gst_config
    items: List[Dict[str, Any]] = [item_payload(item) for item in draft.items]
    return {
        "customerId": draft.customer_id,
        "billingType": draft.billing_type.value,
        "silverRate": coerce_number(draft.silver_rate),
        "gstApplicable": gst.applicable,
        "cgstPercent": gst.cgst_percent,
        "sgstPercent": gst.sgst_percent,
        "paidAmount": coerce_number(draft.payment.paid_amount),
        "paidSilver": coerce_number(draft.payment.paid_silver),
        "paymentMode": draft.payment.mode.value,
        "notes": draft.payment.notes,
        "items": items,
    }
