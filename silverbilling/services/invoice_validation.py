"""Pre-submission checks for invoice drafts."""
from __future__ import annotations

from typing import Any, List, Optional, Sequence

from silverbilling.domain.invoice_models import FieldError, LineItem


def validate_item(item: LineItem, index: int) -> List[FieldError]:
    """Return the field errors for a single line item."""
    errors: List[FieldError] = []
    if not (item.description or "").strip():
        errors.append(FieldError("description", "Description is required", index))
    if not item.has_gross_weight:
        errors.append(FieldError("grossWeight", "Gross weight is required", index))
    elif item.gross_weight < 0:
        errors.append(FieldError("grossWeight", "Gross weight cannot be negative", index))
    if item.stone_weight < 0:
        errors.append(FieldError("stoneWeight", "Stone weight cannot be negative", index))
    elif item.has_gross_weight and item.stone_weight > item.gross_weight:
        errors.append(
            FieldError("stoneWeight", "Stone weight cannot exceed gross weight", index)
        )
    if item.pieces < 1:
        errors.append(FieldError("pieces", "Pieces must be at least 1", index))
    if item.wastage < 0:
        errors.append(FieldError("wastage", "Wastage cannot be negative", index))
    return errors


def validate_draft(
    *,
    customer_id: Optional[Any],
    items: Sequence[LineItem],
    silver_rate: Optional[float] = None,
) -> List[FieldError]:
    """Collect every problem that blocks submitting a sale.

    The calculator itself accepts any input; this is the step callers run
    before handing a draft to the sale API.
    """
    errors: List[FieldError] = []
    if customer_id is None or not str(customer_id).strip():
        errors.append(FieldError("customerId", "Please select a customer"))
    if silver_rate is not None and silver_rate <= 0:
        errors.append(FieldError("silverRate", "Silver rate must be greater than zero"))
    if not items:
        errors.append(FieldError("items", "Add at least one item"))
    for index, item in enumerate(items):
        errors.extend(validate_item(item, index))
    return errors
