"""View-model helpers for UI components."""

from .invoice_draft_view_model import (
    InvoiceDraft,
    InvoiceDraftViewModel,
)

__all__ = [
    "InvoiceDraft",
    "InvoiceDraftViewModel",
]
