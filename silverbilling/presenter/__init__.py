"""Presenter layer modules."""

from .invoice_presenter import (
    InvoicePresenter,
    InvoiceView,
    SaleGateway,
    SubmitOutcome,
)
from .metal_calculator_presenter import (
    MetalCalculatorPresenter,
    MetalCalculatorView,
    format_result,
)

__all__ = [
    "InvoicePresenter",
    "InvoiceView",
    "SaleGateway",
    "SubmitOutcome",
    "MetalCalculatorPresenter",
    "MetalCalculatorView",
    "format_result",
]
