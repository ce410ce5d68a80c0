"""Presenter for the invoice (sale) entry experience."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Protocol, Sequence

from silverbilling.domain.invoice_models import FieldError, SaleComputation
from silverbilling.exceptions import SaleSubmissionError
from silverbilling.infrastructure.logger import sanitize_for_logging
from silverbilling.services.sale_payload import build_sale_payload
from silverbilling.ui.view_models import InvoiceDraft


class InvoiceView(Protocol):
    """Interface implemented by the billing form so the presenter can talk to it."""

    def capture_draft(self) -> InvoiceDraft:
        """Return the current draft."""

    def apply_totals(self, totals: Mapping[str, str]) -> None:
        """Display the formatted totals."""

    def show_errors(self, errors: Sequence[FieldError]) -> None:
        """Highlight the fields that block submission."""

    def show_status(self, message: str, timeout: int = 3000, level: str = "info") -> None:
        """Display a status message to the user."""

    def load_draft(self, draft: InvoiceDraft) -> None:
        """Replace the form contents with ``draft``."""


class SaleGateway(Protocol):
    """External sale API used to persist submitted invoices."""

    def create_sale(self, payload: Mapping[str, Any]) -> Mapping[str, Any]:
        """Persist the sale and return the stored record."""


@dataclass(frozen=True)
class SubmitOutcome:
    """Result of attempting to submit a sale."""

    success: bool
    message: str
    errors: List[FieldError] = field(default_factory=list)
    sale: Optional[Mapping[str, Any]] = None
    totals: Optional[SaleComputation] = None


class InvoicePresenter:
    """Orchestrates invoice workflows independent of the form widget."""

    def __init__(
        self,
        view: InvoiceView,
        gateway: SaleGateway,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._view = view
        self._gateway = gateway
        self._logger = logger or logging.getLogger(__name__)

    def refresh_totals(self) -> SaleComputation:
        """Recompute totals from the current draft and push them to the view."""
        draft = self._view.capture_draft()
        totals = draft.compute()
        self._view.apply_totals(totals.as_display())
        return totals

    def submit(self) -> SubmitOutcome:
        """Validate the draft, submit it and reset the form on success."""
        draft = self._view.capture_draft()
        errors = draft.validate()
        if errors:
            self._logger.info("Sale submission blocked by %d validation error(s)", len(errors))
            self._view.show_errors(errors)
            self._view.show_status(str(errors[0]), 4000, level="warning")
            return SubmitOutcome(False, "Please fix the highlighted fields.", errors=errors)

        totals = draft.compute()
        payload = build_sale_payload(draft)
        self._logger.debug("Submitting sale: %s", sanitize_for_logging(payload))
        try:
            sale = self._gateway.create_sale(payload)
        except SaleSubmissionError as exc:
            self._logger.warning("Sale rejected: %s", exc)
            self._view.show_status(f"Error creating sale: {exc}", 5000, level="error")
            return SubmitOutcome(False, str(exc), totals=totals)
        except Exception as exc:
            self._logger.error("Sale submission failed: %s", exc, exc_info=True)
            self._view.show_status(f"Error creating sale: {exc}", 5000, level="error")
            return SubmitOutcome(False, str(exc), totals=totals)

        self._logger.info(
            "Sale created: total=%.2f balance=%.2f",
            totals.total_amount,
            totals.balance_amount,
        )
        self._view.load_draft(draft.reset())
        self._view.show_status("Sale created successfully!", 3000)
        return SubmitOutcome(True, "Sale created successfully!", sale=sale, totals=totals)
