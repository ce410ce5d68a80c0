"""Presenter for the metal purity calculators."""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Protocol, Sequence

from silverbilling.domain.invoice_models import coerce_optional_number
from silverbilling.domain.mixing_models import Batch, MixOutcome, MixType
from silverbilling.exceptions import InvalidInputError
from silverbilling.services import purity_calculator


class MetalCalculatorView(Protocol):
    def show_result(self, kind: MixType, result: Mapping[str, Any]) -> None:
        """Display formatted calculator output."""

    def show_error(self, kind: MixType, message: str) -> None:
        """Display why the calculation could not be shown."""


def _required(form: Mapping[str, Any], key: str, label: str) -> float:
    value = coerce_optional_number(form.get(key))
    if value is None:
        raise InvalidInputError(f"Please enter {label}")
    return value


def _batches(form: Mapping[str, Any]) -> Sequence[Batch]:
    batches = []
    for number, raw in enumerate(form.get("batches") or (), start=1):
        weight = coerce_optional_number(raw.get("weight"))
        purity = coerce_optional_number(raw.get("purity"))
        if weight is None or purity is None:
            raise InvalidInputError("Please fill all batch weights and purities")
        batches.append(Batch(weight=weight, purity=purity))
    return batches


def _run(kind: MixType, form: Mapping[str, Any]) -> MixOutcome:
    if kind is MixType.RAW_PURE_DILUTION:
        return purity_calculator.checked_dilute_raw_and_pure(
            pure_silver_weight=_required(form, "pureSilverWeight", "pure silver weight"),
            raw_silver_weight=_required(form, "rawSilverWeight", "raw silver weight"),
            raw_silver_purity=_required(form, "rawSilverPurity", "raw silver purity"),
            target_purity=_required(form, "targetPurity", "target purity"),
        )
    if kind is MixType.PURE_DILUTION:
        return purity_calculator.checked_dilute_pure(
            pure_silver_weight=_required(form, "pureSilverWeight", "pure silver weight"),
            target_purity=_required(form, "targetPurity", "target purity"),
        )
    if kind is MixType.STANDARD_MIX:
        return purity_calculator.checked_standard_mix(
            pure_silver_weight=_required(form, "pureSilverWeight", "pure silver weight"),
            target_purity=_required(form, "targetPurity", "target purity"),
        )
    return purity_calculator.checked_raise_batches_to_target(
        _batches(form),
        target_purity=_required(form, "targetPurity", "target purity"),
    )


def format_result(kind: MixType, result: Any) -> Dict[str, Any]:
    """Format a calculator result with the precision shown on screen."""
    if kind is MixType.RAW_PURE_DILUTION:
        return {
            "totalPureSilver": f"{result.total_pure_silver:.3f}",
            "initialWeight": f"{result.initial_weight:.3f}",
            "currentPurity": f"{result.current_purity:.2f}",
            "finalTotalMass": f"{result.final_total_mass:.3f}",
            "copperToAdd": f"{result.copper_to_add:.3f}",
        }
    if kind is MixType.PURE_DILUTION:
        return {
            "pureSilver": f"{result.pure_silver:.3f}",
            "targetPurity": f"{result.target_purity:.2f}",
            "finalTotalMass": f"{result.final_total_mass:.3f}",
            "copperToAdd": f"{result.copper_to_add:.3f}",
        }
    if kind is MixType.STANDARD_MIX:
        return {
            "pureSilver": f"{result.pure_silver:.3f}",
            "targetPurity": f"{result.target_purity:.2f}",
            "finalMixMass": f"{result.final_mix_mass:.3f}",
            "additionNeeded": f"{result.addition_needed:.3f}",
            "jastToAdd": f"{result.jast_to_add:.3f}",
            "copperToAdd": f"{result.copper_to_add:.3f}",
        }
    return {
        "batchDetails": [
            {
                "batchNumber": detail.batch_number,
                "weight": f"{detail.weight:.2f}",
                "purity": f"{detail.purity:.2f}",
                "pureSilver": f"{detail.pure_silver:.3f}",
            }
            for detail in result.batches
        ],
        "totalWeight": f"{result.total_weight:.2f}",
        "totalPureSilver": f"{result.total_pure_silver:.3f}",
        "currentPurity": f"{result.current_purity:.2f}",
        "targetPurity": f"{result.target_purity:.2f}",
        "pureSilverToAdd": f"{result.pure_silver_to_add:.3f}",
        "finalTotalPure": f"{result.final_total_pure:.3f}",
        "finalTotalWeight": f"{result.final_total_weight:.3f}",
        "finalPurity": f"{result.final_purity:.2f}",
    }


class MetalCalculatorPresenter:
    """Runs a calculator from raw form values and reports back to the view.

    Results that violate a physical constraint are not displayed; the view gets
    the violation message instead.
    """

    def __init__(self, view: MetalCalculatorView, logger: Optional[logging.Logger] = None) -> None:
        self._view = view
        self._logger = logger or logging.getLogger(__name__)

    def calculate(self, kind: MixType, form: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            outcome = _run(kind, form)
        except InvalidInputError as exc:
            self._logger.info("%s rejected input: %s", kind.value, exc)
            self._view.show_error(kind, str(exc))
            return None

        if not outcome.ok:
            self._logger.info("%s constraint violation: %s", kind.value, outcome.error)
            self._view.show_error(kind, str(outcome.error))
            return None

        formatted = format_result(kind, outcome.value)
        self._view.show_result(kind, formatted)
        return formatted
