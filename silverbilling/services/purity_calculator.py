"""Metal purity mixing calculators.

Masses are grams and purities are percentages. The plain routines solve the
mixing equation and raise :class:`InvalidInputError` when the equation is
undefined. The ``checked_*`` adapters additionally verify the physical
constraint (nothing can be taken out of a melt) and return a
:class:`MixOutcome` instead of a possibly negative mass.
"""
from __future__ import annotations

import logging
from typing import Iterable, Sequence

from silverbilling.domain.mixing_models import (
    Batch,
    BatchDetail,
    MixOutcome,
    MultiBatchResult,
    PureDilutionResult,
    RawPureDilutionResult,
    StandardMixResult,
)
from silverbilling.exceptions import ConstraintViolation, InvalidInputError

logger = logging.getLogger(__name__)

# Tolerance for floating point noise when checking non-negativity.
EPSILON = 1e-9
MIN_BATCHES = 2


def _require_non_negative(name: str, value: float) -> None:
    if value < 0:
        raise InvalidInputError(f"{name} cannot be negative (got {value})")


def _require_purity(name: str, value: float) -> None:
    if value < 0 or value > 100:
        raise InvalidInputError(f"{name} must be between 0 and 100 (got {value})")


def _require_target(value: float) -> None:
    if value <= 0 or value >= 100:
        raise InvalidInputError(
            f"Target purity must be greater than 0 and less than 100 (got {value})"
        )


def dilute_raw_and_pure(
    *,
    pure_silver_weight: float,
    raw_silver_weight: float,
    raw_silver_purity: float,
    target_purity: float,
) -> RawPureDilutionResult:
    """Blend pure and raw silver, then dilute the melt to ``target_purity`` with copper."""
    _require_non_negative("Pure silver weight", pure_silver_weight)
    _require_non_negative("Raw silver weight", raw_silver_weight)
    _require_purity("Raw silver purity", raw_silver_purity)
    _require_target(target_purity)

    initial_weight = pure_silver_weight + raw_silver_weight
    if initial_weight <= 0:
        raise InvalidInputError("Total starting weight must be greater than zero")

    pure_in_raw = raw_silver_weight * raw_silver_purity / 100.0
    total_pure_silver = pure_silver_weight + pure_in_raw
    current_purity = total_pure_silver / initial_weight * 100.0
    final_total_mass = total_pure_silver / (target_purity / 100.0)
    return RawPureDilutionResult(
        pure_in_raw=pure_in_raw,
        total_pure_silver=total_pure_silver,
        initial_weight=initial_weight,
        current_purity=current_purity,
        final_total_mass=final_total_mass,
        copper_to_add=final_total_mass - initial_weight,
    )


def dilute_pure(*, pure_silver_weight: float, target_purity: float) -> PureDilutionResult:
    """Dilute pure silver to ``target_purity`` with copper."""
    _require_non_negative("Pure silver weight", pure_silver_weight)
    _require_target(target_purity)

    final_total_mass = pure_silver_weight / (target_purity / 100.0)
    return PureDilutionResult(
        pure_silver=pure_silver_weight,
        target_purity=target_purity,
        final_total_mass=final_total_mass,
        copper_to_add=final_total_mass - pure_silver_weight,
    )


def standard_mix(*, pure_silver_weight: float, target_purity: float) -> StandardMixResult:
    """Dilute pure silver with equal parts jast and copper."""
    _require_non_negative("Pure silver weight", pure_silver_weight)
    _require_target(target_purity)

    final_mix_mass = pure_silver_weight / (target_purity / 100.0)
    addition_needed = final_mix_mass - pure_silver_weight
    half = addition_needed / 2.0
    return StandardMixResult(
        pure_silver=pure_silver_weight,
        target_purity=target_purity,
        final_mix_mass=final_mix_mass,
        addition_needed=addition_needed,
        jast_to_add=half,
        copper_to_add=half,
    )


def raise_batches_to_target(
    batches: Iterable[Batch], *, target_purity: float
) -> MultiBatchResult:
    """Work out how much pure silver lifts the blended batches to ``target_purity``.

    Solves ``(pure + x) / (weight + x) = target / 100`` for ``x``.
    """
    batch_list: Sequence[Batch] = tuple(batches)
    if len(batch_list) < MIN_BATCHES:
        raise InvalidInputError(f"At least {MIN_BATCHES} batches are required")
    _require_target(target_purity)

    details: list[BatchDetail] = []
    total_pure_silver = total_weight = 0.0
    for number, batch in enumerate(batch_list, start=1):
        _require_non_negative(f"Batch {number} weight", batch.weight)
        _require_purity(f"Batch {number} purity", batch.purity)
        pure = batch.pure_silver
        total_pure_silver += pure
        total_weight += batch.weight
        details.append(
            BatchDetail(
                batch_number=number,
                weight=batch.weight,
                purity=batch.purity,
                pure_silver=pure,
            )
        )

    if total_weight <= 0:
        raise InvalidInputError("Total batch weight must be greater than zero")

    current_purity = total_pure_silver / total_weight * 100.0
    to_add = (target_purity * total_weight - 100.0 * total_pure_silver) / (100.0 - target_purity)
    final_total_pure = total_pure_silver + to_add
    final_total_weight = total_weight + to_add
    if final_total_weight <= EPSILON:
        # Only reachable when the blend is already pure silver.
        raise InvalidInputError(
            f"Batches are already {current_purity:.2f}% pure; "
            "adding pure silver cannot bring them down to the target purity"
        )
    final_purity = final_total_pure / final_total_weight * 100.0
    return MultiBatchResult(
        batches=tuple(details),
        total_weight=total_weight,
        total_pure_silver=total_pure_silver,
        current_purity=current_purity,
        target_purity=target_purity,
        pure_silver_to_add=to_add,
        final_total_pure=final_total_pure,
        final_total_weight=final_total_weight,
        final_purity=final_purity,
    )


# --------------------------------------------------------------------------- #
# Precondition-checking adapters
# --------------------------------------------------------------------------- #
def _negative_copper(value: float) -> ConstraintViolation:
    return ConstraintViolation(
        "Cannot dilute to a purity higher than the current melt; "
        f"copper to add would be {value:.3f} g",
        field="copperToAdd",
        value=value,
    )


def checked_dilute_raw_and_pure(**kwargs: float) -> MixOutcome[RawPureDilutionResult]:
    result = dilute_raw_and_pure(**kwargs)
    if result.copper_to_add < -EPSILON:
        logger.debug("Type 1 constraint violated: %s", result)
        return MixOutcome.failure(_negative_copper(result.copper_to_add), raw=result)
    return MixOutcome.success(result)


def checked_dilute_pure(**kwargs: float) -> MixOutcome[PureDilutionResult]:
    result = dilute_pure(**kwargs)
    if result.copper_to_add < -EPSILON:
        return MixOutcome.failure(_negative_copper(result.copper_to_add), raw=result)
    return MixOutcome.success(result)


def checked_standard_mix(**kwargs: float) -> MixOutcome[StandardMixResult]:
    result = standard_mix(**kwargs)
    if result.addition_needed < -EPSILON:
        return MixOutcome.failure(_negative_copper(result.copper_to_add), raw=result)
    return MixOutcome.success(result)


def checked_raise_batches_to_target(
    batches: Iterable[Batch], *, target_purity: float
) -> MixOutcome[MultiBatchResult]:
    result = raise_batches_to_target(batches, target_purity=target_purity)
    if result.pure_silver_to_add < -EPSILON:
        logger.debug("Type 4 constraint violated: %s", result)
        return MixOutcome.failure(
            ConstraintViolation(
                "Target purity is below the current blended purity "
                f"({result.current_purity:.2f}%); pure silver cannot be removed",
                field="pureSilverToAdd",
                value=result.pure_silver_to_add,
            ),
            raw=result,
        )
    return MixOutcome.success(result)
