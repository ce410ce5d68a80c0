"""Inputs and results for the metal purity mixing calculators."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, Sequence, TypeVar

from silverbilling.exceptions import ConstraintViolation

STANDARD_MIX_PURITIES = (50.0, 62.5, 72.5)


class MixType(Enum):
    """The four calculators offered on the metal calculator screen."""

    RAW_PURE_DILUTION = "type1"
    PURE_DILUTION = "type2"
    STANDARD_MIX = "type3"
    MULTI_BATCH = "type4"

    @classmethod
    def from_label(cls, value: str | None) -> "MixType":
        normalized = (value or "").strip().lower()
        for kind in cls:
            if kind.value == normalized or kind.name.lower() == normalized:
                return kind
        raise ValueError(f"Unknown calculator type: {value!r}")


@dataclass(frozen=True)
class RawPureDilutionResult:
    pure_in_raw: float
    total_pure_silver: float
    initial_weight: float
    current_purity: float
    final_total_mass: float
    copper_to_add: float


@dataclass(frozen=True)
class PureDilutionResult:
    pure_silver: float
    target_purity: float
    final_total_mass: float
    copper_to_add: float


@dataclass(frozen=True)
class StandardMixResult:
    pure_silver: float
    target_purity: float
    final_mix_mass: float
    addition_needed: float
    jast_to_add: float
    copper_to_add: float


@dataclass(frozen=True)
class Batch:
    weight: float
    purity: float

    @property
    def pure_silver(self) -> float:
        return self.weight * self.purity / 100.0


@dataclass(frozen=True)
class BatchDetail:
    batch_number: int
    weight: float
    purity: float
    pure_silver: float


@dataclass(frozen=True)
class MultiBatchResult:
    batches: Sequence[BatchDetail]
    total_weight: float
    total_pure_silver: float
    current_purity: float
    target_purity: float
    pure_silver_to_add: float
    final_total_pure: float
    final_total_weight: float
    final_purity: float


T = TypeVar("T")


@dataclass(frozen=True)
class MixOutcome(Generic[T]):
    """Tagged result of a checked mixing calculation.

    Exactly one of ``value`` and ``error`` is set. ``value`` is kept on
    constraint violations as ``raw`` so callers that prefer a warning banner can
    still show the computed numbers.
    """

    value: Optional[T] = None
    error: Optional[ConstraintViolation] = None
    raw: Optional[T] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "MixOutcome[T]":
        return cls(value=value, raw=value)

    @classmethod
    def failure(cls, error: ConstraintViolation, raw: Optional[T] = None) -> "MixOutcome[T]":
        return cls(error=error, raw=raw)

    def unwrap(self) -> T:
        """Return the value or raise the stored constraint violation."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
