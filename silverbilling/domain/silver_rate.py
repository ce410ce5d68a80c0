"""Silver rate records and history helpers."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional, Sequence

from silverbilling.exceptions import RateServiceError


def _parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value or "").strip()
    if not text:
        raise RateServiceError("Silver rate entry is missing a date")
    try:
        # Accept plain dates and ISO timestamps ("2024-05-01T00:00:00.000Z").
        return date.fromisoformat(text[:10])
    except ValueError as exc:
        raise RateServiceError(f"Invalid silver rate date: {value!r}") from exc


@dataclass(frozen=True)
class SilverRate:
    """Rate per gram published for a given day."""

    date: date
    rate_per_gram: float
    is_active: bool = True

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "SilverRate":
        """Parse the ``{ratePerGram, date}`` shape returned by the rate provider."""
        if not payload:
            raise RateServiceError("Empty silver rate payload")
        raw_rate = payload.get("ratePerGram")
        try:
            rate = float(raw_rate)
        except (TypeError, ValueError) as exc:
            raise RateServiceError(f"Invalid ratePerGram: {raw_rate!r}") from exc
        if rate <= 0:
            raise RateServiceError(f"Silver rate must be positive, got {rate}")
        return cls(
            date=_parse_date(payload.get("date")),
            rate_per_gram=rate,
            is_active=bool(payload.get("isActive", True)),
        )


@dataclass(frozen=True)
class RateChange:
    """Day-over-day movement of a rate against the previous entry."""

    rate: SilverRate
    previous: Optional[SilverRate]
    change: float
    change_percent: float

    @property
    def direction(self) -> str:
        if self.previous is None or self.change == 0:
            return "flat"
        return "up" if self.change > 0 else "down"


def _newest_first(history: Iterable[SilverRate]) -> list[SilverRate]:
    return sorted(history, key=lambda rate: rate.date, reverse=True)


def current_rate(history: Iterable[SilverRate]) -> Optional[SilverRate]:
    """Return the most recent active rate, or ``None`` when there is none."""
    for rate in _newest_first(history):
        if rate.is_active:
            return rate
    return None


def rate_on(history: Iterable[SilverRate], day: date) -> Optional[SilverRate]:
    """Return the active rate in force on ``day`` (latest entry on or before it)."""
    for rate in _newest_first(history):
        if rate.is_active and rate.date <= day:
            return rate
    return None


def rate_changes(history: Iterable[SilverRate]) -> Sequence[RateChange]:
    """Compare each entry with the one published before it, newest first."""
    ordered = _newest_first(history)
    changes: list[RateChange] = []
    for index, rate in enumerate(ordered):
        previous = ordered[index + 1] if index + 1 < len(ordered) else None
        if previous is None:
            changes.append(RateChange(rate=rate, previous=None, change=0.0, change_percent=0.0))
            continue
        change = rate.rate_per_gram - previous.rate_per_gram
        change_percent = change / previous.rate_per_gram * 100.0
        changes.append(
            RateChange(rate=rate, previous=previous, change=change, change_percent=change_percent)
        )
    return tuple(changes)
