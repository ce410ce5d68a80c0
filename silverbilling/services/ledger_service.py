"""Jama/Kharch ledger helpers."""
from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence, TypeVar, Union

from silverbilling.domain.ledger_models import (
    CashEntry,
    LedgerDirection,
    LedgerSummary,
    SilverEntry,
    SilverType,
)
from silverbilling.exceptions import InvalidInputError

Entry = TypeVar("Entry", CashEntry, SilverEntry)


def compute_raw_silver(gross_weight: float, touch: float) -> float:
    """Return the fine silver contained in raw silver of the given touch."""
    if gross_weight < 0:
        raise InvalidInputError(f"Gross weight cannot be negative (got {gross_weight})")
    if touch < 0 or touch > 100:
        raise InvalidInputError(f"Touch must be between 0 and 100 (got {touch})")
    return gross_weight * touch / 100.0


def raw_silver_entry(
    *,
    day: date,
    direction: LedgerDirection,
    gross_weight: float,
    touch: float,
    name: str,
    description: str = "",
    form_no: str = "",
) -> SilverEntry:
    """Build a raw-silver entry whose weight is derived from gross weight and touch."""
    weight = round(compute_raw_silver(gross_weight, touch), 3)
    return SilverEntry(
        date=day,
        direction=direction,
        silver_weight=weight,
        name=name,
        description=description,
        silver_type=SilverType.RAW,
        form_no=form_no,
        gross_weight=gross_weight,
        touch=touch,
    )


def summarize_entries(entries: Iterable[Union[CashEntry, SilverEntry]]) -> LedgerSummary:
    """Total the jama and kharch sides of a ledger."""
    jama = kharch = 0.0
    count = 0
    for entry in entries:
        count += 1
        if entry.direction is LedgerDirection.JAMA:
            jama += entry.quantity
        else:
            kharch += entry.quantity
    return LedgerSummary(total_jama=jama, total_kharch=kharch, entry_count=count)


def filter_entries(entries: Iterable[Entry], term: Optional[str]) -> Sequence[Entry]:
    """Return entries whose name or description contains ``term`` or whose date matches it."""
    entry_list = tuple(entries)
    needle = (term or "").strip().lower()
    if not needle:
        return entry_list
    return tuple(
        entry
        for entry in entry_list
        if needle in entry.name.lower()
        or (entry.description and needle in entry.description.lower())
        or needle in entry.date.isoformat()
    )


def entries_for(entries: Iterable[Entry], direction: LedgerDirection) -> Sequence[Entry]:
    """Return the entries on one side of the ledger (the JAMA or KHARCH tab)."""
    return tuple(entry for entry in entries if entry.direction is direction)
