"""Silver rate refresh service."""
from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from PyQt5.QtCore import QObject, pyqtSignal

from silverbilling.domain.silver_rate import SilverRate, current_rate
from silverbilling.exceptions import RateServiceError

RateFetcher = Callable[[], Mapping[str, Any]]
HistoryFetcher = Callable[[], Iterable[Mapping[str, Any]]]


def parse_history(payloads: Iterable[Mapping[str, Any]], logger: Optional[logging.Logger] = None) -> Sequence[SilverRate]:
    """Parse provider history entries, skipping the ones that cannot be read."""
    logger = logger or logging.getLogger(__name__)
    rates = []
    for payload in payloads or ():
        try:
            rates.append(SilverRate.from_payload(payload))
        except RateServiceError as exc:
            logger.warning("Skipping unreadable rate entry %r: %s", payload, exc)
    return tuple(rates)


class SilverRateService(QObject):
    """Fetch the current silver rate off the UI thread and publish it."""

    rate_updated = pyqtSignal(object)

    def __init__(
        self,
        fetch_current: RateFetcher,
        fetch_history: Optional[HistoryFetcher] = None,
        parent: Optional[QObject] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(parent)
        self._fetch_current = fetch_current
        self._fetch_history = fetch_history
        self._logger = logger or logging.getLogger(__name__)
        self._rate_fetch_in_progress = False
        self._last_rate: Optional[SilverRate] = None

    @property
    def last_rate(self) -> Optional[SilverRate]:
        return self._last_rate

    def refresh_now(self) -> None:
        if self._rate_fetch_in_progress:
            self._logger.debug("Rate fetch already running; skipping refresh")
            return
        self._rate_fetch_in_progress = True
        self._logger.info("Silver rate fetch started")

        def _worker():
            rate = None
            try:
                rate = self.fetch_rate()
            except RateServiceError as exc:
                self._logger.warning("Silver rate unavailable: %s", exc)
            except Exception as exc:
                self._logger.error("Silver rate fetch failed: %s", exc, exc_info=True)
            if rate is not None:
                self._last_rate = rate
            self._rate_fetch_in_progress = False
            self.rate_updated.emit(rate)

        threading.Thread(target=_worker, daemon=True).start()

    def fetch_rate(self) -> SilverRate:
        """Fetch the current rate synchronously.

        Falls back to the newest active history entry when the current-rate
        endpoint returns nothing usable.
        """
        try:
            rate = SilverRate.from_payload(self._fetch_current())
            self._logger.info("Silver rate %.2f for %s", rate.rate_per_gram, rate.date)
            return rate
        except RateServiceError as exc:
            if self._fetch_history is None:
                raise
            self._logger.warning("Current rate unusable (%s); trying history", exc)
        fallback = current_rate(parse_history(self._fetch_history(), self._logger))
        if fallback is None:
            raise RateServiceError("No active silver rate in history")
        return fallback
