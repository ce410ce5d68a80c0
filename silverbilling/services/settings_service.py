"""Billing settings service built on QSettings."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from PyQt5.QtCore import QSettings

from silverbilling.domain.invoice_models import (
    DEFAULT_CGST_PERCENT,
    DEFAULT_LABOR_RATE_PER_KG,
    DEFAULT_SGST_PERCENT,
    DEFAULT_TOUCH,
    BillingType,
    GstConfig,
    LineItem,
)
from silverbilling.exceptions import SettingsError
from silverbilling.infrastructure.app_constants import SETTINGS_APP, SETTINGS_ORG


@dataclass(frozen=True)
class ItemDefaults:
    touch: float = DEFAULT_TOUCH
    labor_rate_per_kg: float = DEFAULT_LABOR_RATE_PER_KG

    def new_item(self) -> LineItem:
        """Return a blank line item pre-filled with these defaults."""
        return LineItem(touch=self.touch, labor_rate_per_kg=self.labor_rate_per_kg)


class BillingSettingsService:
    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._settings = QSettings(SETTINGS_ORG, SETTINGS_APP)
        self._logger = logger or logging.getLogger(__name__)

    # --- Item defaults -------------------------------------------------
    def load_item_defaults(self) -> ItemDefaults:
        return ItemDefaults(
            touch=self._load_float("billing/default_touch", DEFAULT_TOUCH),
            labor_rate_per_kg=self._load_float(
                "billing/default_labor_rate_per_kg", DEFAULT_LABOR_RATE_PER_KG
            ),
        )

    def save_item_defaults(self, defaults: ItemDefaults) -> None:
        self._require_non_negative("touch", defaults.touch)
        self._require_non_negative("labor rate", defaults.labor_rate_per_kg)
        self._settings.setValue("billing/default_touch", float(defaults.touch))
        self._settings.setValue(
            "billing/default_labor_rate_per_kg", float(defaults.labor_rate_per_kg)
        )
        self._settings.sync()

    # --- GST -----------------------------------------------------------
    def load_gst_percents(self) -> tuple[float, float]:
        return (
            self._load_float("billing/cgst_percent", DEFAULT_CGST_PERCENT),
            self._load_float("billing/sgst_percent", DEFAULT_SGST_PERCENT),
        )

    def save_gst_percents(self, cgst_percent: float, sgst_percent: float) -> None:
        self._require_non_negative("CGST percent", cgst_percent)
        self._require_non_negative("SGST percent", sgst_percent)
        self._settings.setValue("billing/cgst_percent", float(cgst_percent))
        self._settings.setValue("billing/sgst_percent", float(sgst_percent))
        self._settings.sync()

    def gst_config_for(self, billing_type: BillingType) -> GstConfig:
        cgst, sgst = self.load_gst_percents()
        return GstConfig.for_billing_type(
            billing_type, cgst_percent=cgst, sgst_percent=sgst
        )

    def _load_float(self, key: str, default: float) -> float:
        value = self._settings.value(key, defaultValue=default)
        try:
            number = float(value)
        except (TypeError, ValueError):
            self._logger.warning("Ignoring invalid setting %s=%r", key, value)
            return default
        if number < 0:
            self._logger.warning("Ignoring negative setting %s=%r", key, value)
            return default
        return number

    @staticmethod
    def _require_non_negative(name: str, value: float) -> None:
        if value is None or float(value) < 0:
            raise SettingsError(f"{name} cannot be negative")
