import logging

import pytest

from silverbilling.domain.invoice_models import BillingType
from silverbilling.exceptions import SettingsError
from silverbilling.services.settings_service import BillingSettingsService, ItemDefaults


def _service():
    return BillingSettingsService(logger=logging.getLogger("test_settings_service"))


def test_defaults_when_nothing_saved(settings_stub):
    service = _service()

    defaults = service.load_item_defaults()

    assert defaults == ItemDefaults(touch=13.0, labor_rate_per_kg=500.0)
    assert service.load_gst_percents() == (1.5, 1.5)


def test_item_defaults_round_trip(settings_stub):
    service = _service()
    service.save_item_defaults(ItemDefaults(touch=14.5, labor_rate_per_kg=650.0))

    defaults = _service().load_item_defaults()
    item = defaults.new_item()

    assert defaults.touch == 14.5
    assert item.labor_rate_per_kg == 650.0
    assert item.gross_weight is None


def test_gst_config_follows_billing_type(settings_stub):
    service = _service()
    service.save_gst_percents(2.5, 2.0)

    wholesale = service.gst_config_for(BillingType.WHOLESALE)
    regular = service.gst_config_for(BillingType.REGULAR)

    assert wholesale.applicable
    assert (wholesale.cgst_percent, wholesale.sgst_percent) == (2.5, 2.0)
    assert not regular.applicable


def test_negative_values_are_rejected(settings_stub):
    service = _service()
    with pytest.raises(SettingsError):
        service.save_gst_percents(-1.0, 1.5)
    with pytest.raises(SettingsError):
        service.save_item_defaults(ItemDefaults(touch=-2.0))
    assert service.load_gst_percents() == (1.5, 1.5)


def test_corrupt_stored_value_falls_back_to_default(settings_stub):
    settings_stub().setValue("billing/default_touch", "abc")
    settings_stub().setValue("billing/default_labor_rate_per_kg", -10)

    defaults = _service().load_item_defaults()

    assert defaults.touch == 13.0
    assert defaults.labor_rate_per_kg == 500.0
