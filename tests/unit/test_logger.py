import logging

import pytest

from silverbilling.infrastructure.logger import (
    get_log_config,
    sanitize_for_logging,
    setup_logging,
)


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_setup_logging_creates_log_files(tmp_path, restore_root_logger):
    root = setup_logging(app_name="billing_test", log_dir=tmp_path, debug_mode=True)
    logging.getLogger("billing.test").error("boom")
    for handler in root.handlers:
        handler.flush()

    assert (tmp_path / "billing_test.log").exists()
    assert "boom" in (tmp_path / "billing_test_error.log").read_text(encoding="utf-8")
    assert (tmp_path / "billing_test_debug.log").exists()
    assert root.level == logging.DEBUG


def test_setup_logging_respects_disabled_handlers(tmp_path, restore_root_logger):
    root = setup_logging(
        app_name="quiet", log_dir=tmp_path, enable_info=False, enable_error=False
    )

    assert not any(isinstance(h, logging.FileHandler) for h in root.handlers)
    assert root.level == logging.INFO


def test_sanitize_masks_contact_details():
    payload = {
        "customerId": 4,
        "customer": {"name": "Asha", "phone": "9876543210", "gstNumber": "27ABCDE1234F1Z5"},
        "items": [{"description": "Ring", "apiToken": "x"}],
    }

    sanitized = sanitize_for_logging(payload)

    assert sanitized["customerId"] == 4
    assert sanitized["customer"]["name"] == "Asha"
    assert sanitized["customer"]["phone"] == "********"
    assert sanitized["customer"]["gstNumber"] == "********"
    assert sanitized["items"][0]["apiToken"] == "********"
    assert payload["customer"]["phone"] == "9876543210"


def test_sanitize_passes_through_non_dicts():
    assert sanitize_for_logging("plain") == "plain"


def test_log_config_prefers_environment(settings_stub, monkeypatch, tmp_path):
    settings_stub().setValue("logging/debug_mode", False)
    monkeypatch.setenv("SILVER_BILLING_DEBUG", "yes")
    monkeypatch.setenv("SILVER_BILLING_LOG_DIR", str(tmp_path))

    config = get_log_config()

    assert config["debug_mode"] is True
    assert config["log_dir"] == str(tmp_path)


def test_log_config_reads_settings(settings_stub, monkeypatch):
    monkeypatch.delenv("SILVER_BILLING_DEBUG", raising=False)
    monkeypatch.delenv("SILVER_BILLING_LOG_DIR", raising=False)
    settings_stub().setValue("logging/debug_mode", "true")
    settings_stub().setValue("logging/enable_info", False)

    config = get_log_config()

    assert config["debug_mode"] is True
    assert config["enable_info"] is False
    assert config["log_dir"] == "logs"


def test_log_config_feeds_setup_logging(settings_stub, monkeypatch, tmp_path, restore_root_logger):
    monkeypatch.delenv("SILVER_BILLING_DEBUG", raising=False)
    monkeypatch.setenv("SILVER_BILLING_LOG_DIR", str(tmp_path))
    settings_stub().setValue("logging/debug_mode", True)

    root = setup_logging(**get_log_config())

    assert root.level == logging.DEBUG
    assert (tmp_path / "silver_billing_debug.log").exists()
