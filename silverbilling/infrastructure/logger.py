#!/usr/bin/env python
import logging
import logging.handlers
import os
from datetime import datetime
from pathlib import Path

from silverbilling.infrastructure.app_constants import LOG_DIR
from silverbilling.infrastructure.settings import get_app_settings


LOG_FORMAT = '%(asctime)s [%(levelname)s] [%(module)s:%(lineno)d] [%(funcName)s] %(message)s'


def setup_logging(app_name="silver_billing", log_dir=LOG_DIR, debug_mode=False,
                  enable_info=True, enable_error=True, enable_debug=True):
    """
    Configure the logging system for the billing engine.

    Args:
        app_name (str): Base name for log files
        log_dir (str): Directory to store log files
        debug_mode (bool): Whether to enable debug logging
        enable_info (bool): Whether to enable INFO level logs
        enable_error (bool): Whether to enable ERROR and CRITICAL level logs
        enable_debug (bool): Whether to enable DEBUG level logs (only when debug_mode is True)

    Returns:
        logging.Logger: Configured root logger
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug_mode else logging.INFO)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    log_format = logging.Formatter(LOG_FORMAT)

    # Main log file (INFO and above)
    if enable_info:
        main_handler = logging.handlers.RotatingFileHandler(
            log_path / f"{app_name}.log",
            maxBytes=5*1024*1024,  # 5MB
            backupCount=10,
            encoding='utf-8'
        )
        main_handler.setLevel(logging.INFO)
        main_handler.setFormatter(log_format)
        root_logger.addHandler(main_handler)

    # Error log file (ERROR and CRITICAL only)
    if enable_error:
        error_handler = logging.handlers.RotatingFileHandler(
            log_path / f"{app_name}_error.log",
            maxBytes=5*1024*1024,  # 5MB
            backupCount=10,
            encoding='utf-8'
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(log_format)
        root_logger.addHandler(error_handler)

    if debug_mode and enable_debug:
        debug_handler = logging.handlers.RotatingFileHandler(
            log_path / f"{app_name}_debug.log",
            maxBytes=10*1024*1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        debug_handler.setLevel(logging.DEBUG)
        debug_handler.setFormatter(log_format)
        root_logger.addHandler(debug_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if debug_mode else logging.WARNING)
    console_handler.setFormatter(log_format)
    root_logger.addHandler(console_handler)

    root_logger.info(f"Logging initialized at {datetime.now().isoformat()}")
    if debug_mode:
        root_logger.info("Debug logging enabled")

    return root_logger


def sanitize_for_logging(data, sensitive_keys=None):
    """
    Sanitize potentially sensitive data for logging.

    Customer contact details travel inside sale payloads, so phone numbers and
    GST numbers are masked by default.

    Args:
        data: Dictionary containing data to sanitize
        sensitive_keys: List of keys to mask

    Returns:
        Dict: Sanitized copy of the data
    """
    if sensitive_keys is None:
        sensitive_keys = ['password', 'token', 'secret', 'phone', 'gstnumber']

    if not isinstance(data, dict):
        return data

    result = {}
    for key, value in data.items():
        if any(s_key in key.lower() for s_key in sensitive_keys):
            result[key] = '********'
        elif isinstance(value, dict):
            result[key] = sanitize_for_logging(value, sensitive_keys)
        elif isinstance(value, list):
            result[key] = [sanitize_for_logging(entry, sensitive_keys) for entry in value]
        else:
            result[key] = value

    return result


def get_log_config():
    """
    Get logging configuration from environment variables or settings.

    Returns:
        dict: Keyword arguments accepted by setup_logging
    """
    settings = get_app_settings()

    # Environment variables take precedence
    debug_mode = os.environ.get('SILVER_BILLING_DEBUG', '').lower() in ('true', '1', 'yes')
    if 'SILVER_BILLING_DEBUG' not in os.environ:
        debug_mode = settings.value("logging/debug_mode", False, type=bool)

    log_dir = os.environ.get('SILVER_BILLING_LOG_DIR', LOG_DIR)

    enable_info = settings.value("logging/enable_info", True, type=bool)
    enable_error = settings.value("logging/enable_error", True, type=bool)
    enable_debug = settings.value("logging/enable_debug", True, type=bool)

    return {
        'debug_mode': debug_mode,
        'log_dir': log_dir,
        'enable_info': enable_info,
        'enable_error': enable_error,
        'enable_debug': enable_debug
    }
