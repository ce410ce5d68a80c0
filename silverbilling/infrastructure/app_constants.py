APP_NAME = "Silver Billing"
APP_VERSION = "1.0.0"
APP_TITLE = f"{APP_NAME} v{APP_VERSION}"

# Keep QSettings identifiers consistent to avoid breaking existing settings.
SETTINGS_ORG = "SilverBilling"
SETTINGS_APP = "SilverBillingApp"

# Default paths
LOG_DIR = "logs"
