"""
PDFNinja - Configuration Module

This module contains all configuration constants and paths used by the client.
"""

import logging
import os
from typing import Final

# ============================================================================
# Application Constants
# ============================================================================

APP_NAME: Final[str] = "PDFNinja"
APP_VERSION: Final[str] = "1.0.0"
APP_DESCRIPTION: Final[str] = "Command-line client for the PDFNinja processing API"

# ============================================================================
# Processing API
# ============================================================================

API_HOSTS: Final[dict[str, str]] = {
    "development": "http://localhost:8000",
    "production": "https://pdfninja-api.onrender.com",
    "test": "https://pdfninja-api.onrender.com",
}
DEFAULT_ENVIRONMENT: Final[str] = "production"

# Environment variables consulted when resolving the API base URL
ENV_API_URL: Final[str] = "PDFNINJA_API_URL"
ENV_ENVIRONMENT: Final[str] = "PDFNINJA_ENV"

# No client-side timeout unless the user configures one
DEFAULT_REQUEST_TIMEOUT: Final[float | None] = None

# ============================================================================
# Configuration Directory
# ============================================================================

CONFIG_DIR: Final[str] = os.path.expanduser("~/.config/pdfninja")
CONFIG_FILE_PATH: Final[str] = os.path.join(CONFIG_DIR, "settings.json")

# ============================================================================
# Logging Configuration
# ============================================================================

LOG_LEVEL: int = logging.INFO
LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT: Final[str] = "%H:%M:%S"
LOGGER_NAME: Final[str] = "PDFNinja"


def host_for_environment(environment: str | None = None) -> str:
    """Return the API host for a deployment environment.

    Unknown environments fall back to the production host.

    Args:
        environment: "development", "production" or "test"

    Returns:
        Base URL of the processing API.
    """
    env = environment or os.environ.get(ENV_ENVIRONMENT, DEFAULT_ENVIRONMENT)
    return API_HOSTS.get(env, API_HOSTS[DEFAULT_ENVIRONMENT])


def resolve_api_base_url(explicit: str | None = None, configured: str | None = None) -> str:
    """Resolve the API base URL.

    Precedence: explicit value, PDFNINJA_API_URL, the settings file value,
    then the host for PDFNINJA_ENV.

    Args:
        explicit: Value given on the command line or by the caller
        configured: Value stored in the settings file

    Returns:
        Base URL without a trailing slash.
    """
    url = explicit or os.environ.get(ENV_API_URL) or configured or host_for_environment()
    return url.rstrip("/")
