"""
Logging and Sentry setup.

Standard library logging for the whole service; Sentry is optional and only
initialized when enabled in configuration.
"""

import logging
from typing import Any, Dict, Optional

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

SENSITIVE_FIELDS = (
    "password",
    "newPassword",
    "confirmPassword",
    "token",
    "authorization",
)


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def filter_sensitive_data(event: Dict[str, Any], hint: Dict[str, Any] = None) -> Optional[Dict[str, Any]]:
    """Mask passwords and tokens in request bodies and headers before sending"""
    request = event.get("request", {})

    data = request.get("data")
    if isinstance(data, dict):
        for field in SENSITIVE_FIELDS:
            if field in data:
                data[field] = "[FILTERED]"

    query_string = request.get("query_string")
    if query_string and "token=" in str(query_string):
        request["query_string"] = "[FILTERED]"

    headers = request.get("headers")
    if isinstance(headers, dict):
        for header in ("Authorization", "authorization", "Cookie", "cookie"):
            if header in headers:
                headers[header] = "[FILTERED]"

    return event


def init_sentry(ApplicationConfig) -> bool:
    """Initialize Sentry if enabled. Returns True when Sentry was set up"""
    if not ApplicationConfig.ENABLE_SENTRY or not ApplicationConfig.DSN_SENTRY:
        logging.getLogger(__name__).info("Sentry disabled")
        return False

    sentry_sdk.init(
        dsn=ApplicationConfig.DSN_SENTRY,
        environment=ApplicationConfig.SENTRY_ENVIRONMENT,
        integrations=[FastApiIntegration(), SqlalchemyIntegration()],
        before_send=filter_sensitive_data,
        send_default_pii=False,
    )
    return True
