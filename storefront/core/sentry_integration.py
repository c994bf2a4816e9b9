"""Error reporting to Sentry with checkout data scrubbed from events."""
from __future__ import annotations

import logging
import os
from typing import Any

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

from storefront.core.sanitize import mask_card_number

logger = logging.getLogger(__name__)

# Checkout fields that must never leave the process, in either key style
SENSITIVE_KEYS = frozenset(
    {"card_number", "cardNumber", "cvc", "expiry_date", "expiryDate", "card_name", "cardName"}
)


def scrub_payload(data: Any) -> Any:
    """Replace card fields in nested request data.

    Example:
        >>> scrub_payload({"cardNumber": "4242424242424242", "city": "Austin"})
        {'cardNumber': '**** **** **** 4242', 'city': 'Austin'}
    """
    if isinstance(data, dict):
        scrubbed = {}
        for key, value in data.items():
            if key in ("card_number", "cardNumber"):
                scrubbed[key] = mask_card_number(str(value))
            elif key in SENSITIVE_KEYS:
                scrubbed[key] = "[Filtered]"
            else:
                scrubbed[key] = scrub_payload(value)
        return scrubbed
    if isinstance(data, list):
        return [scrub_payload(item) for item in data]
    return data


def _before_send(event: dict[str, Any], hint: dict[str, Any]) -> dict[str, Any]:
    request = event.get("request")
    if isinstance(request, dict) and "data" in request:
        request["data"] = scrub_payload(request["data"])
    if "contexts" in event:
        event["contexts"] = scrub_payload(event["contexts"])
    return event


def init_sentry(
    environment: str = "production",
    traces_sample_rate: float = 0.1,
) -> bool:
    """Start Sentry when SENTRY_DSN is configured.

    Returns:
        True if Sentry was initialized
    """
    dsn = os.getenv("SENTRY_DSN")
    if not dsn:
        logger.info("SENTRY_DSN not set - error tracking disabled")
        return False

    try:
        sentry_sdk.init(
            dsn=dsn,
            environment=environment,
            integrations=[LoggingIntegration(level=logging.INFO, event_level=logging.ERROR)],
            traces_sample_rate=traces_sample_rate,
            send_default_pii=False,
            before_send=_before_send,
            release=os.getenv("GIT_COMMIT_SHA", "unknown"),
        )
    except Exception as e:
        logger.error(f"Failed to initialize Sentry: {e}")
        return False

    logger.info(f"Sentry initialized for {environment} environment")
    return True


def capture_exception(error: Exception, **extra: Any) -> None:
    """Report an exception with named context blocks attached."""
    with sentry_sdk.new_scope() as scope:
        for key, value in extra.items():
            scope.set_context(key, scrub_payload(value))
        sentry_sdk.capture_exception(error)
