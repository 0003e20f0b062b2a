"""
Outbound webhook delivery.

Delivery is best-effort: one POST per notification, no retries.
Failures are logged and reported as False, never raised, so a
notification problem cannot fail the track submission that caused it.
"""

import logging
from typing import Optional

import requests

logger = logging.getLogger(__name__)


class WebhookDelivery:
    """Interface for sending one notification message to a subscriber."""

    def deliver(self, url: str, message: dict) -> bool:
        """Send message as JSON to url. Returns True on success."""
        raise NotImplementedError


class HttpWebhookDelivery(WebhookDelivery):
    """Single JSON POST per notification with a bounded timeout."""

    def __init__(self, timeout_seconds: float = 5.0, session: Optional[requests.Session] = None):
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    def deliver(self, url: str, message: dict) -> bool:
        try:
            response = self.session.post(url, json=message, timeout=self.timeout_seconds)
            response.raise_for_status()
        except requests.exceptions.Timeout:
            logger.warning(f'Webhook delivery to {url} timed out after {self.timeout_seconds}s')
            return False
        except requests.exceptions.HTTPError as e:
            logger.warning(f'Webhook delivery to {url} rejected: {e.response.status_code}')
            return False
        except requests.exceptions.RequestException as e:
            logger.warning(f'Webhook delivery to {url} failed: {e}')
            return False

        logger.debug(f'Webhook delivered to {url}: {response.status_code}')
        return True
