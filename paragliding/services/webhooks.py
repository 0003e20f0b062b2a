"""
Webhook registry - lifecycle of new-track subscriptions.

IDs are validated structurally before any store access, and a
malformed ID is reported exactly like an absent one.
"""

import logging
import re
from typing import Any, Optional

from paragliding.exceptions import MalformedInput, NotFound
from paragliding.models import Webhook, WEBHOOK_ID_LENGTH
from paragliding.stores import WebhookStore

logger = logging.getLogger(__name__)

_ID_PATTERN = re.compile(rf'[0-9a-fA-F]{{{WEBHOOK_ID_LENGTH}}}')


def is_valid_id(value: Any) -> bool:
    """True when value has the store's ID shape (24 hex characters)."""
    return isinstance(value, str) and _ID_PATTERN.fullmatch(value) is not None


class WebhookRegistry:
    """CRUD surface for webhook subscriptions."""

    def __init__(self, webhook_store: WebhookStore):
        self.webhook_store = webhook_store

    @staticmethod
    def is_valid_id(value: Any) -> bool:
        return is_valid_id(value)

    def register(self, url: Any, min_trigger_value: Optional[Any] = None) -> str:
        """
        Register a new subscription and return its ID.

        A missing or non-positive min_trigger_value defaults to 1.
        Raises MalformedInput for a missing URL or a non-integer
        threshold, AlreadyExists for a URL that is already registered.
        """
        if not isinstance(url, str) or not url.strip():
            raise MalformedInput("Malformed POST request, should be '{\"webhookURL\": \"<url>\"}'")

        if min_trigger_value is None:
            min_trigger_value = 1
        elif isinstance(min_trigger_value, bool) or not isinstance(min_trigger_value, int):
            raise MalformedInput('minTriggerValue must be an integer')
        elif min_trigger_value <= 0:
            min_trigger_value = 1

        webhook = self.webhook_store.insert_if_absent(url, min_trigger_value)
        return webhook.id

    def get(self, webhook_id: str) -> Webhook:
        """Raises NotFound for malformed or unknown IDs."""
        if not is_valid_id(webhook_id):
            raise NotFound('not found')

        webhook = self.webhook_store.find(webhook_id)
        if webhook is None:
            raise NotFound('not found')
        return webhook

    def delete(self, webhook_id: str) -> Webhook:
        """Remove a subscription and return it as it was before deletion."""
        if not is_valid_id(webhook_id):
            raise NotFound('not found')

        webhook = self.webhook_store.delete(webhook_id)
        if webhook is None:
            raise NotFound('not found')
        return webhook
