"""
Application services.

Ticker feed, webhook registry and the new-track notifier with its
HTTP delivery adapter.
"""

from paragliding.services.delivery import HttpWebhookDelivery, WebhookDelivery
from paragliding.services.notifier import Notification, WebhookNotifier
from paragliding.services.ticker import TickerFeed, TickerPage
from paragliding.services.webhooks import WebhookRegistry, is_valid_id

__all__ = [
    'HttpWebhookDelivery',
    'WebhookDelivery',
    'Notification',
    'WebhookNotifier',
    'TickerFeed',
    'TickerPage',
    'WebhookRegistry',
    'is_valid_id',
]
