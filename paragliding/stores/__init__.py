"""
Persistence layer for the Paragliding API.

Stores are the single source of truth for tracks and subscriptions;
nothing is cached between requests.
"""

from paragliding.stores.track_store import TrackStore
from paragliding.stores.webhook_store import FiredWebhook, WebhookStore

__all__ = ['TrackStore', 'WebhookStore', 'FiredWebhook']
