"""
Database models for the Paragliding API.

Two tables:
1. tracks   - append-only IGC track metadata, ordered by insertion stamp
2. webhooks - notification subscriptions with their pending counters
"""

from paragliding.models.base import Base, make_engine, make_session_factory, session_scope, init_db
from paragliding.models.track import Track
from paragliding.models.webhook import Webhook, WEBHOOK_ID_LENGTH, new_webhook_id

__all__ = [
    'Base',
    'make_engine',
    'make_session_factory',
    'session_scope',
    'init_db',
    'Track',
    'Webhook',
    'WEBHOOK_ID_LENGTH',
    'new_webhook_id',
]
