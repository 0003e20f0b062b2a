"""
API module for the Paragliding service.

Provides REST endpoints for:
- Track submission and browsing
- Ticker feed for polling clients
- New-track webhook subscriptions
- Admin operations on the track store
"""

from paragliding.api.admin import admin_bp
from paragliding.api.ticker import ticker_bp
from paragliding.api.tracks import tracks_bp
from paragliding.api.webhooks import webhooks_bp

__all__ = ['admin_bp', 'ticker_bp', 'tracks_bp', 'webhooks_bp']
