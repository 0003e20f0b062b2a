"""
Paragliding API Package.

RESTful JSON API for IGC flight tracks, built with Flask, SQLAlchemy
and requests.

Modules:
    api/         REST endpoints for tracks, ticker, webhooks and admin
    models/      SQLAlchemy ORM models (Track, Webhook)
    stores/      Track and webhook persistence
    ingestion/   IGC download and parsing (aerofiles, NumPy track length)
    services/    Ticker feed, webhook registry and new-track notifier
    config.py    Configuration from environment variables
    app.py       Application factory wiring the components together
"""

__version__ = '1.0.0'
