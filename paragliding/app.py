"""
Paragliding Flask Application.

Main entry point for the web application. Initializes:
- Database schema
- Track and webhook stores
- IGC parser, ticker feed, webhook registry and notifier
- API routes

Usage:
    python -m paragliding.app

Or with gunicorn:
    gunicorn 'paragliding.app:create_app()'
"""

import logging
import os
import time
from typing import Optional

from flask import Flask, jsonify, redirect
from flask_cors import CORS
from sqlalchemy.exc import SQLAlchemyError

from paragliding.api import admin_bp, ticker_bp, tracks_bp, webhooks_bp
from paragliding.config import AppConfig, load_config
from paragliding.exceptions import ParaglidingError
from paragliding.ingestion import IGCParser
from paragliding.models import init_db, make_engine, make_session_factory
from paragliding.services import (
    HttpWebhookDelivery,
    TickerFeed,
    WebhookDelivery,
    WebhookNotifier,
    WebhookRegistry,
)
from paragliding.stores import TrackStore, WebhookStore

logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )


def create_app(
    app_config: Optional[AppConfig] = None,
    igc_parser=None,
    delivery: Optional[WebhookDelivery] = None,
    track_store: Optional[TrackStore] = None,
) -> Flask:
    """
    Application factory for Flask.

    Args:
        app_config: Configuration to build components from.
                    Loaded from the environment when omitted.
        igc_parser: Object with parse(url) -> ParsedTrack. Defaults to
                    an IGCParser downloading over HTTP.
        delivery: Webhook delivery adapter. Defaults to HTTP POST.
        track_store: Pre-built track store (tests use this to control
                     the insertion clock).

    Returns:
        Configured Flask application instance.
    """
    app_config = app_config or load_config()
    configure_logging(app_config.debug)

    app = Flask(__name__)
    app.config['SECRET_KEY'] = app_config.secret_key

    # Enable CORS for API endpoints
    CORS(app, resources={r'/api/*': {'origins': '*'}})

    # Initialize database
    logger.info('Initializing database...')
    engine = make_engine(app_config.database, echo=app_config.debug)
    init_db(engine)
    session_factory = make_session_factory(engine)

    # Wire components
    track_store = track_store or TrackStore(session_factory)
    webhook_store = WebhookStore(session_factory)
    delivery = delivery or HttpWebhookDelivery(timeout_seconds=app_config.webhook.timeout_seconds)

    app.config['APP_CONFIG'] = app_config
    app.config['STARTED_AT'] = time.time()
    app.config['TRACK_STORE'] = track_store
    app.config['WEBHOOK_STORE'] = webhook_store
    app.config['IGC_PARSER'] = igc_parser or IGCParser(timeout_seconds=app_config.igc.timeout_seconds)
    app.config['TICKER_FEED'] = TickerFeed(track_store, cap=app_config.ticker.cap)
    app.config['WEBHOOK_REGISTRY'] = WebhookRegistry(webhook_store)
    app.config['WEBHOOK_NOTIFIER'] = WebhookNotifier(track_store, webhook_store, delivery)

    # Register API blueprints
    app.register_blueprint(tracks_bp)
    app.register_blueprint(ticker_bp)
    app.register_blueprint(webhooks_bp)
    app.register_blueprint(admin_bp)

    @app.route('/')
    def index():
        """Redirect to the API information endpoint."""
        return redirect('/api', code=301)

    # -------------------------------------------------------------------------
    # Error handlers
    # -------------------------------------------------------------------------

    @app.errorhandler(ParaglidingError)
    def application_error(e):
        logger.debug(f'{type(e).__name__}: {e}')
        return jsonify({'error': str(e)}), e.status_code

    @app.errorhandler(SQLAlchemyError)
    def database_error(e):
        logger.error(f'Database error: {e}')
        return {'error': 'Internal server error'}, 500

    @app.errorhandler(404)
    def not_found(e):
        return {'error': 'Not found'}, 404

    @app.errorhandler(500)
    def server_error(e):
        logger.error(f'Server error: {e}')
        return {'error': 'Internal server error'}, 500

    return app


def run_development_server():
    """Run the development server."""
    app = create_app()

    # Get port from environment or default
    port = int(os.environ.get('PORT', 8080))

    logger.info(f'Starting Paragliding API on http://localhost:{port}/api')

    app.run(
        host='0.0.0.0',
        port=port,
        debug=app.config['APP_CONFIG'].debug,
        threaded=True,
        use_reloader=False,
    )


if __name__ == '__main__':
    run_development_server()
