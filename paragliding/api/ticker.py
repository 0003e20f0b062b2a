"""
Ticker API endpoints.

Provides endpoints for:
- GET /api/ticker/latest - Timestamp of the newest track (text/plain)
- GET /api/ticker/ - First page over all tracks
- GET /api/ticker/<timestamp> - First page over tracks newer than <timestamp>

All three answer 204 No Content when there are no matching tracks.
"""

import logging

from flask import Blueprint, jsonify

from paragliding.api.responses import component, plain_text

logger = logging.getLogger(__name__)

ticker_bp = Blueprint('ticker', __name__, url_prefix='/api/ticker')


@ticker_bp.route('/latest', methods=['GET'])
def get_latest_timestamp():
    timestamp = component('TICKER_FEED').latest_timestamp()
    if timestamp is None:
        return plain_text('', 204)
    return plain_text(timestamp)


@ticker_bp.route('/', methods=['GET'])
def get_timestamps():
    page = component('TICKER_FEED').timestamps()
    if page is None:
        return '', 204
    return jsonify(page.to_dict())


@ticker_bp.route('/<int:timestamp>', methods=['GET'])
def get_timestamps_newer_than(timestamp: int):
    page = component('TICKER_FEED').timestamps_newer_than(timestamp)
    if page is None:
        return '', 204
    return jsonify(page.to_dict())
