"""
Track API endpoints.

Provides endpoints for:
- GET  /api - Service information and uptime
- GET  /api/track - List all track IDs
- POST /api/track - Submit an IGC file URL
- GET  /api/track/<id> - Track metadata
- GET  /api/track/<id>/<field> - Single metadata field as text/plain
"""

import logging
import time

from flask import Blueprint, jsonify, request

from paragliding.api.responses import component, plain_text
from paragliding.exceptions import MalformedInput

logger = logging.getLogger(__name__)

tracks_bp = Blueprint('tracks', __name__, url_prefix='/api')

INFORMATION = 'Service for Paragliding tracks'
API_VERSION = 'v1'


def iso8601_duration(seconds: float) -> str:
    """Format elapsed seconds as an ISO 8601 duration (e.g. P1DT2H3M4S)."""
    total = int(seconds)
    days, rest = divmod(total, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, secs = divmod(rest, 60)

    result = 'P'
    if days:
        result += f'{days}D'
    time_part = ''
    if hours:
        time_part += f'{hours}H'
    if minutes:
        time_part += f'{minutes}M'
    if secs or not (days or time_part):
        time_part += f'{secs}S'
    if time_part:
        result += 'T' + time_part
    return result


@tracks_bp.route('', methods=['GET'])
def get_api_info():
    """Uptime, description and API version."""
    uptime = time.time() - component('STARTED_AT')
    return jsonify({
        'uptime': iso8601_duration(uptime),
        'info': INFORMATION,
        'version': API_VERSION,
    })


@tracks_bp.route('/track', methods=['GET'])
def list_tracks():
    """All track IDs in insertion order ([] when empty)."""
    tracks = component('TRACK_STORE').find_all()
    return jsonify([t.id for t in tracks])


@tracks_bp.route('/track', methods=['POST'])
def submit_track():
    """
    Register a new track from an IGC file URL.

    Body: {"url": "<igc url>"}

    The file is downloaded and parsed, its metadata stored, and the
    webhook notifier runs before the response is sent.
    """
    data = request.get_json(silent=True)
    url = data.get('url') if isinstance(data, dict) else None
    if not isinstance(url, str) or not url.strip():
        raise MalformedInput("Malformed POST request, should be '{\"url\": \"<url>\"}'")

    parsed = component('IGC_PARSER').parse(url)

    track = component('TRACK_STORE').insert(
        track_src_url=url,
        recorded_date=parsed.recorded_date,
        pilot=parsed.pilot,
        glider=parsed.glider_type,
        glider_id=parsed.glider_id,
        track_length=parsed.total_distance(),
    )

    component('WEBHOOK_NOTIFIER').on_track_inserted()

    return jsonify({'id': track.id})


@tracks_bp.route('/track/<int:track_id>', methods=['GET'])
def get_track(track_id: int):
    """Public metadata for one track."""
    track = component('TRACK_STORE').find_by_id(track_id)
    if track is None:
        return jsonify({'error': 'Track not found'}), 404
    return jsonify(track.to_dict())


@tracks_bp.route('/track/<int:track_id>/<field>', methods=['GET'])
def get_track_field(track_id: int, field: str):
    """One metadata field of a track as text/plain."""
    track = component('TRACK_STORE').find_by_id(track_id)
    if track is None:
        return plain_text('', 404)

    value = track.field_text(field)
    if value is None:
        return plain_text('', 404)
    return plain_text(value)
