"""
Admin API endpoints.

Provides endpoints for:
- GET    /admin/api/tracks_count - Number of stored tracks (text/plain)
- DELETE /admin/api/tracks - Delete every track, returns how many (text/plain)
"""

import logging

from flask import Blueprint

from paragliding.api.responses import component, plain_text

logger = logging.getLogger(__name__)

admin_bp = Blueprint('admin', __name__, url_prefix='/admin/api')


@admin_bp.route('/tracks_count', methods=['GET'])
def get_track_count():
    return plain_text(component('TRACK_STORE').count())


@admin_bp.route('/tracks', methods=['DELETE'])
def delete_all_tracks():
    deleted = component('TRACK_STORE').delete_all()
    logger.info(f'Admin deleted {deleted} tracks')
    return plain_text(deleted)
