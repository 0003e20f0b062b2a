"""
Webhook API endpoints.

Provides endpoints for:
- POST   /api/webhook/new_track/ - Register a subscription
- GET    /api/webhook/new_track/<id> - Subscription details
- DELETE /api/webhook/new_track/<id> - Remove a subscription

Unknown and malformed IDs both answer 404.
"""

import logging

from flask import Blueprint, jsonify, request

from paragliding.api.responses import component, plain_text
from paragliding.exceptions import MalformedInput

logger = logging.getLogger(__name__)

webhooks_bp = Blueprint('webhooks', __name__, url_prefix='/api/webhook/new_track')


@webhooks_bp.route('/', methods=['POST'])
def register_webhook():
    """
    Register a new-track webhook.

    Body: {"webhookURL": "<url>", "minTriggerValue": <int, optional>}

    Returns the new subscription ID as text/plain with 201.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise MalformedInput("Malformed POST request, should be '{\"webhookURL\": \"<url>\"}'")

    webhook_id = component('WEBHOOK_REGISTRY').register(
        data.get('webhookURL'),
        data.get('minTriggerValue'),
    )
    return plain_text(webhook_id, 201)


@webhooks_bp.route('/<webhook_id>', methods=['GET'])
def get_webhook(webhook_id: str):
    webhook = component('WEBHOOK_REGISTRY').get(webhook_id)
    return jsonify(webhook.to_dict())


@webhooks_bp.route('/<webhook_id>', methods=['DELETE'])
def delete_webhook(webhook_id: str):
    webhook = component('WEBHOOK_REGISTRY').delete(webhook_id)
    return jsonify(webhook.to_dict())
