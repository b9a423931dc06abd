"""
REST API endpoints for the CardParty application.
"""

import logging
from flask import Blueprint, jsonify

from container import get_container

logger = logging.getLogger(__name__)


def create_api_blueprint():
    """Create the API Blueprint; services are resolved from the container per request."""
    api = Blueprint('api', __name__)

    @api.route('/api/health')
    def health():
        room_manager = get_container().get('RoomManager')
        return jsonify({
            'status': 'ok',
            'rooms': len(room_manager.get_all_rooms())
        })

    @api.route('/api/rooms')
    def list_rooms():
        """Overview of every hosted room."""
        try:
            room_manager = get_container().get('RoomManager')
            return jsonify({'rooms': room_manager.get_room_summaries()})
        except Exception as e:
            logger.error(f'Error listing rooms: {e}')
            return jsonify({'rooms': []}), 500

    @api.route('/api/cards')
    def cards():
        """The card pack; clients resolve card ids against it."""
        return jsonify(get_container().get('CardPack').to_dict())

    return api
