from flask import Blueprint, jsonify

from tabletop import lobby


rooms = Blueprint('rooms', __name__)


@rooms.route('', methods=['GET'])
def list_rooms():
    return jsonify(lobby.summaries())


@rooms.route('/<string:room_id>/state', methods=['GET'])
def get_room_state(room_id):
    """Authoritative snapshot of one room.

    Card stack shuffles and edits are broadcast without the new card list,
    so clients fetch the stack contents from here.
    """
    snapshot = lobby.snapshot(room_id)
    if snapshot is None:
        return jsonify({'error': 'Room not found'}), 404
    return jsonify(snapshot)
