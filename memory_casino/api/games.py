from flask import Blueprint, jsonify, request
from memory_casino import get_game_service, socketio
from memory_casino.errors import SessionExpired


games = Blueprint('games', __name__)


def _notify(player_id: int) -> None:
    socketio.emit('state_update', {'player_id': player_id}, to=f"player:{player_id}", namespace='/ws')


def _state_payload(service, session):
    payload = session.to_dict(service.now())
    player = service.store.get(session.player_id)
    payload['player'] = player.to_dict()
    return payload


@games.route('/<int:player_id>/start', methods=['POST'])
def start_game(player_id):
    service = get_game_service()
    # Missing ?difficulty= falls back to DEFAULT_DIFFICULTY inside the service
    session = service.start_game(player_id, request.args.get('difficulty'))
    _notify(player_id)
    return jsonify(_state_payload(service, session)), 201


@games.route('/<int:player_id>/flip/<int:card_id>', methods=['POST'])
def flip_card(player_id, card_id):
    service = get_game_service()
    try:
        session, result = service.flip_card(player_id, card_id)
    except SessionExpired:
        # The session was finished as a loss before the error was raised
        _notify(player_id)
        raise
    _notify(player_id)
    payload = _state_payload(service, session)
    payload['flip'] = result.to_dict()
    return jsonify(payload)


@games.route('/<int:player_id>/state', methods=['GET'])
def get_game_state(player_id):
    service = get_game_service()
    session = service.get_state(player_id)
    return jsonify(_state_payload(service, session))


@games.route('/<int:player_id>/end', methods=['POST'])
def end_game(player_id):
    service = get_game_service()
    service.end_game(player_id)
    _notify(player_id)
    return '', 204
