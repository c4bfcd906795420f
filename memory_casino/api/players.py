from flask import Blueprint, jsonify, request, current_app

from memory_casino import get_game_service
from memory_casino.schemas import CreatePlayerRequest, parse_body

players = Blueprint('players', __name__)


@players.route('', methods=['GET'])
def list_players():
    store = get_game_service().store
    return jsonify([p.to_dict() for p in store.list()])


@players.route('', methods=['POST'])
def create_player():
    body = parse_body(CreatePlayerRequest, request.get_json(silent=True))
    store = get_game_service().store
    player = store.create(body.name, coins=int(current_app.config.get('STARTING_COINS', 1000)))
    return jsonify(player.to_dict()), 201


@players.route('/<int:player_id>', methods=['GET'])
def get_player(player_id):
    player = get_game_service().store.get(player_id)
    return jsonify(player.to_dict())


@players.route('/<int:player_id>/achievements', methods=['GET'])
def get_player_achievements(player_id):
    player = get_game_service().store.get(player_id)
    return jsonify({
        'player_id': player.id,
        'achievements': [a.title.value for a in player.achievements],
    })
