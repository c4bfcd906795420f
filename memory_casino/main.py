from flask import Blueprint, jsonify

from memory_casino import get_game_service
from memory_casino.services import leaderboard

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Memory Casino server!'})


@main.route('/leaderboard', methods=['GET'])
def get_leaderboard():
    service = get_game_service()
    entries = leaderboard.rebuild(service.store.list())
    return jsonify([e.to_dict() for e in entries])


@main.route('/stats', methods=['GET'])
def get_stats():
    service = get_game_service()
    return jsonify(leaderboard.build_stats(service.store.list(), service.active_count()))
