from flask_socketio import join_room, leave_room, emit
from memory_casino import socketio


def _player_id(data):
    try:
        return int((data or {}).get('player_id'))
    except (TypeError, ValueError):
        return None


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_join_game(data):
    player_id = _player_id(data)
    if player_id is None:
        emit('error', {'message': 'player_id is required'})
        return
    room = f"player:{player_id}"
    join_room(room)
    emit('joined', {'room': room})


def handle_leave_game(data):
    player_id = _player_id(data)
    if player_id is None:
        emit('error', {'message': 'player_id is required'})
        return
    room = f"player:{player_id}"
    leave_room(room)
    emit('left', {'room': room})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    namespaces = ['/ws', '/'] if testing else ['/ws']
    for namespace in namespaces:
        socketio.on_event('connect', handle_connect, namespace=namespace)
        socketio.on_event('join_game', handle_join_game, namespace=namespace)
        socketio.on_event('leave_game', handle_leave_game, namespace=namespace)
        socketio.on_event('ping', handle_ping, namespace=namespace)
