from flask_socketio import join_room, leave_room, emit
from tabletop import socketio
from tabletop.services.games.registry import GAMES


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def _room_for(data):
    game = (data or {}).get('game')
    if not game:
        emit('error', {'message': 'game is required'})
        return None
    if game not in GAMES:
        emit('error', {'message': f'Unknown game: {game}'})
        return None
    return f"game:{game}"


def handle_join_game(data):
    room = _room_for(data)
    if room is None:
        return
    join_room(room)
    emit('joined', {'room': room})


def handle_leave_game(data):
    room = _room_for(data)
    if room is None:
        return
    leave_room(room)
    emit('left', {'room': room})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    handlers = {
        'connect': handle_connect,
        'join_game': handle_join_game,
        'leave_game': handle_leave_game,
        'ping': handle_ping,
    }
    for event, handler in handlers.items():
        socketio.on_event(event, handler, namespace='/ws')
        if testing:
            socketio.on_event(event, handler, namespace='/')
