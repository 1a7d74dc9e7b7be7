from flask_socketio import join_room, leave_room, emit
from leaderboard import socketio

# Rooms kiosk screens can watch for live refreshes
WATCHABLE_ROOMS = {'leaderboard', 'claims'}


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def _requested_room(data):
    room = (data or {}).get('room')
    if room not in WATCHABLE_ROOMS:
        emit('error', {'message': f"room must be one of {sorted(WATCHABLE_ROOMS)}"})
        return None
    return room


def handle_watch(data):
    room = _requested_room(data)
    if room is None:
        return
    join_room(room)
    emit('joined', {'room': room})


def handle_unwatch(data):
    room = _requested_room(data)
    if room is None:
        return
    leave_room(room)
    emit('left', {'room': room})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers() -> None:
    """Register Socket.IO event handlers on namespace '/ws'."""
    socketio.on_event('connect', handle_connect, namespace='/ws')
    socketio.on_event('watch', handle_watch, namespace='/ws')
    socketio.on_event('unwatch', handle_unwatch, namespace='/ws')
    socketio.on_event('ping', handle_ping, namespace='/ws')
