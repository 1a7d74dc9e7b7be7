import os

from leaderboard import create_app, socketio

app = create_app()

if __name__ == '__main__':
    # Use SocketIO server so kiosk screens get live updates in dev
    socketio.run(app, host='127.0.0.1', port=int(os.environ.get('PORT', '3000')), debug=True)
