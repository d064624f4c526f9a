from tabletop import create_app, socketio

app = create_app()

if __name__ == '__main__':
    # Use SocketIO server so clients get live state updates in dev
    socketio.run(app, debug=True)
