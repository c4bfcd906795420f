from memory_casino import create_app, socketio

app = create_app()

if __name__ == '__main__':
    # Use SocketIO server so /ws state updates work in dev
    socketio.run(app, host='0.0.0.0', port=8080, debug=True)
