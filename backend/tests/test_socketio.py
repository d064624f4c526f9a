def test_socket_connect_and_join(sio_client):
    # Ensure we are connected to /ws
    if not sio_client.is_connected('/ws'):
        sio_client.connect(namespace='/ws')
    assert sio_client.is_connected('/ws')

    # Flush any initial events
    sio_client.get_received('/ws')

    sio_client.emit('join_game', {'game': 'catan'}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'joined' for pkt in received)


def test_join_unknown_game_reports_error(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('join_game', {'game': 'chess'}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'error' for pkt in received)


def test_state_change_is_broadcast(sio_client, client):
    sio_client.emit('join_game', {'game': 'counter'}, namespace='/ws')
    sio_client.get_received('/ws')  # flush

    client.post('/api/games/counter/actions/adjust', json={'player_id': 1, 'amount': 3})
    events = sio_client.get_received('/ws')
    updates = [e for e in events if e['name'] == 'state_update']
    assert updates
    assert updates[0]['args'][0] == {'game': 'counter'}


def test_ping_pong(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('ping', {'n': 1}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'pong' and pkt['args'][0] == {'n': 1} for pkt in received)
