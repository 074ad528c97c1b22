from rankdown.core.config import settings
from rankdown.api.dependencies import reset_services


def test_health(client):
    res = client.get('/health')
    assert res.status_code == 200
    data = res.json()
    assert data['status'] == 'healthy'
    assert data['phase'] == 'loading'


def test_state_is_loading_before_first_fetch(client):
    res = client.get('/api/state')
    assert res.status_code == 200
    data = res.json()
    assert data['phase'] == 'loading'
    assert data['data'] is None


def test_refresh_loads_snapshot(client):
    res = client.post('/api/state/refresh')
    assert res.status_code == 200
    data = res.json()
    assert data['phase'] == 'ready'
    assert data['title'] == 'Rankdown Test'
    board = data['data']['round']['board']
    assert board == [
        {'name': 'A', 'status': 'saved'},
        {'name': 'B', 'status': 'eliminated'},
        {'name': 'C', 'status': 'pending'},
    ]
    assert [e['name'] for e in data['data']['eliminated']] == ['Y', 'X']
    assert data['data']['eliminated'][0]['method'] == 'leftover'

    # state persists between requests
    assert client.get('/api/state').json()['sequence'] == data['sequence']


def test_refresh_failure_shows_error(client, state_file):
    client.post('/api/state/refresh')
    state_file.write_text('{not json')
    data = client.post('/api/state/refresh').json()
    assert data['phase'] == 'error'
    assert 'not valid JSON' in data['error']
    assert data['data'] is None


def test_missing_source_shows_error(monkeypatch, client, tmp_path):
    monkeypatch.setattr(settings, 'SNAPSHOT_SOURCE', str(tmp_path / 'nope.json'))
    reset_services()
    data = client.post('/api/state/refresh').json()
    assert data['phase'] == 'error'
    assert data['error'].startswith('Failed to load nope.json')


def test_issues_require_snapshot(client):
    assert client.get('/api/state/issues').status_code == 404
    client.post('/api/state/refresh')
    res = client.get('/api/state/issues')
    assert res.status_code == 200
    assert res.json() == []


def test_issues_report_duplicates(client, state_file, sample_state):
    import json
    sample_state['currentRound'].update(nominees=['A', 'A'], saves={}, elims={})
    state_file.write_text(json.dumps(sample_state))
    client.post('/api/state/refresh')
    issues = client.get('/api/state/issues').json()
    assert [i['code'] for i in issues] == ['duplicate_nominee']
    board = client.get('/api/state').json()['data']['round']['board']
    assert [n['name'] for n in board] == ['A', 'A']


def test_resolve_endpoint(client):
    res = client.post('/api/resolve', json={
        'roundNumber': 1,
        'nominees': ['A'],
        'elims': {'v1': 'A'},
        'leftoversEliminated': ['A'],
    })
    assert res.status_code == 200
    assert res.json() == [{'name': 'A', 'status': 'leftover'}]


def test_history_endpoint(client):
    res = client.post('/api/history', json=[
        {'name': 'X', 'round': None},
        {'name': 'Y', 'round': 2},
    ])
    assert [r['name'] for r in res.json()] == ['Y', 'X']


def test_validate_endpoint(client):
    res = client.post('/api/validate', json={'players': ['A', 'A']})
    assert res.status_code == 200
    assert res.json()[0]['code'] == 'duplicate_player'
    assert res.json()[0]['severity'] == 'error'


def test_websocket_greets_and_pushes_updates(client):
    with client.websocket_connect('/api/ws/state') as ws:
        hello = ws.receive_json()
        assert hello['type'] == 'connected'
        assert hello['state']['phase'] == 'loading'

        ws.send_json({'type': 'ping'})
        assert ws.receive_json() == {'type': 'pong'}

        ws.send_json({'type': 'refresh'})
        update = ws.receive_json()
        assert update['type'] == 'state_updated'
        assert update['state']['phase'] == 'ready'


def test_websocket_rejects_unknown_messages(client):
    with client.websocket_connect('/api/ws/state') as ws:
        ws.receive_json()
        ws.send_text('not json')
        assert ws.receive_json()['type'] == 'error'
        ws.send_json({'type': 'dance'})
        assert ws.receive_json()['type'] == 'error'


def test_unchosen_votes_do_not_break_loading(client, state_file, sample_state):
    import json
    sample_state['currentRound']['saves'] = {'v1': None}
    sample_state['currentRound']['nominees'].append(None)
    state_file.write_text(json.dumps(sample_state))
    data = client.post('/api/state/refresh').json()
    assert data['phase'] == 'ready'
    assert [n['name'] for n in data['data']['round']['board']] == ['A', 'B', 'C']
    assert data['data']['round']['saves'] == [{'voter': 'v1', 'target': None}]
    issues = client.get('/api/state/issues').json()
    assert [i['code'] for i in issues] == ['empty_save_vote']
