from datetime import date

from backoffice.models import DailyImageCount, WorkSession
from backoffice.storage import image_count_storage, utc_today


# -------------------- WORK SESSIONS -------------------- #

def test_check_in_and_check_out(api, make_client):
    client = make_client('Session Co')

    resp = api.post('/api/work-sessions', json={'clientId': client.id, 'duration': 90})
    assert resp.status_code == 201
    assert resp.get_json()['workDate'] == utc_today().isoformat()

    today = api.get('/api/work-sessions/today').get_json()
    assert [s['clientId'] for s in today] == [client.id]

    assert api.delete(f'/api/work-sessions/{client.id}').status_code == 204
    assert api.get('/api/work-sessions/today').get_json() == []


def test_check_in_twice_keeps_one_session(api, make_client):
    client = make_client()
    first = api.post('/api/work-sessions', json={'clientId': client.id})
    second = api.post('/api/work-sessions', json={'clientId': client.id})
    assert first.status_code == 201
    assert second.status_code == 200
    assert second.get_json()['id'] == first.get_json()['id']
    assert WorkSession.query.filter_by(client_id=client.id).count() == 1


def test_check_out_without_session_returns_404(api, make_client):
    client = make_client()
    assert api.delete(f'/api/work-sessions/{client.id}').status_code == 404


def test_check_in_unknown_client_returns_404(api):
    assert api.post('/api/work-sessions', json={'clientId': 999}).status_code == 404


def test_check_in_requires_client_id(api):
    resp = api.post('/api/work-sessions', json={})
    assert resp.status_code == 400
    assert 'clientId' in resp.get_json()['errors']


# -------------------- IMAGE COUNTS -------------------- #

def test_today_count_defaults_to_zero(api):
    assert api.get('/api/images/today').get_json() == {'count': 0}


def test_set_today_count(api):
    resp = api.post('/api/images/today', json={'count': 7})
    assert resp.status_code == 200
    assert resp.get_json()['imageCount'] == 7
    assert api.get('/api/images/today').get_json() == {'count': 7}


def test_setting_a_date_twice_keeps_one_row(api):
    api.post('/api/images/date', json={'date': '2024-03-05', 'count': 12})
    resp = api.post('/api/images/date', json={'date': '2024-03-05', 'count': 20})
    assert resp.status_code == 200
    assert resp.get_json()['imageCount'] == 20

    rows = DailyImageCount.query.filter_by(date=date(2024, 3, 5)).all()
    assert len(rows) == 1
    assert rows[0].image_count == 20


def test_month_counts_are_limited_to_the_month(api):
    for day, count in (('2024-02-29', 1), ('2024-03-01', 2), ('2024-03-31', 3), ('2024-04-01', 4)):
        api.post('/api/images/date', json={'date': day, 'count': count})

    rows = api.get('/api/images/month/2024/3').get_json()
    assert [(r['date'], r['imageCount']) for r in rows] == [('2024-03-01', 2), ('2024-03-31', 3)]


def test_invalid_counts_are_rejected(api):
    assert api.post('/api/images/today', json={'count': -1}).status_code == 400
    assert api.post('/api/images/today', json={'count': '5'}).status_code == 400
    assert api.post('/api/images/today', json={}).status_code == 400
    assert api.post('/api/images/date', json={'count': 3}).status_code == 400


def test_image_count_is_capped_at_column_size(api):
    resp = api.post('/api/images/today', json={'count': 2 ** 31})
    assert resp.status_code == 400
    assert 'count' in resp.get_json()['errors']


def test_invalid_month_is_rejected(api):
    resp = api.get('/api/images/month/2024/13')
    assert resp.status_code == 400
    assert 'month' in resp.get_json()['errors']


def test_reset_today(app):
    image_count_storage.set_today(15)
    row = image_count_storage.reset_today()
    assert row.image_count == 0
    assert image_count_storage.today_count() == 0


def test_reset_daily_count_command(app):
    image_count_storage.set_today(9)
    result = app.test_cli_runner().invoke(args=['reset_daily_count'])
    assert 'reset to 0' in result.output
    assert image_count_storage.today_count() == 0


# -------------------- SAMPLE REQUESTS -------------------- #

def _sample_request(**overrides):
    payload = {'companyName': 'Pearl Atelier', 'country': 'Qatar', 'requestDate': '2026-10-01'}
    payload.update(overrides)
    return payload


def test_sample_request_defaults_to_in_processing(api):
    resp = api.post('/api/sample-requests', json=_sample_request())
    assert resp.status_code == 201
    assert resp.get_json()['status'] == 'in processing'


def test_sample_request_status_moves_freely(api):
    request_id = api.post('/api/sample-requests', json=_sample_request()).get_json()['id']

    body = api.patch(f'/api/sample-requests/{request_id}', json={'status': 'delivered'}).get_json()
    assert body['status'] == 'delivered'
    body = api.patch(f'/api/sample-requests/{request_id}', json={'status': 'pending'}).get_json()
    assert body['status'] == 'in processing'


def test_sample_request_rejects_unknown_status(api):
    resp = api.post('/api/sample-requests', json=_sample_request(status='lost'))
    assert resp.status_code == 400
    assert 'status' in resp.get_json()['errors']


def test_sample_requests_newest_first(api):
    api.post('/api/sample-requests', json=_sample_request(companyName='Older', requestDate='2026-09-01'))
    api.post('/api/sample-requests', json=_sample_request(companyName='Newer', requestDate='2026-10-10'))
    names = [r['companyName'] for r in api.get('/api/sample-requests').get_json()]
    assert names == ['Newer', 'Older']


def test_delete_sample_request(api):
    request_id = api.post('/api/sample-requests', json=_sample_request()).get_json()['id']
    assert api.delete(f'/api/sample-requests/{request_id}').status_code == 204
    assert api.get(f'/api/sample-requests/{request_id}').status_code == 404
