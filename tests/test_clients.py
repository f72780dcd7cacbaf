from decimal import Decimal

from backoffice import db
from backoffice.models import Activity, ClientAssignment, Transaction, WorkSession
from backoffice.storage import work_session_storage

from conftest import client_payload


def test_create_client_returns_derived_usd_amounts(api):
    resp = api.post('/api/clients', json=client_payload(totalProjectFee=920, feeCurrency='eur', amountPaid=46))
    assert resp.status_code == 201
    body = resp.get_json()
    assert body['id']
    assert body['feeCurrency'] == 'EUR'
    assert body['totalProjectFee'] == '920.00'
    assert body['totalProjectFeeUSD'] == '1000.00'
    assert body['amountPaidUSD'] == '50.00'
    assert body['contractStartDate'] == '2026-01-15'
    assert body['assignments'] == []
    assert body['progressPercentage'] == 0


def test_client_supplied_usd_amounts_are_ignored(api):
    resp = api.post('/api/clients', json=client_payload(totalProjectFeeUSD=5, amountPaidUSD=5))
    assert resp.status_code == 201
    assert resp.get_json()['totalProjectFeeUSD'] == '1000.00'
    assert resp.get_json()['amountPaidUSD'] == '0.00'


def test_create_client_reports_every_invalid_field(api):
    payload = client_payload(name='  ', projectStatus='Bogus', contractStartDate='not-a-date')
    del payload['contactPerson']
    resp = api.post('/api/clients', json=payload)
    assert resp.status_code == 400
    errors = resp.get_json()['errors']
    assert {'name', 'contactPerson', 'projectStatus', 'contractStartDate'} <= set(errors)


def test_create_client_rejects_negative_money(api):
    resp = api.post('/api/clients', json=client_payload(amountPaid=-1))
    assert resp.status_code == 400
    assert 'amountPaid' in resp.get_json()['errors']


def test_create_client_rejects_malformed_json(api):
    resp = api.post('/api/clients', data='{not json', content_type='application/json')
    assert resp.status_code == 400
    assert resp.get_json()['message'] == 'Request body must be valid JSON'


def test_project_status_is_normalized(api):
    resp = api.post('/api/clients', json=client_payload(projectStatus='in-progress'))
    assert resp.get_json()['projectStatus'] == 'In Progress'
    resp = api.post('/api/clients', json=client_payload(projectStatus='running'))
    assert resp.get_json()['projectStatus'] == 'In Progress'


def test_get_client_is_stable(api):
    client_id = api.post('/api/clients', json=client_payload()).get_json()['id']
    first = api.get(f'/api/clients/{client_id}').get_json()
    second = api.get(f'/api/clients/{client_id}').get_json()
    assert first == second


def test_get_unknown_client_returns_404(api):
    resp = api.get('/api/clients/999')
    assert resp.status_code == 404
    assert resp.get_json()['message'] == 'Client not found'


def test_patch_amount_paid_recomputes_usd(api):
    client_id = api.post('/api/clients', json=client_payload()).get_json()['id']
    resp = api.patch(f'/api/clients/{client_id}', json={'amountPaid': 400})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['amountPaid'] == '400.00'
    assert body['amountPaidUSD'] == '400.00'
    assert body['name'] == 'Golden Crown Jewelers'


def test_patch_progress_counters(api):
    client_id = api.post('/api/clients', json=client_payload(totalImagesToMake=40)).get_json()['id']
    body = api.patch(f'/api/clients/{client_id}', json={'imagesMade': 10}).get_json()
    assert body['imagesMade'] == 10
    assert body['progressPercentage'] == 25


def test_patch_unknown_client_returns_404(api):
    resp = api.patch('/api/clients/999', json={'amountPaid': 1})
    assert resp.status_code == 404


def test_put_requires_full_payload(api):
    client_id = api.post('/api/clients', json=client_payload()).get_json()['id']
    resp = api.put(f'/api/clients/{client_id}', json={'name': 'Renamed'})
    assert resp.status_code == 400

    resp = api.put(f'/api/clients/{client_id}', json=client_payload(name='Renamed', feeCurrency='GBP', totalProjectFee=79))
    assert resp.status_code == 200
    assert resp.get_json()['name'] == 'Renamed'
    assert resp.get_json()['totalProjectFeeUSD'] == '100.00'


def test_delete_client(api):
    client_id = api.post('/api/clients', json=client_payload()).get_json()['id']
    assert api.delete(f'/api/clients/{client_id}').status_code == 204
    assert api.get(f'/api/clients/{client_id}').status_code == 404
    assert all(c['id'] != client_id for c in api.get('/api/clients').get_json())
    assert api.delete(f'/api/clients/{client_id}').status_code == 404


def test_delete_client_removes_dependents_and_detaches_ledger(api, make_client, make_team_member):
    client = make_client('Cascade Co')
    member = make_team_member()
    api.post(f'/api/clients/{client.id}/assign', json={'teamMemberId': member.id})
    work_session_storage.check_in(client.id)
    transaction_id = api.post('/api/transactions', json={
        'clientId': client.id,
        'amount': 100,
        'type': 'incoming',
        'category': 'Revenue',
        'description': 'Deposit',
    }).get_json()['id']

    assert api.delete(f'/api/clients/{client.id}').status_code == 204
    db.session.expire_all()

    assert ClientAssignment.query.count() == 0
    assert Activity.query.count() == 0
    assert WorkSession.query.count() == 0
    transaction = db.session.get(Transaction, transaction_id)
    assert transaction is not None
    assert transaction.client_id is None


def test_list_orders_by_last_activity(api, make_client):
    older = make_client('Older')
    newer = make_client('Newer')
    names = [c['name'] for c in api.get('/api/clients').get_json()]
    assert names.index(newer.name) < names.index(older.name)

    api.post(f'/api/clients/{older.id}/activities', json={'type': 'note', 'description': 'Called back'})
    names = [c['name'] for c in api.get('/api/clients').get_json()]
    assert names[0] == 'Older'


# -------------------- ASSIGNMENTS -------------------- #

def test_assign_team_member_is_idempotent(api, make_client, make_team_member):
    client = make_client()
    member = make_team_member()

    resp = api.post(f'/api/clients/{client.id}/assign', json={'teamMemberId': member.id})
    assert resp.status_code == 201
    assert resp.get_json()['assignment']['teamMember']['name'] == 'Sarah Johnson'

    resp = api.post(f'/api/clients/{client.id}/assign', json={'teamMemberId': member.id})
    assert resp.status_code == 200
    assert resp.get_json()['message'] == 'Team member already assigned'
    assert ClientAssignment.query.filter_by(client_id=client.id).count() == 1

    body = api.get(f'/api/clients/{client.id}').get_json()
    assert [a['teamMemberId'] for a in body['assignments']] == [member.id]


def test_assignment_logs_an_activity(api, make_client, make_team_member):
    client = make_client('Royal Gems')
    member = make_team_member('Ahmed Hassan')
    api.post(f'/api/clients/{client.id}/assign', json={'teamMemberId': member.id})

    activities = api.get(f'/api/clients/{client.id}/activities').get_json()
    assert len(activities) == 1
    assert activities[0]['type'] == 'assignment'
    assert activities[0]['description'] == 'Ahmed Hassan assigned to Royal Gems'


def test_assign_unknown_team_member_returns_404(api, make_client):
    client = make_client()
    resp = api.post(f'/api/clients/{client.id}/assign', json={'teamMemberId': 42})
    assert resp.status_code == 404
    assert resp.get_json()['message'] == 'Team member not found'


def test_assign_requires_team_member_id(api, make_client):
    client = make_client()
    resp = api.post(f'/api/clients/{client.id}/assign', json={})
    assert resp.status_code == 400
    assert 'teamMemberId' in resp.get_json()['errors']


# -------------------- ACTIVITIES & PROJECTS -------------------- #

def test_client_activity_feed(api, make_client):
    client = make_client('Feed Co')
    resp = api.post(f'/api/clients/{client.id}/activities', json={'type': 'note', 'description': 'Sent proofs'})
    assert resp.status_code == 201
    assert resp.get_json()['clientId'] == client.id

    recent = api.get('/api/activities').get_json()
    assert recent[0]['description'] == 'Sent proofs'
    assert recent[0]['clientName'] == 'Feed Co'


def test_activity_for_unknown_client_returns_404(api):
    resp = api.post('/api/activities', json={'clientId': 999, 'type': 'note', 'description': 'x'})
    assert resp.status_code == 404
    assert api.get('/api/clients/999/activities').status_code == 404


def test_client_projects(api, make_client):
    client = make_client()
    resp = api.post(f'/api/clients/{client.id}/projects', json={
        'name': 'Spring catalogue',
        'startDate': '2026-03-01',
        'status': 'Paused',
    })
    assert resp.status_code == 201
    assert resp.get_json()['status'] == 'paused'

    projects = api.get(f'/api/clients/{client.id}/projects').get_json()
    assert [p['name'] for p in projects] == ['Spring catalogue']


def test_client_amounts_are_stored_as_decimal(make_client):
    client = make_client(total_project_fee=Decimal('1520.00'), fee_currency='AUD')
    assert client.total_project_fee_usd == Decimal('1000.00')


def test_create_client_rejects_amounts_beyond_column_precision(api):
    resp = api.post('/api/clients', json=client_payload(totalProjectFee=10 ** 15, amountPaid='1000000000.00'))
    assert resp.status_code == 400
    assert {'totalProjectFee', 'amountPaid'} <= set(resp.get_json()['errors'])

    resp = api.post('/api/clients', json=client_payload(totalProjectFee='999999999.99', feeCurrency='OMR'))
    assert resp.status_code == 201
    assert resp.get_json()['totalProjectFeeUSD'] == '2631578947.34'


def test_create_client_rejects_oversized_counters(api):
    resp = api.post('/api/clients', json=client_payload(totalImagesToMake=2 ** 31))
    assert resp.status_code == 400
    assert 'totalImagesToMake' in resp.get_json()['errors']


def test_assign_inactive_team_member_is_rejected(api, make_client, make_team_member):
    client = make_client()
    member = make_team_member()
    api.delete(f'/api/team-members/{member.id}')

    resp = api.post(f'/api/clients/{client.id}/assign', json={'teamMemberId': member.id})
    assert resp.status_code == 400
    assert 'teamMemberId' in resp.get_json()['errors']
    assert ClientAssignment.query.count() == 0
