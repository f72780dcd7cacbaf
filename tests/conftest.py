import pytest

from backoffice import create_app, db
from backoffice.config import TestConfig
from backoffice.storage import client_storage, team_member_storage


@pytest.fixture
def app():
    """A fresh app bound to its own in-memory database, with an app context pushed."""
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def api(app):
    return app.test_client()


def client_payload(**overrides):
    payload = {
        'name': 'Golden Crown Jewelers',
        'contactPerson': 'James Windsor',
        'phone': '+1-555-0123',
        'country': 'United States',
        'countryCode': 'US',
        'contractType': 'monthly',
        'projectStatus': 'Planning',
        'contractStartDate': '2026-01-15',
        'expectedCompletionDate': '2026-12-15',
        'totalProjectFee': 1000,
        'feeCurrency': 'USD',
        'amountPaid': 0,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_client(app):
    """Create a client straight through the storage layer."""
    from datetime import date
    from decimal import Decimal

    def _make_client(name='Client', **overrides):
        data = {
            'name': name,
            'contact_person': 'Contact',
            'country': 'United States',
            'country_code': 'US',
            'contract_type': 'monthly',
            'project_status': 'Planning',
            'contract_start_date': date(2026, 1, 1),
            'expected_completion_date': date(2026, 12, 31),
            'total_project_fee': Decimal('1000.00'),
            'fee_currency': 'USD',
            'amount_paid': Decimal('0.00'),
        }
        data.update(overrides)
        return client_storage.create(data)

    return _make_client


@pytest.fixture
def make_team_member(app):

    def _make_team_member(name='Sarah Johnson', **overrides):
        data = {
            'name': name,
            'whatsapp_no': '+1-555-0101',
            'country': 'United States',
            'role': 'cofounder',
        }
        data.update(overrides)
        return team_member_storage.create(data)

    return _make_team_member
