"""Persistence layer: one storage object per entity over the SQLAlchemy session.

Every mutating call commits its own unit of work and rolls back on failure,
so a request either fully applies or leaves the database untouched. Unknown
ids raise ``NotFoundError``.
"""
from datetime import datetime, date

from dateutil.relativedelta import relativedelta
from flask import current_app
from marshmallow import ValidationError
from sqlalchemy.orm import selectinload

from backoffice import db
from backoffice.models import (
    Activity,
    Client,
    ClientAssignment,
    DailyImageCount,
    MarketingTransaction,
    Project,
    SampleRequest,
    TeamMember,
    Transaction,
    WorkSession,
)
from backoffice.utils.currency import to_usd_cents
from backoffice.utils.errors import NotFoundError


def utc_today():
    return datetime.utcnow().date()


def commit():
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise


class BaseStorage:
    model = None
    label = None

    def ordering(self):
        return (self.model.id,)

    def query(self):
        return self.model.query

    def list(self, **filters):
        return self.query().filter_by(**filters).order_by(*self.ordering()).all()

    def get(self, entity_id):
        obj = db.session.get(self.model, entity_id)
        if obj is None:
            raise NotFoundError(self.label, entity_id)
        return obj

    def before_save(self, obj):
        """Hook for derived columns, called before every create/update commit."""

    def create(self, data):
        obj = self.model(**data)
        self.before_save(obj)
        db.session.add(obj)
        commit()
        current_app.logger.info("Created %s %s", self.label.lower(), obj.id)
        return obj

    def update(self, entity_id, data):
        obj = self.get(entity_id)
        for field, value in data.items():
            setattr(obj, field, value)
        self.before_save(obj)
        commit()
        current_app.logger.info("Updated %s %s (%s)", self.label.lower(), entity_id, ', '.join(sorted(data)))
        return obj

    def delete(self, entity_id):
        obj = self.get(entity_id)
        db.session.delete(obj)
        commit()
        current_app.logger.info("Deleted %s %s", self.label.lower(), entity_id)


# -------------------- CLIENTS -------------------- #

class ClientStorage(BaseStorage):
    model = Client
    label = 'Client'

    def ordering(self):
        return (Client.last_activity.desc(), Client.id.desc())

    def query(self):
        return Client.query.options(
            selectinload(Client.assignments).selectinload(ClientAssignment.team_member)
        )

    def before_save(self, client):
        client.total_project_fee_usd = to_usd_cents(client.total_project_fee, client.fee_currency)
        client.amount_paid_usd = to_usd_cents(client.amount_paid or 0, client.fee_currency)

    def assign_team_member(self, client_id, team_member_id):
        """Attach a team member to a client.

        Returns ``(assignment, created)``. Assigning the same member twice
        returns the existing row. Deactivated members cannot be assigned.
        """
        client = self.get(client_id)
        member = team_member_storage.get(team_member_id)
        if not member.is_active:
            raise ValidationError({'teamMemberId': ['Team member is inactive.']})

        existing = ClientAssignment.query.filter_by(
            client_id=client.id, team_member_id=member.id
        ).first()
        if existing:
            return existing, False

        assignment = ClientAssignment(client_id=client.id, team_member_id=member.id)
        db.session.add(assignment)
        db.session.add(Activity(
            client_id=client.id,
            type='assignment',
            description=f"{member.name} assigned to {client.name}",
        ))
        client.last_activity = datetime.utcnow()
        commit()
        current_app.logger.info("Assigned team member %s to client %s", member.id, client.id)
        return assignment, True


class TeamMemberStorage(BaseStorage):
    model = TeamMember
    label = 'Team member'

    def list(self, include_inactive=False):
        query = TeamMember.query
        if not include_inactive:
            query = query.filter_by(is_active=True)
        return query.order_by(*self.ordering()).all()

    def delete(self, entity_id):
        # Soft delete: past assignments and ledger rows keep their reference
        member = self.get(entity_id)
        member.is_active = False
        commit()
        current_app.logger.info("Deactivated team member %s", entity_id)


class ActivityStorage(BaseStorage):
    model = Activity
    label = 'Activity'

    def ordering(self):
        return (Activity.created_at.desc(), Activity.id.desc())

    def create(self, data):
        client = client_storage.get(data['client_id'])
        client.last_activity = datetime.utcnow()
        return super().create(data)

    def for_client(self, client_id):
        client_storage.get(client_id)
        return self.list(client_id=client_id)

    def recent(self, limit=15):
        return (
            Activity.query.join(Client)
            .options(selectinload(Activity.client))
            .order_by(*self.ordering())
            .limit(limit)
            .all()
        )


class ProjectStorage(BaseStorage):
    model = Project
    label = 'Project'

    def ordering(self):
        return (Project.start_date.desc(), Project.id.desc())

    def for_client(self, client_id):
        client_storage.get(client_id)
        return self.list(client_id=client_id)

    def create_for_client(self, client_id, data):
        client = client_storage.get(client_id)
        return self.create(dict(data, client_id=client.id))


# -------------------- FINANCE -------------------- #

class TransactionStorage(BaseStorage):
    model = Transaction
    label = 'Transaction'
    editable_fields = ('team_member_id', 'category')

    def ordering(self):
        return (Transaction.date.desc(), Transaction.id.desc())

    def _check_references(self, data):
        if data.get('client_id') is not None:
            client_storage.get(data['client_id'])
        if data.get('team_member_id') is not None:
            team_member_storage.get(data['team_member_id'])

    def before_save(self, transaction):
        transaction.amount_usd = to_usd_cents(transaction.amount, transaction.currency)

    def create(self, data):
        self._check_references(data)
        return super().create(data)

    def update(self, entity_id, data):
        """Only the team member and the category of a ledger row can change."""
        data = {field: value for field, value in data.items() if field in self.editable_fields}
        self._check_references(data)
        return super().update(entity_id, data)


class MarketingTransactionStorage(BaseStorage):
    model = MarketingTransaction
    label = 'Marketing transaction'

    def ordering(self):
        return (MarketingTransaction.date.desc(), MarketingTransaction.id.desc())

    def before_save(self, transaction):
        transaction.amount_usd = to_usd_cents(transaction.amount, transaction.currency)


# -------------------- TRACKING -------------------- #

class SampleRequestStorage(BaseStorage):
    model = SampleRequest
    label = 'Sample request'

    def ordering(self):
        return (SampleRequest.request_date.desc(), SampleRequest.id.desc())


class WorkSessionStorage(BaseStorage):
    model = WorkSession
    label = 'Work session'

    def ordering(self):
        return (WorkSession.created_at, WorkSession.id)

    def today(self):
        return self.list(work_date=utc_today())

    def check_in(self, client_id, duration=None, notes=None):
        """Record that ``client_id`` was worked on today.

        Returns ``(session, created)``; a second check-in on the same day
        returns the existing session.
        """
        client = client_storage.get(client_id)
        existing = WorkSession.query.filter_by(client_id=client.id, work_date=utc_today()).first()
        if existing:
            return existing, False
        session = self.create({
            'client_id': client.id,
            'work_date': utc_today(),
            'duration': duration,
            'notes': notes,
        })
        return session, True

    def check_out(self, client_id):
        sessions = WorkSession.query.filter_by(client_id=client_id, work_date=utc_today()).all()
        if not sessions:
            raise NotFoundError(self.label, client_id)
        for session in sessions:
            db.session.delete(session)
        commit()
        current_app.logger.info("Removed today's work session for client %s", client_id)


class DailyImageCountStorage(BaseStorage):
    model = DailyImageCount
    label = 'Image count'

    def ordering(self):
        return (DailyImageCount.date,)

    def count_for(self, day):
        row = DailyImageCount.query.filter_by(date=day).first()
        return row.image_count if row else 0

    def today_count(self):
        return self.count_for(utc_today())

    def set_for_date(self, day, count):
        """Upsert: one row per calendar date."""
        row = DailyImageCount.query.filter_by(date=day).first()
        if row:
            row.image_count = count
        else:
            row = DailyImageCount(date=day, image_count=count)
            db.session.add(row)
        commit()
        current_app.logger.info("Image count for %s set to %s", day.isoformat(), count)
        return row

    def set_today(self, count):
        return self.set_for_date(utc_today(), count)

    def for_month(self, year, month):
        start = date(year, month, 1)
        end = start + relativedelta(months=1)
        return (
            DailyImageCount.query
            .filter(DailyImageCount.date >= start, DailyImageCount.date < end)
            .order_by(*self.ordering())
            .all()
        )

    def reset_today(self):
        return self.set_today(0)


client_storage = ClientStorage()
team_member_storage = TeamMemberStorage()
activity_storage = ActivityStorage()
project_storage = ProjectStorage()
transaction_storage = TransactionStorage()
marketing_transaction_storage = MarketingTransactionStorage()
sample_request_storage = SampleRequestStorage()
work_session_storage = WorkSessionStorage()
image_count_storage = DailyImageCountStorage()
