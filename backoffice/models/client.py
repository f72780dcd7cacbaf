from backoffice import db
from datetime import datetime
from decimal import Decimal

from backoffice.models.enums import ContractType, ProjectStatus, ProjectState


class Client(db.Model):
    __tablename__ = 'clients'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)  # company name
    contact_person = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(50))
    country = db.Column(db.String(100), nullable=False)
    country_code = db.Column(db.String(10), nullable=False)
    contract_type = db.Column(db.String(20), nullable=False, default=ContractType.MONTHLY.value)
    project_status = db.Column(db.String(50), nullable=False, default=ProjectStatus.PLANNING.value)
    contract_start_date = db.Column(db.Date, nullable=False)
    expected_completion_date = db.Column(db.Date, nullable=False)

    # Money: original currency plus the USD copy derived at write time
    total_project_fee = db.Column(db.Numeric(12, 2), nullable=False)
    total_project_fee_usd = db.Column(db.Numeric(12, 2), nullable=False, default=Decimal('0.00'))
    fee_currency = db.Column(db.String(3), nullable=False, default='USD')
    amount_paid = db.Column(db.Numeric(12, 2), nullable=False, default=Decimal('0.00'))
    amount_paid_usd = db.Column(db.Numeric(12, 2), nullable=False, default=Decimal('0.00'))

    # Progress counters
    total_images_to_make = db.Column(db.Integer, nullable=False, default=0)
    images_made = db.Column(db.Integer, nullable=False, default=0)
    total_jewelry_articles = db.Column(db.Integer, nullable=False, default=0)
    jewelry_articles_made = db.Column(db.Integer, nullable=False, default=0)

    logo_url = db.Column(db.Text)

    last_activity = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    assignments = db.relationship(
        'ClientAssignment', backref='client', lazy=True,
        cascade='all, delete-orphan', order_by='ClientAssignment.id'
    )
    activities = db.relationship('Activity', backref='client', lazy=True, cascade='all, delete-orphan')
    projects = db.relationship('Project', backref='client', lazy=True, cascade='all, delete-orphan')
    work_sessions = db.relationship('WorkSession', backref='client', lazy=True, cascade='all, delete-orphan')
    # Ledger rows outlive the client; the FK is cleared instead
    transactions = db.relationship('Transaction', backref='client', lazy=True)

    @property
    def primary_team_member(self):
        """The first assigned team member, which the UI shows as "the" assignee."""
        if not self.assignments:
            return None
        return self.assignments[0].team_member

    def __repr__(self):
        return f"<Client {self.id} {self.name!r}>"


class ClientAssignment(db.Model):
    __tablename__ = 'client_assignments'
    __table_args__ = (
        db.UniqueConstraint('client_id', 'team_member_id', name='uq_client_assignment'),
    )

    id = db.Column(db.Integer, primary_key=True)
    client_id = db.Column(db.Integer, db.ForeignKey('clients.id', ondelete='CASCADE'), nullable=False)
    team_member_id = db.Column(db.Integer, db.ForeignKey('team_members.id'), nullable=False)
    assigned_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    team_member = db.relationship('TeamMember', backref='assignments')


class Activity(db.Model):
    __tablename__ = 'activities'

    id = db.Column(db.Integer, primary_key=True)
    client_id = db.Column(db.Integer, db.ForeignKey('clients.id', ondelete='CASCADE'), nullable=False)
    type = db.Column(db.String(50), nullable=False)
    description = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    @property
    def client_name(self):
        return self.client.name if self.client else None


class Project(db.Model):
    __tablename__ = 'projects'

    id = db.Column(db.Integer, primary_key=True)
    client_id = db.Column(db.Integer, db.ForeignKey('clients.id', ondelete='CASCADE'), nullable=False)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text)
    status = db.Column(db.String(20), nullable=False, default=ProjectState.ACTIVE.value)
    start_date = db.Column(db.Date, nullable=False)
    due_date = db.Column(db.Date)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
