from backoffice import db
from datetime import datetime
from decimal import Decimal

from backoffice.models.enums import MarketingPeriod


class Transaction(db.Model):
    """Explicit ledger entry. Client payments tracked on ``Client.amount_paid``
    are not mirrored here."""
    __tablename__ = 'transactions'

    id = db.Column(db.Integer, primary_key=True)
    client_id = db.Column(db.Integer, db.ForeignKey('clients.id', ondelete='SET NULL'), nullable=True)
    team_member_id = db.Column(db.Integer, db.ForeignKey('team_members.id'), nullable=True)
    amount = db.Column(db.Numeric(12, 2), nullable=False)
    amount_usd = db.Column(db.Numeric(12, 2), nullable=False, default=Decimal('0.00'))
    currency = db.Column(db.String(3), nullable=False, default='USD')
    type = db.Column(db.String(30), nullable=False)  # incoming/payment_to_team/expense/manual_income/manual_expense
    category = db.Column(db.String(30))  # Revenue/Salary/Expenses
    description = db.Column(db.Text, nullable=False)
    date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)


class MarketingTransaction(db.Model):
    __tablename__ = 'marketing_transactions'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    amount = db.Column(db.Numeric(12, 2), nullable=False)
    amount_usd = db.Column(db.Numeric(12, 2), nullable=False, default=Decimal('0.00'))
    currency = db.Column(db.String(3), nullable=False, default='USD')
    date = db.Column(db.DateTime, nullable=False)
    logo = db.Column(db.Text)  # base64 image
    period = db.Column(db.String(20), nullable=False, default=MarketingPeriod.ONE_TIME.value)
    received_by = db.Column(db.String(255))
    note = db.Column(db.Text)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
