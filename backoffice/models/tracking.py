from backoffice import db
from datetime import datetime

from backoffice.models.enums import SampleRequestStatus


class SampleRequest(db.Model):
    __tablename__ = 'sample_requests'

    id = db.Column(db.Integer, primary_key=True)
    company_name = db.Column(db.String(255), nullable=False)
    country = db.Column(db.String(100), nullable=False)
    request_date = db.Column(db.Date, nullable=False)
    status = db.Column(db.String(20), nullable=False, default=SampleRequestStatus.IN_PROCESSING.value)
    notes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)


class WorkSession(db.Model):
    """A client was worked on during ``work_date``."""
    __tablename__ = 'work_sessions'

    id = db.Column(db.Integer, primary_key=True)
    client_id = db.Column(db.Integer, db.ForeignKey('clients.id', ondelete='CASCADE'), nullable=False)
    work_date = db.Column(db.Date, nullable=False, index=True)
    duration = db.Column(db.Integer)  # minutes
    notes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)


class DailyImageCount(db.Model):
    __tablename__ = 'daily_image_count'

    id = db.Column(db.Integer, primary_key=True)
    date = db.Column(db.Date, nullable=False, unique=True)
    image_count = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
