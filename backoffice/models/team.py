from backoffice import db
from datetime import datetime

from backoffice.models.enums import TeamRole


class TeamMember(db.Model):
    __tablename__ = 'team_members'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    whatsapp_no = db.Column(db.String(50), nullable=False)
    country = db.Column(db.String(100), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=TeamRole.OTHER.value)
    avatar = db.Column(db.Text)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    transactions = db.relationship('Transaction', backref='team_member', lazy=True)

    def __repr__(self):
        return f"<TeamMember {self.id} {self.name!r}>"
