"""Marshmallow schemas for every resource.

Loading validates request bodies and returns snake_case dicts keyed by model
attribute. Dumping renders rows as the camelCase JSON the dashboard client
reads. USD amounts are dump-only: the server derives them from the original
amount and currency.
"""
from datetime import timezone
from decimal import Decimal

from dateutil import parser as date_parser
from marshmallow import EXCLUDE, ValidationError, fields, validate

from backoffice import ma
from backoffice.models.enums import (
    ContractType,
    MarketingPeriod,
    ProjectState,
    ProjectStatus,
    SampleRequestStatus,
    TeamRole,
    TransactionCategory,
    TransactionType,
)


def camelcase(s):
    parts = iter(s.split('_'))
    return next(parts) + ''.join(part.title() for part in parts)


def not_blank(value):
    if not value or not value.strip():
        raise ValidationError('Field may not be blank.')


# ------------------ CUSTOM FIELDS ------------------

class Choice(fields.String):
    """String restricted to the values of a ``backoffice.models.enums`` class.

    Input is matched ignoring case and ``-``/``_``/space differences and is
    returned in its canonical spelling.
    """

    def __init__(self, enum_cls, **kwargs):
        self.enum_cls = enum_cls
        super().__init__(**kwargs)

    def _deserialize(self, value, attr, data, **kwargs):
        raw = super()._deserialize(value, attr, data, **kwargs)
        if raw == '' and self.allow_none:
            return None
        normalized = self.enum_cls.normalize(raw)
        if normalized is None:
            raise ValidationError(f"Must be one of: {', '.join(self.enum_cls.values())}.")
        return normalized


class CurrencyCode(fields.String):

    def __init__(self, **kwargs):
        kwargs.setdefault('validate', validate.Length(equal=3))
        super().__init__(**kwargs)

    def _deserialize(self, value, attr, data, **kwargs):
        return super()._deserialize(value, attr, data, **kwargs).strip().upper()


class IsoDateTime(fields.DateTime):
    """Accepts any ISO 8601 timestamp, including bare dates.

    Aware values are converted to naive UTC to match the stored columns.
    """

    def _deserialize(self, value, attr, data, **kwargs):
        if not isinstance(value, str):
            raise ValidationError('Not a valid datetime.')
        try:
            parsed = date_parser.isoparse(value)
        except (ValueError, OverflowError):
            raise ValidationError('Not a valid datetime.')
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        return parsed


class OptionalId(fields.Integer):
    """Foreign key that the client may clear with ``""`` or ``"unassigned"``."""

    def __init__(self, **kwargs):
        kwargs.setdefault('allow_none', True)
        super().__init__(**kwargs)

    def _deserialize(self, value, attr, data, **kwargs):
        if value in ('', 'unassigned'):
            return None
        return super()._deserialize(value, attr, data, **kwargs)


# Numeric(12, 2) holds ten integer digits. Input stops at nine so the USD copy
# still fits after dividing by the smallest rate in the table.
MAX_MONEY = Decimal('999999999.99')
# 32-bit INTEGER columns
MAX_COUNTER = 2147483647


def Money(**kwargs):
    kwargs.setdefault('validate', validate.Range(min=0, max=MAX_MONEY))
    return fields.Decimal(places=2, as_string=True, **kwargs)


def Counter(**kwargs):
    kwargs.setdefault('validate', validate.Range(min=0, max=MAX_COUNTER))
    return fields.Integer(**kwargs)


def RequiredText(**kwargs):
    return fields.String(required=True, validate=not_blank, **kwargs)


# ------------------ BASE ------------------

class CamelCaseSchema(ma.Schema):

    class Meta:
        unknown = EXCLUDE

    def on_bind_field(self, field_name, field_obj):
        field_obj.data_key = field_obj.data_key or camelcase(field_name)


# ------------------ TEAM ------------------

class TeamMemberSchema(CamelCaseSchema):
    id = fields.Integer(dump_only=True)
    name = RequiredText()
    whatsapp_no = RequiredText()
    country = RequiredText()
    role = Choice(TeamRole, load_default=TeamRole.OTHER.value)
    avatar = fields.String(allow_none=True)
    is_active = fields.Boolean(load_default=True)
    created_at = fields.DateTime(dump_only=True)


class AssignmentSchema(CamelCaseSchema):
    id = fields.Integer(dump_only=True)
    client_id = fields.Integer(dump_only=True)
    team_member_id = fields.Integer(required=True, strict=False)
    assigned_at = fields.DateTime(dump_only=True)
    team_member = fields.Nested(TeamMemberSchema, dump_only=True)


# ------------------ CLIENTS ------------------

class ClientSchema(CamelCaseSchema):
    id = fields.Integer(dump_only=True)
    name = RequiredText()
    contact_person = RequiredText()
    phone = fields.String(allow_none=True)
    country = RequiredText()
    country_code = RequiredText()
    contract_type = Choice(ContractType, load_default=ContractType.MONTHLY.value)
    project_status = Choice(ProjectStatus, load_default=ProjectStatus.PLANNING.value)
    contract_start_date = fields.Date(required=True)
    expected_completion_date = fields.Date(required=True)

    total_project_fee = Money(required=True)
    total_project_fee_usd = Money(dump_only=True, data_key='totalProjectFeeUSD')
    fee_currency = CurrencyCode(load_default='USD')
    amount_paid = Money(load_default=Decimal('0.00'))
    amount_paid_usd = Money(dump_only=True, data_key='amountPaidUSD')

    total_images_to_make = Counter(load_default=0)
    images_made = Counter(load_default=0)
    total_jewelry_articles = Counter(load_default=0)
    jewelry_articles_made = Counter(load_default=0)

    logo_url = fields.String(allow_none=True)

    last_activity = IsoDateTime()
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)

    assignments = fields.List(fields.Nested(AssignmentSchema), dump_only=True)
    progress_percentage = fields.Method('get_progress_percentage', dump_only=True)

    def get_progress_percentage(self, client):
        from backoffice.utils.dashboard_calculator import DashboardCalculator
        return DashboardCalculator.client_progress(client)


class ActivitySchema(CamelCaseSchema):
    id = fields.Integer(dump_only=True)
    client_id = fields.Integer(required=True, strict=False)
    type = RequiredText()
    description = RequiredText()
    created_at = fields.DateTime(dump_only=True)
    client_name = fields.String(dump_only=True)


class ProjectSchema(CamelCaseSchema):
    id = fields.Integer(dump_only=True)
    client_id = fields.Integer(dump_only=True)
    name = RequiredText()
    description = fields.String(allow_none=True)
    status = Choice(ProjectState, load_default=ProjectState.ACTIVE.value)
    start_date = fields.Date(required=True)
    due_date = fields.Date(allow_none=True)
    created_at = fields.DateTime(dump_only=True)


# ------------------ FINANCE ------------------

class TransactionSchema(CamelCaseSchema):
    id = fields.Integer(dump_only=True)
    client_id = OptionalId()
    team_member_id = OptionalId()
    amount = Money(required=True)
    amount_usd = Money(dump_only=True, data_key='amountUSD')
    currency = CurrencyCode(load_default='USD')
    type = Choice(TransactionType, required=True)
    category = Choice(TransactionCategory, allow_none=True)
    description = RequiredText()
    date = IsoDateTime()
    created_at = fields.DateTime(dump_only=True)


class MarketingTransactionSchema(CamelCaseSchema):
    id = fields.Integer(dump_only=True)
    name = RequiredText()
    amount = Money(required=True)
    amount_usd = Money(dump_only=True, data_key='amountUSD')
    currency = CurrencyCode(load_default='USD')
    date = IsoDateTime(required=True)
    logo = fields.String(allow_none=True)
    period = Choice(MarketingPeriod, load_default=MarketingPeriod.ONE_TIME.value)
    received_by = fields.String(allow_none=True)
    note = fields.String(allow_none=True)
    created_at = fields.DateTime(dump_only=True)


# ------------------ TRACKING ------------------

class SampleRequestSchema(CamelCaseSchema):
    id = fields.Integer(dump_only=True)
    company_name = RequiredText()
    country = RequiredText()
    request_date = fields.Date(required=True)
    status = Choice(SampleRequestStatus, load_default=SampleRequestStatus.IN_PROCESSING.value)
    notes = fields.String(allow_none=True)
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)


class WorkSessionSchema(CamelCaseSchema):
    id = fields.Integer(dump_only=True)
    client_id = fields.Integer(required=True, strict=False)
    work_date = fields.Date(dump_only=True)
    duration = Counter(allow_none=True)
    notes = fields.String(allow_none=True)
    created_at = fields.DateTime(dump_only=True)


class DailyImageCountSchema(CamelCaseSchema):
    id = fields.Integer(dump_only=True)
    date = fields.Date(dump_only=True)
    image_count = fields.Integer(dump_only=True)
    created_at = fields.DateTime(dump_only=True)


class ImageCountInputSchema(CamelCaseSchema):
    date = fields.Date(required=True)
    count = fields.Integer(required=True, strict=True, validate=validate.Range(min=0, max=MAX_COUNTER))


# Shared instances
team_member_schema = TeamMemberSchema()
team_members_schema = TeamMemberSchema(many=True)
assignment_schema = AssignmentSchema()
client_schema = ClientSchema()
clients_schema = ClientSchema(many=True)
activity_schema = ActivitySchema()
activities_schema = ActivitySchema(many=True)
project_schema = ProjectSchema()
projects_schema = ProjectSchema(many=True)
transaction_schema = TransactionSchema()
transactions_schema = TransactionSchema(many=True)
transaction_update_schema = TransactionSchema(only=('team_member_id', 'category'))
marketing_transaction_schema = MarketingTransactionSchema()
marketing_transactions_schema = MarketingTransactionSchema(many=True)
sample_request_schema = SampleRequestSchema()
sample_requests_schema = SampleRequestSchema(many=True)
work_session_schema = WorkSessionSchema()
work_sessions_schema = WorkSessionSchema(many=True)
daily_image_count_schema = DailyImageCountSchema()
daily_image_counts_schema = DailyImageCountSchema(many=True)
image_count_input_schema = ImageCountInputSchema()
