"""Closed value sets for the string columns the dashboard filters on.

Values are stored as plain strings; the schemas validate and normalise input
against these classes so the rest of the code can compare with ``==``.
"""
import enum


class StrEnum(str, enum.Enum):

    @classmethod
    def values(cls):
        return [member.value for member in cls]

    @classmethod
    def aliases(cls):
        return {}

    @classmethod
    def normalize(cls, raw):
        """Map user input onto a canonical value, ignoring case and separators.

        Returns ``None`` when nothing matches.
        """
        if raw is None:
            return None
        key = _fold(raw)
        for member in cls:
            if _fold(member.value) == key:
                return member.value
        return cls.aliases().get(key)


def _fold(value):
    return str(value).strip().lower().replace('-', ' ').replace('_', ' ')


class ProjectStatus(StrEnum):
    PLANNING = 'Planning'
    IN_PROGRESS = 'In Progress'
    TESTING = 'Testing'
    REVIEW = 'Review'
    COMPLETED = 'Completed'
    PAUSED = 'Paused'

    @classmethod
    def aliases(cls):
        return {'running': cls.IN_PROGRESS.value, 'active': cls.IN_PROGRESS.value}


class ContractType(StrEnum):
    MONTHLY = 'monthly'
    ONE_TIME = 'one-time'


class TeamRole(StrEnum):
    COFOUNDER = 'cofounder'
    FREELANCER = 'freelancer'
    OTHER = 'other'

    @classmethod
    def aliases(cls):
        return {'co founder': cls.COFOUNDER.value}


class TransactionType(StrEnum):
    INCOMING = 'incoming'
    PAYMENT_TO_TEAM = 'payment_to_team'
    EXPENSE = 'expense'
    MANUAL_INCOME = 'manual_income'
    MANUAL_EXPENSE = 'manual_expense'


class TransactionCategory(StrEnum):
    REVENUE = 'Revenue'
    SALARY = 'Salary'
    EXPENSES = 'Expenses'


class SampleRequestStatus(StrEnum):
    IN_PROCESSING = 'in processing'
    DELIVERED = 'delivered'
    REJECTED = 'rejected'

    @classmethod
    def aliases(cls):
        return {'pending': cls.IN_PROCESSING.value, 'processing': cls.IN_PROCESSING.value}


class ProjectState(StrEnum):
    ACTIVE = 'active'
    COMPLETED = 'completed'
    PAUSED = 'paused'


class MarketingPeriod(StrEnum):
    ONE_TIME = 'one-time'
    MONTHLY = 'monthly'


INCOME_TRANSACTION_TYPES = (TransactionType.INCOMING.value, TransactionType.MANUAL_INCOME.value)
OUTGOING_TRANSACTION_TYPES = (
    TransactionType.PAYMENT_TO_TEAM.value,
    TransactionType.EXPENSE.value,
    TransactionType.MANUAL_EXPENSE.value,
)
