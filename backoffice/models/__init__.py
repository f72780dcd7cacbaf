from .client import Client, ClientAssignment, Activity, Project
from .team import TeamMember
from .finance import Transaction, MarketingTransaction
from .tracking import SampleRequest, WorkSession, DailyImageCount

__all__ = [
    'Client', 'ClientAssignment', 'Activity', 'Project',
    'TeamMember',
    'Transaction', 'MarketingTransaction',
    'SampleRequest', 'WorkSession', 'DailyImageCount',
]
