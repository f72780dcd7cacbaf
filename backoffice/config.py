import os
from dotenv import load_dotenv

from backoffice.models.enums import ProjectStatus

load_dotenv()


def _csv(value):
    return tuple(item.strip() for item in value.split(',') if item.strip())


def project_statuses(value):
    """Comma-separated statuses in their canonical spelling; unknown names are kept as given."""
    return tuple(ProjectStatus.normalize(item) or item for item in _csv(value))


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///dashboard.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Bounded pool; pre_ping drops dead connections instead of failing the request
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': 10,
        'max_overflow': 0,
        'pool_timeout': 10,
        'pool_recycle': 120,
        'pool_pre_ping': True,
    }
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')

    AUTO_INIT_DB = os.environ.get('AUTO_INIT_DB', 'true').lower() == 'true'
    SEED_SAMPLE_DATA = os.environ.get('SEED_SAMPLE_DATA', 'false').lower() == 'true'

    # Dashboard tuning
    ACTIVE_PROJECT_STATUSES = project_statuses(os.environ.get('ACTIVE_PROJECT_STATUSES', 'Planning,In Progress,Testing'))
    RECENT_TRANSACTIONS_DAYS = int(os.environ.get('RECENT_TRANSACTIONS_DAYS', 7))
    RECENT_TRANSACTIONS_LIMIT = int(os.environ.get('RECENT_TRANSACTIONS_LIMIT', 8))
    RECENT_ACTIVITIES_LIMIT = int(os.environ.get('RECENT_ACTIVITIES_LIMIT', 15))
    MAX_WINDOW_DAYS = 3650
    MAX_LIST_LIMIT = 500


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    AUTO_INIT_DB = True
    SEED_SAMPLE_DATA = False
    LOG_LEVEL = 'WARNING'
