from datetime import date, datetime, timedelta
from decimal import Decimal

import click
from flask import current_app
from sqlalchemy import inspect as sql_inspect, text

from backoffice import db


def check_database_connection():
    """Check if database connection is working"""
    try:
        db.session.execute(text('SELECT 1'))
        return True
    except Exception as e:
        current_app.logger.error("Database connection failed: %s", e)
        db.session.rollback()
        return False


def get_existing_tables():
    return set(sql_inspect(db.engine).get_table_names())


def get_missing_tables():
    return sorted(set(db.metadata.tables) - get_existing_tables())


def initialize_database(seed=False):
    """Create any missing tables and optionally load sample data.

    Returns False when the database cannot be reached; the app still starts
    and requests fail with 500 until it comes back.
    """
    if not check_database_connection():
        return False

    missing = get_missing_tables()
    if missing:
        current_app.logger.info("Creating %d missing tables: %s", len(missing), ', '.join(missing))
        db.create_all()

    if seed:
        create_sample_data()
    return True


# -------------------- SAMPLE DATA -------------------- #

SAMPLE_TEAM_MEMBERS = [
    {'name': 'Sarah Johnson', 'whatsapp_no': '+1-555-0101', 'country': 'United States', 'role': 'cofounder'},
    {'name': 'Michael Chen', 'whatsapp_no': '+65-5550-0102', 'country': 'Singapore', 'role': 'freelancer'},
    {'name': 'Emily Rodriguez', 'whatsapp_no': '+34-555-0103', 'country': 'Spain', 'role': 'freelancer'},
]

SAMPLE_CLIENTS = [
    {
        'name': 'Golden Crown Jewelers', 'contact_person': 'James Windsor', 'phone': '+1-555-0123',
        'country': 'United States', 'country_code': 'US', 'contract_type': 'one-time',
        'project_status': 'In Progress', 'total_project_fee': Decimal('12500.00'), 'fee_currency': 'USD',
        'amount_paid': Decimal('9375.00'), 'total_images_to_make': 400, 'images_made': 300,
        'total_jewelry_articles': 80, 'jewelry_articles_made': 60,
    },
    {
        'name': 'Sapphire Boutique', 'contact_person': 'Maria Santos', 'phone': '+44-20-7946-0958',
        'country': 'United Kingdom', 'country_code': 'GB', 'contract_type': 'monthly',
        'project_status': 'Testing', 'total_project_fee': Decimal('8500.00'), 'fee_currency': 'GBP',
        'amount_paid': Decimal('8500.00'), 'total_images_to_make': 250, 'images_made': 225,
        'total_jewelry_articles': 40, 'jewelry_articles_made': 36,
    },
    {
        'name': 'Muscat Gold House', 'contact_person': 'Salim Al Harthy', 'phone': None,
        'country': 'Oman', 'country_code': 'OM', 'contract_type': 'monthly',
        'project_status': 'Planning', 'total_project_fee': Decimal('950.00'), 'fee_currency': 'OMR',
        'amount_paid': Decimal('0.00'), 'total_images_to_make': 120, 'images_made': 0,
        'total_jewelry_articles': 30, 'jewelry_articles_made': 0,
    },
]


def create_sample_data():
    """Insert demo rows, only if the database has no clients yet."""
    from backoffice.models import Client
    from backoffice.storage import (
        client_storage, sample_request_storage, team_member_storage, transaction_storage,
    )

    if Client.query.first():
        return False

    current_app.logger.info("Creating sample data...")
    members = [team_member_storage.create(dict(m)) for m in SAMPLE_TEAM_MEMBERS]

    today = date.today()
    for index, data in enumerate(SAMPLE_CLIENTS):
        client = client_storage.create(dict(
            data,
            contract_start_date=today - timedelta(days=60 - index * 15),
            expected_completion_date=today + timedelta(days=120 + index * 30),
        ))
        client_storage.assign_team_member(client.id, members[index % len(members)].id)

    sample_request_storage.create({
        'company_name': 'Pearl Atelier', 'country': 'Qatar',
        'request_date': today - timedelta(days=3), 'status': 'in processing',
        'notes': 'Ten sample renders of the bridal line',
    })
    transaction_storage.create({
        'team_member_id': members[1].id, 'amount': Decimal('450.00'), 'currency': 'USD',
        'type': 'payment_to_team', 'category': 'Salary',
        'description': 'Freelance retouching batch', 'date': datetime.utcnow() - timedelta(days=2),
    })
    transaction_storage.create({
        'amount': Decimal('79.00'), 'currency': 'USD', 'type': 'expense', 'category': 'Expenses',
        'description': 'Rendering software subscription', 'date': datetime.utcnow() - timedelta(days=1),
    })
    current_app.logger.info("Sample data created.")
    return True


# Flask CLI commands registration
def register_db_commands(app):
    """Register database commands with Flask CLI"""

    @app.cli.command('init_db')
    def init_db_command():
        """Creates missing tables."""
        if initialize_database():
            click.echo('Database initialized.')
        else:
            click.echo('Database connection failed. Check DATABASE_URL.', err=True)

    @app.cli.command('seed_db')
    def seed_db_command():
        """Loads sample data into an empty database."""
        initialize_database()
        if create_sample_data():
            click.echo('Sample data created.')
        else:
            click.echo('Database already has clients; nothing seeded.')

    @app.cli.command('reset_db')
    @click.confirmation_option(prompt='This will delete all data. Are you sure you want to reset the database?')
    def reset_db_command():
        """Drops all tables and re-initializes the database."""
        db.drop_all()
        initialize_database()
        click.echo('Database has been reset.')

    @app.cli.command('reset_daily_count')
    def reset_daily_count_command():
        """Sets today's image count back to zero (run from cron at midnight)."""
        from backoffice.storage import image_count_storage
        row = image_count_storage.reset_today()
        click.echo(f"Image count for {row.date.isoformat()} reset to 0.")
