from flask import Flask, jsonify, request, send_from_directory, send_file
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_cors import CORS
from flask_marshmallow import Marshmallow
from marshmallow import ValidationError
from sqlalchemy import event
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from werkzeug.exceptions import HTTPException
import logging
import os
from pathlib import Path


db = SQLAlchemy()
migrate = Migrate()
ma = Marshmallow()


def create_app(config_object='backoffice.config.Config'):
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config_object)
    if app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite'):
        # SQLite gets its own pool class; the Postgres pool limits do not apply
        app.config['SQLALCHEMY_ENGINE_OPTIONS'] = {}
    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    CORS(app, resources={r'/api/*': {'origins': app.config['CORS_ORIGINS']}})
    ma.init_app(app)

    from backoffice import models  # noqa: F401  (register tables on the metadata)

    with app.app_context():
        register_engine_error_logging(app)

        from backoffice.database_setup import initialize_database, register_db_commands

        # Register CLI commands
        register_db_commands(app)

        if app.config['AUTO_INIT_DB']:
            initialize_database(seed=app.config['SEED_SAMPLE_DATA'])

    # Register blueprints
    from backoffice.routes.clients import clients_bp
    from backoffice.routes.team import team_bp
    from backoffice.routes.activities import activities_bp
    from backoffice.routes.transactions import transactions_bp
    from backoffice.routes.marketing import marketing_bp
    from backoffice.routes.dashboard import dashboard_bp
    from backoffice.routes.images import images_bp
    from backoffice.routes.work_sessions import work_sessions_bp
    from backoffice.routes.sample_requests import sample_requests_bp

    app.register_blueprint(clients_bp, url_prefix='/api/clients')
    app.register_blueprint(team_bp, url_prefix='/api/team-members')
    app.register_blueprint(activities_bp, url_prefix='/api/activities')
    app.register_blueprint(transactions_bp, url_prefix='/api/transactions')
    app.register_blueprint(marketing_bp, url_prefix='/api/marketing-transactions')
    app.register_blueprint(dashboard_bp, url_prefix='/api/dashboard')
    app.register_blueprint(images_bp, url_prefix='/api/images')
    app.register_blueprint(work_sessions_bp, url_prefix='/api/work-sessions')
    app.register_blueprint(sample_requests_bp, url_prefix='/api/sample-requests')

    register_frontend(app)
    register_info_routes(app)
    register_error_handlers(app)

    return app


def configure_logging(app):
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    app.logger.setLevel(level)


def register_engine_error_logging(app):
    """Log driver and pool failures; the request still gets a 500, the process keeps running."""

    @event.listens_for(db.engine, 'handle_error')
    def log_db_error(context):
        app.logger.error(
            "Database error (%s): %s",
            type(context.original_exception).__name__,
            context.original_exception,
        )


def register_frontend(app):
    """Serve the built single-page client from ``dist`` when it is present."""
    react_build_path = Path(os.environ.get('FRONTEND_DIST', 'dist')).resolve()

    if not react_build_path.exists():
        app.logger.debug("Frontend build not found at %s, serving API only", react_build_path)
        return

    app.logger.info("Serving frontend from %s", react_build_path)

    @app.route('/assets/<path:filename>')
    def serve_assets(filename):
        return send_from_directory(react_build_path / 'assets', filename)

    # Serve the client for all non-API routes
    @app.route('/')
    @app.route('/<path:path>')
    def serve_react_app(path=''):
        if path.startswith('api/'):
            return {'message': 'API endpoint not found'}, 404
        return send_file(react_build_path / 'index.html')


def register_info_routes(app):

    @app.route('/api/health')
    def health_check():
        return {
            'status': 'healthy',
            'message': 'Dashboard API is running',
            'version': '1.0.0',
        }, 200

    @app.route('/api/db-info')
    def db_info():
        from backoffice.models import (
            Client, TeamMember, Transaction, MarketingTransaction,
            SampleRequest, WorkSession, DailyImageCount,
        )
        return {
            'database_status': 'connected',
            'stats': {
                'clients': Client.query.count(),
                'team_members': TeamMember.query.count(),
                'transactions': Transaction.query.count(),
                'marketing_transactions': MarketingTransaction.query.count(),
                'sample_requests': SampleRequest.query.count(),
                'work_sessions': WorkSession.query.count(),
                'image_count_days': DailyImageCount.query.count(),
            },
        }, 200

    @app.route('/api/currencies')
    def currencies():
        from backoffice.utils.currency import list_currencies
        return jsonify(list_currencies()), 200


def register_error_handlers(app):

    @app.errorhandler(ValidationError)
    def validation_error(error):
        return {'message': 'Invalid data', 'errors': error.messages}, 400

    from backoffice.utils.errors import NotFoundError

    @app.errorhandler(NotFoundError)
    def entity_not_found(error):
        return {'message': error.message}, 404

    @app.errorhandler(IntegrityError)
    def integrity_error(error):
        db.session.rollback()
        app.logger.warning("Integrity error on %s %s: %s", request.method, request.path, error.orig)
        return {'message': 'Request conflicts with existing data'}, 409

    @app.errorhandler(SQLAlchemyError)
    def database_error(error):
        db.session.rollback()
        app.logger.exception("Database failure on %s %s", request.method, request.path)
        return {'message': 'Internal server error'}, 500

    @app.errorhandler(HTTPException)
    def http_error(error):
        if error.code == 404:
            return {
                'message': 'API endpoint not found',
                'path': request.path,
            }, 404
        return {'message': error.description}, error.code

    @app.errorhandler(Exception)
    def internal_error(error):
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        return {'message': 'Internal server error'}, 500
