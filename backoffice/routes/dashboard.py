from flask import Blueprint, current_app, jsonify

from backoffice.utils.dashboard_calculator import DashboardCalculator
from backoffice.utils.http import bounded_int_arg

dashboard_bp = Blueprint('dashboard', __name__)


@dashboard_bp.route('/metrics', methods=['GET'])
def dashboard_metrics():
    return jsonify(DashboardCalculator.dashboard_metrics()), 200


@dashboard_bp.route('/recent-transactions', methods=['GET'])
def recent_transactions():
    config = current_app.config
    days = bounded_int_arg('days', config['RECENT_TRANSACTIONS_DAYS'], config['MAX_WINDOW_DAYS'])
    limit = bounded_int_arg('limit', config['RECENT_TRANSACTIONS_LIMIT'], config['MAX_LIST_LIMIT'])
    return jsonify(DashboardCalculator.recent_transactions(window_days=days, limit=limit)), 200


@dashboard_bp.route('/finances', methods=['GET'])
def finance_summary():
    return jsonify(DashboardCalculator.finance_summary()), 200
