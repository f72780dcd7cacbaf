from flask import Blueprint, current_app, jsonify

from backoffice.schemas import activities_schema, activity_schema
from backoffice.storage import activity_storage
from backoffice.utils.http import bounded_int_arg, get_json_body

activities_bp = Blueprint('activities', __name__)


@activities_bp.route('', methods=['GET'])
def recent_activities():
    """Latest activity across all clients, each tagged with the client's name."""
    limit = bounded_int_arg(
        'limit', current_app.config['RECENT_ACTIVITIES_LIMIT'], current_app.config['MAX_LIST_LIMIT']
    )
    return jsonify(activities_schema.dump(activity_storage.recent(limit=limit))), 200


@activities_bp.route('', methods=['POST'])
def create_activity():
    data = activity_schema.load(get_json_body())
    activity = activity_storage.create(data)
    return jsonify(activity_schema.dump(activity)), 201
