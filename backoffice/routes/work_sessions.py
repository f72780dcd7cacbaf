from flask import Blueprint, jsonify

from backoffice.schemas import work_session_schema, work_sessions_schema
from backoffice.storage import work_session_storage
from backoffice.utils.http import get_json_body

work_sessions_bp = Blueprint('work_sessions', __name__)


@work_sessions_bp.route('/today', methods=['GET'])
def today_sessions():
    return jsonify(work_sessions_schema.dump(work_session_storage.today())), 200


@work_sessions_bp.route('', methods=['POST'])
def check_in():
    """Mark a client as worked on today. Checking in twice is a no-op."""
    data = work_session_schema.load(get_json_body())
    session, created = work_session_storage.check_in(
        data['client_id'],
        duration=data.get('duration'),
        notes=data.get('notes'),
    )
    return jsonify(work_session_schema.dump(session)), 201 if created else 200


@work_sessions_bp.route('/<int:client_id>', methods=['DELETE'])
def check_out(client_id):
    work_session_storage.check_out(client_id)
    return '', 204
