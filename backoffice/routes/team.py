from flask import Blueprint, jsonify, request

from backoffice.schemas import team_member_schema, team_members_schema
from backoffice.storage import team_member_storage
from backoffice.utils.http import get_json_body

team_bp = Blueprint('team', __name__)


@team_bp.route('', methods=['GET'])
def list_team_members():
    include_inactive = request.args.get('includeInactive', 'false').lower() == 'true'
    members = team_member_storage.list(include_inactive=include_inactive)
    return jsonify(team_members_schema.dump(members)), 200


@team_bp.route('/<int:member_id>', methods=['GET'])
def get_team_member(member_id):
    return jsonify(team_member_schema.dump(team_member_storage.get(member_id))), 200


@team_bp.route('', methods=['POST'])
def create_team_member():
    data = team_member_schema.load(get_json_body())
    member = team_member_storage.create(data)
    return jsonify(team_member_schema.dump(member)), 201


@team_bp.route('/<int:member_id>', methods=['PATCH'])
def update_team_member(member_id):
    data = team_member_schema.load(get_json_body(), partial=True)
    member = team_member_storage.update(member_id, data)
    return jsonify(team_member_schema.dump(member)), 200


@team_bp.route('/<int:member_id>', methods=['DELETE'])
def deactivate_team_member(member_id):
    team_member_storage.delete(member_id)
    return '', 204
