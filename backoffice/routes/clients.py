from flask import Blueprint, jsonify

from backoffice.schemas import (
    activities_schema,
    activity_schema,
    assignment_schema,
    client_schema,
    clients_schema,
    project_schema,
    projects_schema,
)
from backoffice.storage import activity_storage, client_storage, project_storage
from backoffice.utils.http import get_json_body

clients_bp = Blueprint('clients', __name__)


# -------------------- CLIENT ROUTES -------------------- #

@clients_bp.route('', methods=['GET'])
def list_clients():
    """All clients with their team assignments, most recently active first."""
    return jsonify(clients_schema.dump(client_storage.list())), 200


@clients_bp.route('/<int:client_id>', methods=['GET'])
def get_client(client_id):
    return jsonify(client_schema.dump(client_storage.get(client_id))), 200


@clients_bp.route('', methods=['POST'])
def create_client():
    data = client_schema.load(get_json_body())
    client = client_storage.create(data)
    return jsonify(client_schema.dump(client)), 201


@clients_bp.route('/<int:client_id>', methods=['PATCH'])
def patch_client(client_id):
    # Quick edits send a single field, e.g. {"imagesMade": 12}
    data = client_schema.load(get_json_body(), partial=True)
    client = client_storage.update(client_id, data)
    return jsonify(client_schema.dump(client)), 200


@clients_bp.route('/<int:client_id>', methods=['PUT'])
def replace_client(client_id):
    data = client_schema.load(get_json_body())
    client = client_storage.update(client_id, data)
    return jsonify(client_schema.dump(client)), 200


@clients_bp.route('/<int:client_id>', methods=['DELETE'])
def delete_client(client_id):
    client_storage.delete(client_id)
    return '', 204


@clients_bp.route('/<int:client_id>/assign', methods=['POST'])
def assign_team_member(client_id):
    data = assignment_schema.load(get_json_body())
    assignment, created = client_storage.assign_team_member(client_id, data['team_member_id'])
    return jsonify({
        'message': 'Team member assigned successfully' if created else 'Team member already assigned',
        'assignment': assignment_schema.dump(assignment),
    }), 201 if created else 200


# -------------------- NESTED RESOURCES -------------------- #

@clients_bp.route('/<int:client_id>/activities', methods=['GET'])
def list_client_activities(client_id):
    return jsonify(activities_schema.dump(activity_storage.for_client(client_id))), 200


@clients_bp.route('/<int:client_id>/activities', methods=['POST'])
def create_client_activity(client_id):
    data = activity_schema.load(get_json_body(), partial=('client_id',))
    data['client_id'] = client_id
    activity = activity_storage.create(data)
    return jsonify(activity_schema.dump(activity)), 201


@clients_bp.route('/<int:client_id>/projects', methods=['GET'])
def list_client_projects(client_id):
    return jsonify(projects_schema.dump(project_storage.for_client(client_id))), 200


@clients_bp.route('/<int:client_id>/projects', methods=['POST'])
def create_client_project(client_id):
    data = project_schema.load(get_json_body())
    project = project_storage.create_for_client(client_id, data)
    return jsonify(project_schema.dump(project)), 201
