from flask import Blueprint, jsonify

from backoffice.schemas import sample_request_schema, sample_requests_schema
from backoffice.storage import sample_request_storage
from backoffice.utils.http import get_json_body

sample_requests_bp = Blueprint('sample_requests', __name__)


@sample_requests_bp.route('', methods=['GET'])
def list_sample_requests():
    return jsonify(sample_requests_schema.dump(sample_request_storage.list())), 200


@sample_requests_bp.route('/<int:request_id>', methods=['GET'])
def get_sample_request(request_id):
    return jsonify(sample_request_schema.dump(sample_request_storage.get(request_id))), 200


@sample_requests_bp.route('', methods=['POST'])
def create_sample_request():
    data = sample_request_schema.load(get_json_body())
    sample_request = sample_request_storage.create(data)
    return jsonify(sample_request_schema.dump(sample_request)), 201


@sample_requests_bp.route('/<int:request_id>', methods=['PATCH'])
def update_sample_request(request_id):
    # Any status may follow any other; there is no transition table
    data = sample_request_schema.load(get_json_body(), partial=True)
    sample_request = sample_request_storage.update(request_id, data)
    return jsonify(sample_request_schema.dump(sample_request)), 200


@sample_requests_bp.route('/<int:request_id>', methods=['DELETE'])
def delete_sample_request(request_id):
    sample_request_storage.delete(request_id)
    return '', 204
