from flask import Blueprint, jsonify

from backoffice.schemas import marketing_transaction_schema, marketing_transactions_schema
from backoffice.storage import marketing_transaction_storage
from backoffice.utils.http import get_json_body

marketing_bp = Blueprint('marketing', __name__)


@marketing_bp.route('', methods=['GET'])
def list_marketing_transactions():
    return jsonify(marketing_transactions_schema.dump(marketing_transaction_storage.list())), 200


@marketing_bp.route('/<int:transaction_id>', methods=['GET'])
def get_marketing_transaction(transaction_id):
    transaction = marketing_transaction_storage.get(transaction_id)
    return jsonify(marketing_transaction_schema.dump(transaction)), 200


@marketing_bp.route('', methods=['POST'])
def create_marketing_transaction():
    data = marketing_transaction_schema.load(get_json_body())
    transaction = marketing_transaction_storage.create(data)
    return jsonify(marketing_transaction_schema.dump(transaction)), 201


@marketing_bp.route('/<int:transaction_id>', methods=['PATCH'])
def update_marketing_transaction(transaction_id):
    data = marketing_transaction_schema.load(get_json_body(), partial=True)
    transaction = marketing_transaction_storage.update(transaction_id, data)
    return jsonify(marketing_transaction_schema.dump(transaction)), 200


@marketing_bp.route('/<int:transaction_id>', methods=['DELETE'])
def delete_marketing_transaction(transaction_id):
    marketing_transaction_storage.delete(transaction_id)
    return '', 204
