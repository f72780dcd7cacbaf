from flask import Blueprint, jsonify

from backoffice.schemas import transaction_schema, transaction_update_schema, transactions_schema
from backoffice.storage import transaction_storage
from backoffice.utils.http import get_json_body

transactions_bp = Blueprint('transactions', __name__)


@transactions_bp.route('', methods=['GET'])
def list_transactions():
    return jsonify(transactions_schema.dump(transaction_storage.list())), 200


@transactions_bp.route('/<int:transaction_id>', methods=['GET'])
def get_transaction(transaction_id):
    return jsonify(transaction_schema.dump(transaction_storage.get(transaction_id))), 200


@transactions_bp.route('', methods=['POST'])
def create_transaction():
    data = transaction_schema.load(get_json_body())
    transaction = transaction_storage.create(data)
    return jsonify(transaction_schema.dump(transaction)), 201


@transactions_bp.route('/<int:transaction_id>', methods=['PUT'])
def update_transaction(transaction_id):
    """Reassign the team member and/or change the category; other fields are ignored."""
    data = transaction_update_schema.load(get_json_body(), partial=True)
    transaction = transaction_storage.update(transaction_id, data)
    return jsonify(transaction_schema.dump(transaction)), 200


@transactions_bp.route('/<int:transaction_id>', methods=['DELETE'])
def delete_transaction(transaction_id):
    transaction_storage.delete(transaction_id)
    return jsonify({'message': 'Transaction deleted successfully'}), 200
