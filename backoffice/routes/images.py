from flask import Blueprint, jsonify
from marshmallow import ValidationError

from backoffice.schemas import daily_image_count_schema, daily_image_counts_schema, image_count_input_schema
from backoffice.storage import image_count_storage
from backoffice.utils.http import get_json_body

images_bp = Blueprint('images', __name__)


@images_bp.route('/today', methods=['GET'])
def today_count():
    return jsonify({'count': image_count_storage.today_count()}), 200


@images_bp.route('/today', methods=['POST'])
def set_today_count():
    data = image_count_input_schema.load(get_json_body(), partial=('date',))
    row = image_count_storage.set_today(data['count'])
    return jsonify(daily_image_count_schema.dump(row)), 200


@images_bp.route('/date', methods=['POST'])
def set_count_for_date():
    data = image_count_input_schema.load(get_json_body())
    row = image_count_storage.set_for_date(data['date'], data['count'])
    return jsonify(daily_image_count_schema.dump(row)), 200


@images_bp.route('/month/<int:year>/<int:month>', methods=['GET'])
def month_counts(year, month):
    if not (1 <= month <= 12 and 1 <= year < 9999):
        raise ValidationError({'month': ['Invalid year or month.']})
    rows = image_count_storage.for_month(year, month)
    return jsonify(daily_image_counts_schema.dump(rows)), 200
