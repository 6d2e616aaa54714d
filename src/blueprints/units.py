import logging

from flask import Blueprint, current_app, request, jsonify

from converters.exceptions import UnknownCategoryError
from converters.units import DISPLAY_PRECISION, convert_units, describe_categories, get_base_unit, get_units
from tracking.activity import record_tool_use

logger = logging.getLogger(__name__)

TOOL_ID = 'unit-converter'

units_bp = Blueprint('units', __name__)

@units_bp.route('/api/units', methods=['GET'])
def api_unit_categories():
    """List unit categories with their units"""
    return jsonify({'categories': describe_categories()})

@units_bp.route('/api/units/<category>', methods=['GET'])
def api_category_units(category):
    """List the units of one category"""
    try:
        return jsonify({
            'category': category,
            'base_unit': get_base_unit(category),
            'units': get_units(category)
        })
    except UnknownCategoryError as e:
        return jsonify({'success': False, 'error': str(e)}), 404

@units_bp.route('/api/units/convert', methods=['POST'])
def api_convert_units():
    """Convert a value between two units of the same category"""
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not data:
            return jsonify({'success': False, 'error': 'No data provided'}), 400

        missing = [field for field in ('category', 'value', 'from_unit', 'to_unit') if data.get(field) in (None, '')]
        if missing:
            return jsonify({'success': False, 'error': f"Missing fields: {', '.join(missing)}"}), 400

        places = current_app.config.get('DISPLAY_PRECISION', DISPLAY_PRECISION)
        result = convert_units(data['category'], data['value'], data['from_unit'], data['to_unit'], places)

        if not result['success']:
            return jsonify(result), 400

        # zero conversions are not worth a history entry
        user_id = data.get('user_id') if result['value'] != 0 else None
        preview = f"{data['value']} {result['from_unit']} to {result['to_unit']}"
        record_tool_use(TOOL_ID, user_id, preview)
        return jsonify(result)

    except Exception as e:
        logger.exception("Unexpected error in /api/units/convert")
        return jsonify({'success': False, 'error': f'Server error: {str(e)}'}), 500
