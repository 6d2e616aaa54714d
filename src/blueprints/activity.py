from flask import Blueprint, request, jsonify

from config.tools import get_tool
from tracking.activity import activity_store, validate_identifier

activity_bp = Blueprint('activity', __name__)

# History API Routes
@activity_bp.route('/api/users/<user_id>/history', methods=['POST'])
def add_history(user_id):
    if not validate_identifier(user_id):
        return jsonify({'success': False, 'error': 'Invalid user id'}), 400

    data = request.get_json(silent=True)
    if not isinstance(data, dict) or 'tool_id' not in data:
        return jsonify({'success': False, 'error': 'Missing tool_id field'}), 400

    if not get_tool(data['tool_id']):
        return jsonify({'success': False, 'error': 'Unknown tool'}), 404

    preview = data.get('input_preview')
    if preview is not None and not isinstance(preview, str):
        return jsonify({'success': False, 'error': 'input_preview must be a string'}), 400

    result = activity_store.add_history(user_id, data['tool_id'], preview)
    return jsonify(result), (200 if result['success'] else 400)

@activity_bp.route('/api/users/<user_id>/history', methods=['GET'])
def get_history(user_id):
    if not validate_identifier(user_id):
        return jsonify({'success': False, 'error': 'Invalid user id'}), 400

    limit = request.args.get('limit', type=int)
    history = activity_store.get_history(user_id, limit)

    return jsonify({
        'user_id': user_id,
        'history': history,
        'count': len(history)
    })

@activity_bp.route('/api/users/<user_id>/history', methods=['DELETE'])
def clear_history(user_id):
    if not validate_identifier(user_id):
        return jsonify({'success': False, 'error': 'Invalid user id'}), 400

    return jsonify(activity_store.clear_history(user_id))

# Favorites API Routes
@activity_bp.route('/api/users/<user_id>/favorites', methods=['GET'])
def get_favorites(user_id):
    if not validate_identifier(user_id):
        return jsonify({'success': False, 'error': 'Invalid user id'}), 400

    return jsonify({'user_id': user_id, 'favorites': activity_store.get_favorites(user_id)})

@activity_bp.route('/api/users/<user_id>/favorites/<tool_id>', methods=['POST'])
def toggle_favorite(user_id, tool_id):
    if not validate_identifier(user_id):
        return jsonify({'success': False, 'error': 'Invalid user id'}), 400

    if not get_tool(tool_id):
        return jsonify({'success': False, 'error': 'Unknown tool'}), 404

    favorite = activity_store.toggle_favorite(user_id, tool_id)
    return jsonify({'success': True, 'tool_id': tool_id, 'favorite': favorite})

# Analytics API Routes
@activity_bp.route('/api/analytics', methods=['GET'])
def get_analytics():
    return jsonify({'analytics': activity_store.get_analytics()})
