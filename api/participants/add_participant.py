from flask import request, jsonify

from utils.decorators import admin_required, validate_json, log_action, handle_db_errors
from utils.helpers import parse_positive_int

from . import participants_bp, db_manager, logger


@participants_bp.route('/events/<int:event_id>/participants', methods=['POST'])
@admin_required
@validate_json(['user_id'])
@log_action('管理员添加参赛者')
@handle_db_errors
def add_participant(event_id):
    """管理员为用户报名"""
    data = request.get_json()
    user_id = parse_positive_int(data.get('user_id'))
    if user_id is None:
        return jsonify({
            'success': False,
            'error': 'validation',
            'message': '用户ID无效'
        }), 400

    event = db_manager.register_participant(event_id, user_id, data.get('payment_method') or 'cash')

    return jsonify({
        'success': True,
        'message': '报名成功',
        'event': event.to_dict()
    })
