from flask import request, jsonify

from utils.decorators import admin_required, validate_json, log_action, handle_db_errors
from utils.helpers import parse_positive_int

from . import execution_bp, db_manager, logger


@execution_bp.route('/<int:event_id>/catch', methods=['POST'])
@admin_required
@validate_json(['user_id', 'round', 'amount'])
@log_action('录入渔获')
@handle_db_errors
def record_catch(event_id):
    """录入某选手某轮的渔获（覆盖之前的录入）"""
    data = request.get_json()

    user_id = parse_positive_int(data['user_id'])
    round_number = parse_positive_int(data['round'])
    if user_id is None or round_number is None:
        return jsonify({
            'success': False,
            'error': 'validation',
            'message': '用户ID和轮次必须为正整数'
        }), 400

    amount = db_manager.record_catch(event_id, user_id, round_number, data['amount'])

    return jsonify({
        'success': True,
        'user_id': user_id,
        'round': round_number,
        'amount': amount
    })
