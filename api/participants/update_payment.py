from flask import request, jsonify

from utils.decorators import admin_required, validate_json, log_action, handle_db_errors

from . import participants_bp, db_manager, logger


@participants_bp.route('/events/<int:event_id>/participants/<int:user_id>/payment', methods=['PUT'])
@admin_required
@validate_json(['paid'])
@log_action('更新缴费状态')
@handle_db_errors
def update_payment(event_id, user_id):
    """管理员设置缴费状态"""
    paid = request.get_json()['paid']
    if not isinstance(paid, bool):
        return jsonify({
            'success': False,
            'error': 'validation',
            'message': 'paid 必须为布尔值'
        }), 400

    participant = db_manager.set_participant_paid(event_id, user_id, paid)

    return jsonify({
        'success': True,
        'participant': participant.to_dict()
    })
