from flask import jsonify, session

from utils.decorators import login_required, log_action, handle_db_errors

from . import participants_bp, db_manager, logger


@participants_bp.route('/events/<int:event_id>/payment-success', methods=['POST'])
@login_required
@log_action('在线支付成功')
@handle_db_errors
def payment_success(event_id):
    """外部支付完成后标记当前用户已缴费"""
    db_manager.set_participant_paid(event_id, session.get('user_id'), True)

    return jsonify({
        'success': True,
        'message': '缴费状态已更新'
    })
