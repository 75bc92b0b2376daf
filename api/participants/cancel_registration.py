from flask import jsonify, session

from utils.decorators import login_required, log_action, handle_db_errors

from . import participants_bp, db_manager, logger


@participants_bp.route('/events/<int:event_id>/cancel', methods=['POST'])
@login_required
@log_action('取消报名')
@handle_db_errors
def cancel_registration(event_id):
    """当前用户取消报名（仅限开赛前）"""
    event = db_manager.cancel_participant(event_id, session.get('user_id'))

    return jsonify({
        'success': True,
        'message': '已取消报名',
        'event': event.to_dict()
    })
