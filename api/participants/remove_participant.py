from flask import jsonify

from utils.decorators import admin_required, log_action, handle_db_errors

from . import participants_bp, db_manager, logger


@participants_bp.route('/events/<int:event_id>/participants/<int:user_id>', methods=['DELETE'])
@admin_required
@log_action('管理员移除参赛者')
@handle_db_errors
def remove_participant(event_id, user_id):
    """管理员取消用户报名（仅限开赛前）"""
    event = db_manager.cancel_participant(event_id, user_id)

    return jsonify({
        'success': True,
        'message': '已取消报名',
        'event': event.to_dict()
    })
