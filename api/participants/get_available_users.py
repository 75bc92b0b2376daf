from flask import jsonify

from utils.decorators import admin_required, handle_db_errors

from . import participants_bp, db_manager, logger


@participants_bp.route('/events/<int:event_id>/available-users', methods=['GET'])
@admin_required
@handle_db_errors
def get_available_users(event_id):
    """获取尚未报名该赛事的用户（管理员代报名用）"""
    users = db_manager.get_available_users(event_id)
    return jsonify({
        'success': True,
        'users': users,
    })
