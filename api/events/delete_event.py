from flask import jsonify, session

from utils.decorators import admin_required, log_action, handle_db_errors

from . import events_bp, db_manager, logger


@events_bp.route('/<int:event_id>', methods=['DELETE'])
@admin_required
@log_action('删除赛事')
@handle_db_errors
def delete_event(event_id):
    """删除赛事"""
    db_manager.delete_event(event_id)

    logger.info(f"管理员 {session.get('user_id')} 删除了赛事 {event_id}")
    return jsonify({
        'success': True,
        'message': '赛事删除成功'
    })
