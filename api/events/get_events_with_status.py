from flask import jsonify, session

from utils.decorators import login_required, handle_db_errors

from . import events_bp, db_manager, logger


@events_bp.route('/with-status', methods=['GET'])
@login_required
@handle_db_errors
def get_events_with_status():
    """获取赛事列表，并标注当前用户的报名与缴费状态"""
    events = db_manager.get_events_with_status(session.get('user_id'))
    return jsonify({
        'success': True,
        'events': events,
        'total': len(events),
    })
