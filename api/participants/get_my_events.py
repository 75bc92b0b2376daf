from flask import jsonify, session

from utils.decorators import login_required, handle_db_errors

from . import participants_bp, db_manager, logger


@participants_bp.route('/user/events', methods=['GET'])
@login_required
@handle_db_errors
def get_my_events():
    """获取当前用户报名的赛事"""
    events = db_manager.get_user_events(session.get('user_id'))
    return jsonify({
        'success': True,
        'events': events,
    })
