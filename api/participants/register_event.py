from flask import request, jsonify, session

from utils.decorators import login_required, log_action, handle_db_errors

from . import participants_bp, db_manager, logger


@participants_bp.route('/events/<int:event_id>/register', methods=['POST'])
@login_required
@log_action('报名参赛')
@handle_db_errors
def register_event(event_id):
    """当前用户报名参赛"""
    data = request.get_json(silent=True) or {}
    user_id = session.get('user_id')

    event = db_manager.register_participant(event_id, user_id, data.get('payment_method') or 'cash')

    logger.info(f"用户 {user_id} 报名参赛: {event.title}")
    return jsonify({
        'success': True,
        'message': '报名成功',
        'event': event.to_dict()
    })
