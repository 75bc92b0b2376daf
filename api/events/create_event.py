from flask import request, jsonify, session

from utils.decorators import admin_required, validate_json, log_action, handle_db_errors

from . import events_bp, db_manager, logger


@events_bp.route('', methods=['POST'])
@admin_required
@validate_json(['title'])
@log_action('创建赛事')
@handle_db_errors
def create_event():
    """创建赛事"""
    data = request.get_json()

    event = db_manager.create_event(data, created_by=session.get('user_id'))

    logger.info(f"管理员 {session.get('user_id')} 创建赛事: {event.title}")
    return jsonify({
        'success': True,
        'message': '赛事创建成功',
        'event': event.to_dict()
    }), 201
