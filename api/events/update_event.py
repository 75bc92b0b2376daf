from flask import request, jsonify

from utils.decorators import admin_required, validate_json, log_action, handle_db_errors

from . import events_bp, db_manager, logger


@events_bp.route('/<int:event_id>', methods=['PUT'])
@admin_required
@validate_json()
@log_action('更新赛事')
@handle_db_errors
def update_event(event_id):
    """更新赛事（报名名单与比赛进度不受影响）"""
    data = request.get_json()

    event = db_manager.update_event(event_id, data)

    return jsonify({
        'success': True,
        'message': '赛事更新成功',
        'event': event.to_dict()
    })
