from flask import jsonify

from utils.decorators import handle_db_errors

from . import events_bp, db_manager, logger


@events_bp.route('/<int:event_id>', methods=['GET'])
@handle_db_errors
def get_event(event_id):
    """获取赛事详情（附带报名者资料）"""
    event = db_manager.get_event_by_id(event_id)

    if not event:
        return jsonify({
            'success': False,
            'error': 'not_found',
            'message': '赛事不存在'
        }), 404

    event_dict = event.to_dict()
    event_dict['participants_data'] = db_manager.get_event_participants(event_id)

    return jsonify({
        'success': True,
        'event': event_dict
    })
