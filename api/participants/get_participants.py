from flask import jsonify

from utils.decorators import admin_required, handle_db_errors

from . import participants_bp, db_manager, logger


@participants_bp.route('/events/<int:event_id>/participants', methods=['GET'])
@admin_required
@handle_db_errors
def get_participants(event_id):
    """获取赛事报名名单"""
    participants = db_manager.get_event_participants(event_id)
    return jsonify({
        'success': True,
        'participants': participants,
        'total': len(participants),
    })
