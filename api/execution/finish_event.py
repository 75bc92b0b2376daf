from flask import jsonify

from utils.decorators import admin_required, log_action, handle_db_errors

from . import execution_bp, db_manager, logger


@execution_bp.route('/<int:event_id>/finish', methods=['POST'])
@admin_required
@log_action('结束赛事')
@handle_db_errors
def finish_event(event_id):
    """结束赛事"""
    event = db_manager.finish_event(event_id)

    return jsonify({
        'success': True,
        'message': '赛事已结束',
        'event': event.to_dict()
    })
