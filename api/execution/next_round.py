from flask import jsonify

from utils.decorators import admin_required, log_action, handle_db_errors

from . import execution_bp, db_manager, logger


@execution_bp.route('/<int:event_id>/nextround', methods=['POST'])
@admin_required
@log_action('进入下一轮')
@handle_db_errors
def next_round(event_id):
    """结束当前轮次，轮换钓位并开始下一轮"""
    event = db_manager.advance_round(event_id)

    return jsonify({
        'success': True,
        'current_round': event.current_round,
        'event': event.to_dict()
    })
