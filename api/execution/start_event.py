from flask import jsonify

from utils.decorators import admin_required, log_action, handle_db_errors

from . import execution_bp, db_manager, logger


@execution_bp.route('/<int:event_id>/start', methods=['POST'])
@admin_required
@log_action('开始赛事')
@handle_db_errors
def start_event(event_id):
    """开赛：抽签决定出场顺序并分配钓位"""
    event = db_manager.start_event(event_id)

    return jsonify({
        'success': True,
        'message': '赛事已开始',
        'event': event.to_dict()
    })
