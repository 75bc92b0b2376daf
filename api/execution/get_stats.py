from flask import jsonify

from utils.decorators import admin_required, handle_db_errors

from . import execution_bp, db_manager, logger


@execution_bp.route('/<int:event_id>/stats', methods=['GET'])
@admin_required
@handle_db_errors
def get_stats(event_id):
    """获取成绩排名"""
    standings = db_manager.get_event_standings(event_id)

    for rank, item in enumerate(standings, 1):
        item['rank'] = rank
        item['catches'] = {str(round_number): amount for round_number, amount in item['catches'].items()}

    return jsonify({
        'success': True,
        'stats': standings
    })
