from io import BytesIO

from flask import jsonify, send_file

from utils.decorators import admin_required, log_action, handle_db_errors
from utils.excel_handler import excel_handler
from utils.helpers import timestamp_for_filename

from . import execution_bp, db_manager, logger


@execution_bp.route('/<int:event_id>/stats/export', methods=['GET'])
@admin_required
@log_action('导出成绩排名')
@handle_db_errors
def export_stats(event_id):
    """导出成绩排名为 Excel"""
    event = db_manager.get_event_by_id(event_id)
    if not event:
        return jsonify({
            'success': False,
            'error': 'not_found',
            'message': '赛事不存在'
        }), 404

    standings = db_manager.get_event_standings(event_id)
    content = excel_handler.export_standings(event, standings)

    return send_file(
        BytesIO(content),
        mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
        as_attachment=True,
        download_name=f'standings_{event_id}_{timestamp_for_filename()}.xlsx',
    )
