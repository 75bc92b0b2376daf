from io import BytesIO

from flask import jsonify, send_file

from utils.decorators import admin_required, log_action, handle_db_errors
from utils.excel_handler import excel_handler
from utils.helpers import timestamp_for_filename

from . import participants_bp, db_manager, logger


@participants_bp.route('/events/<int:event_id>/participants/export', methods=['GET'])
@admin_required
@log_action('导出报名名单')
@handle_db_errors
def export_participants(event_id):
    """导出报名名单为 Excel"""
    event = db_manager.get_event_by_id(event_id)
    if not event:
        return jsonify({
            'success': False,
            'error': 'not_found',
            'message': '赛事不存在'
        }), 404

    participants = db_manager.get_event_participants(event_id)
    content = excel_handler.export_participants(event, participants)

    return send_file(
        BytesIO(content),
        mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
        as_attachment=True,
        download_name=f'participants_{event_id}_{timestamp_for_filename()}.xlsx',
    )
