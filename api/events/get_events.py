from flask import request, jsonify

from models import EventState
from utils.decorators import handle_db_errors

from . import events_bp, db_manager, logger


@events_bp.route('', methods=['GET'])
@handle_db_errors
def get_events():
    """获取赛事列表（公开）

    可选查询参数：
    - state: not_started / running / finished
    - keyword: 关键字（匹配名称或地点）
    """
    state = request.args.get('state', '').strip()
    keyword = request.args.get('keyword', '').strip().lower()

    if state:
        try:
            state = EventState(state)
        except ValueError:
            valid_states = [s.value for s in EventState]
            return jsonify({
                'success': False,
                'error': 'validation',
                'message': f'无效的赛事状态: {state}，有效值为: {", ".join(valid_states)}'
            }), 400

    events = db_manager.get_all_events()
    if state:
        events = [e for e in events if e.state == state]
    if keyword:
        events = [
            e for e in events
            if keyword in (e.title or '').lower() or keyword in (e.location or '').lower()
        ]

    events_data = [e.to_dict() for e in events]
    return jsonify({
        'success': True,
        'events': events_data,
        'total': len(events_data),
    })
