from flask import jsonify, session

from utils.decorators import login_required

from . import auth_bp


@auth_bp.route('/me', methods=['GET'])
@login_required
def get_me():
    """获取当前登录用户"""
    return jsonify({
        'success': True,
        'user': {
            'id': session.get('user_id'),
            'name': session.get('user_name'),
            'role': session.get('user_role')
        }
    })
