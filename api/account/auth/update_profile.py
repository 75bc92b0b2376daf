from flask import request, jsonify, session

from utils.decorators import login_required, validate_json, log_action, handle_db_errors
from user_manager import user_manager

from . import auth_bp, logger


@auth_bp.route('/profile', methods=['PUT'])
@login_required
@validate_json(['name'])
@log_action('更新个人资料')
@handle_db_errors
def update_profile():
    """更新个人资料（姓名、电话）"""
    data = request.get_json()

    success, message, user = user_manager.update_user_profile(
        session.get('user_id'), data['name'], data.get('phone'))
    if not success:
        return jsonify({
            'success': False,
            'error': 'validation',
            'message': message
        }), 400

    session['user_name'] = user.name
    return jsonify({
        'success': True,
        'message': message,
        'user': user.to_dict()
    })
