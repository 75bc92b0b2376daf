from flask import request, jsonify

from utils.decorators import validate_json, log_action, handle_db_errors
from user_manager import user_manager

from . import auth_bp, logger


@auth_bp.route('/reset-password', methods=['POST'])
@validate_json(['token', 'new_password'])
@log_action('重置密码')
@handle_db_errors
def reset_password():
    """使用重置令牌设置新密码"""
    data = request.get_json()

    success, message = user_manager.reset_password(data['token'], data['new_password'])
    if not success:
        return jsonify({
            'success': False,
            'error': 'validation',
            'message': message
        }), 400

    return jsonify({
        'success': True,
        'message': message
    })
