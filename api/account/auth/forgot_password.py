from flask import request, jsonify

from utils.decorators import validate_json, log_action, handle_db_errors
from user_manager import user_manager

from . import auth_bp, logger


@auth_bp.route('/forgot-password', methods=['POST'])
@validate_json(['email'])
@log_action('申请重置密码')
@handle_db_errors
def forgot_password():
    """申请密码重置链接

    无论邮箱是否存在都返回相同的提示。
    """
    user_manager.request_password_reset(request.get_json()['email'].strip())

    return jsonify({
        'success': True,
        'message': '如果该邮箱已注册，重置链接已发送'
    })
