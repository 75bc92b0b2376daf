from flask import request, jsonify, session

from utils.decorators import validate_json, log_action, handle_db_errors
from user_manager import user_manager

from . import auth_bp, logger


@auth_bp.route('/login', methods=['POST'])
@validate_json(['email', 'password'])
@log_action('用户登录')
@handle_db_errors
def login():
    """用户登录"""
    data = request.get_json()
    email = data['email'].strip()

    user, message = user_manager.authenticate_user(email, data['password'])
    if not user:
        return jsonify({
            'success': False,
            'error': 'unauthorized',
            'message': message
        }), 401

    # 设置会话
    session.clear()
    session['logged_in'] = True
    session['user_id'] = user.user_id
    session['user_name'] = user.name
    session['user_role'] = user.role.value
    session.permanent = True

    logger.info(f"用户 {email} 登录成功")

    return jsonify({
        'success': True,
        'message': message,
        'user': {'id': user.user_id, 'name': user.name, 'role': user.role.value},
        'redirect': '/admin.html' if user.is_admin else '/'
    })
