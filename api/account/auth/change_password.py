from flask import request, jsonify, session

from utils.decorators import login_required, validate_json, log_action, handle_db_errors
from user_manager import user_manager

from . import auth_bp, logger


@auth_bp.route('/change-password', methods=['POST'])
@login_required
@validate_json(['old_password', 'new_password'])
@log_action('修改密码')
@handle_db_errors
def change_password():
    """修改密码"""
    data = request.get_json()
    user_id = session.get('user_id')

    success, message = user_manager.change_password(user_id, data['old_password'], data['new_password'])
    if not success:
        return jsonify({
            'success': False,
            'error': 'validation',
            'message': message
        }), 400

    logger.info(f"用户 {user_id} 修改密码成功")
    return jsonify({
        'success': True,
        'message': message
    })
