from flask import request, jsonify

from utils.decorators import validate_json, log_action, handle_db_errors
from user_manager import user_manager

from . import auth_bp, logger


@auth_bp.route('/register', methods=['POST'])
@validate_json(['name', 'email', 'password'])
@log_action('用户注册')
@handle_db_errors
def register():
    """用户注册"""
    data = request.get_json()

    success, message, user = user_manager.register_user(
        data['name'],
        data['email'],
        data['password'],
        data.get('phone'),
    )
    if not success:
        return jsonify({
            'success': False,
            'error': 'validation',
            'message': message
        }), 400

    return jsonify({
        'success': True,
        'message': message,
        'user': user.to_dict()
    }), 201
