from flask import jsonify

from utils.decorators import admin_required, handle_db_errors

from . import users_bp, db_manager, logger


@users_bp.route('/users', methods=['GET'])
@admin_required
@handle_db_errors
def get_users():
    """获取全部用户"""
    users = [user.to_dict() for user in db_manager.get_all_users()]
    return jsonify({
        'success': True,
        'users': users,
        'total': len(users),
    })
