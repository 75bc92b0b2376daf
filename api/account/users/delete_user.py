from flask import jsonify, session

from utils.decorators import admin_required, log_action, handle_db_errors

from . import users_bp, db_manager, logger


@users_bp.route('/users/<int:user_id>', methods=['DELETE'])
@admin_required
@log_action('删除用户')
@handle_db_errors
def delete_user(user_id):
    """删除用户（已报名赛事的用户不可删除）"""
    if user_id == session.get('user_id'):
        return jsonify({
            'success': False,
            'error': 'validation',
            'message': '不能删除当前登录的账号'
        }), 400

    db_manager.delete_user(user_id)

    logger.info(f"管理员 {session.get('user_id')} 删除了用户 {user_id}")
    return jsonify({
        'success': True,
        'message': '用户已删除'
    })
