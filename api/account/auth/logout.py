from flask import jsonify, session

from utils.decorators import log_action

from . import auth_bp, logger


@auth_bp.route('/logout', methods=['POST'])
@log_action('用户登出')
def logout():
    """用户登出"""
    user_name = session.get('user_name', 'Unknown')

    session.clear()

    logger.info(f"用户 {user_name} 登出")

    return jsonify({
        'success': True,
        'message': '登出成功'
    })
