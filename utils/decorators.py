#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
钓鱼赛事管理系统 - 装饰器（权限控制、日志、错误处理）
"""

import logging
import time
from functools import wraps

from flask import session, jsonify, request

from errors import EventAppError

logger = logging.getLogger(__name__)


def login_required(f):
    """登录验证装饰器"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not session.get('logged_in'):
            return jsonify({'success': False, 'error': 'unauthorized', 'message': '请先登录'}), 401
        return f(*args, **kwargs)
    return decorated_function


def role_required(required_roles):
    """角色权限验证装饰器

    Args:
        required_roles: 字符串或列表，指定需要的角色
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not session.get('logged_in'):
                return jsonify({'success': False, 'error': 'unauthorized', 'message': '请先登录'}), 401

            roles = [required_roles] if isinstance(required_roles, str) else required_roles
            if session.get('user_role') not in roles:
                return jsonify({'success': False, 'error': 'forbidden', 'message': '权限不足'}), 403

            return f(*args, **kwargs)
        return decorated_function
    return decorator


def admin_required(f):
    """管理员权限装饰器"""
    return role_required(['admin'])(f)


def validate_json(required_fields=None):
    """JSON数据验证装饰器

    Args:
        required_fields: 必需的字段列表
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                return jsonify({'success': False, 'error': 'validation', 'message': '请求必须是JSON对象'}), 400

            missing_fields = [
                field for field in (required_fields or [])
                if field not in data or data[field] is None or data[field] == ''
            ]
            if missing_fields:
                return jsonify({
                    'success': False,
                    'error': 'validation',
                    'message': f'请填写: {", ".join(missing_fields)}'
                }), 400

            return f(*args, **kwargs)
        return decorated_function
    return decorator


def log_action(action_name):
    """操作日志装饰器

    Args:
        action_name: 操作名称
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            user_id = session.get('user_id')
            user_name = session.get('user_name', 'Unknown')

            start_time = time.perf_counter()
            logger.info(f"用户 {user_name}(ID:{user_id}) 开始执行操作: {action_name}")

            try:
                result = f(*args, **kwargs)
            except Exception as e:
                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.error(
                    f"用户 {user_name}(ID:{user_id}) 执行操作失败: {action_name}, 耗时: {duration_ms:.1f} ms, 错误: {str(e)}"
                )
                raise

            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.info(
                f"用户 {user_name}(ID:{user_id}) 完成操作: {action_name}, 耗时: {duration_ms:.1f} ms"
            )
            return result
        return decorated_function
    return decorator


def handle_db_errors(f):
    """业务/数据错误处理装饰器

    EventAppError 转换为 {'success': False, 'error': kind, 'message': ...}，
    其它异常记录日志后返回 500。
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except EventAppError as e:
            if e.status_code >= 500:
                logger.error(f"数据操作错误: {e.message}")
            else:
                logger.info(f"请求被拒绝 [{e.kind}]: {e.message}")
            return jsonify(e.to_dict()), e.status_code
        except Exception as e:
            logger.exception(f"数据操作错误: {str(e)}")
            return jsonify({
                'success': False,
                'error': 'internal',
                'message': '操作失败，请稍后重试'
            }), 500

    return decorated_function
