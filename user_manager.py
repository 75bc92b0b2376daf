#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
钓鱼赛事管理系统 - 用户管理模块（注册、登录、密码重置）
"""

import logging

from config import Config
from database import db_manager
from errors import EventAppError
from models import User, UserRole
from utils.helpers import generate_password_hash, verify_password, validate_email

logger = logging.getLogger(__name__)


class UserManager:
    """用户管理器"""

    def __init__(self, manager=None):
        self.db_manager = manager or db_manager
        self.password_min_length = Config.PASSWORD_MIN_LENGTH
        self.reset_link_base = Config.RESET_LINK_BASE

    def init_app(self, app):
        self.password_min_length = app.config.get('PASSWORD_MIN_LENGTH', self.password_min_length)
        self.reset_link_base = app.config.get('RESET_LINK_BASE', self.reset_link_base)

    def _validate_password(self, password):
        if not password or len(password) < self.password_min_length:
            return f"密码至少需要 {self.password_min_length} 个字符"
        return None

    def register_user(self, name, email, password, phone=None):
        """注册新用户，返回 (成功与否, 消息, 用户)"""
        name = (name or '').strip()
        email = (email or '').strip()
        if not name:
            return False, "姓名不能为空", None
        if not validate_email(email):
            return False, "邮箱格式不正确", None
        error = self._validate_password(password)
        if error:
            return False, error, None

        try:
            user = self.db_manager.create_user(User(
                name=name,
                email=email,
                password_hash=generate_password_hash(password),
                role=UserRole.USER,
                phone=(phone or '').strip(),
            ))
        except EventAppError as e:
            return False, e.message, None

        logger.info(f"新用户注册成功: {email}")
        return True, "注册成功", user

    def authenticate_user(self, email, password):
        """验证用户登录，返回 (用户, 消息)"""
        user = self.db_manager.get_user_by_email(email)
        if not user or not verify_password(password or '', user.password_hash):
            logger.warning(f"登录失败: {email}")
            return None, "邮箱或密码错误"
        return user, "登录成功"

    def change_password(self, user_id, old_password, new_password):
        """修改密码"""
        user = self.db_manager.get_user_by_id(user_id)
        if not user:
            return False, "用户不存在"
        if not verify_password(old_password or '', user.password_hash):
            return False, "原密码错误"
        error = self._validate_password(new_password)
        if error:
            return False, error
        if old_password == new_password:
            return False, "新密码不能与原密码相同"

        self.db_manager.update_user_password(user_id, generate_password_hash(new_password))
        return True, "密码修改成功"

    def update_user_profile(self, user_id, name, phone):
        """更新用户个人资料"""
        name = (name or '').strip()
        if not name:
            return False, "姓名不能为空", None
        try:
            user = self.db_manager.update_user(user_id, name=name, phone=(phone or '').strip())
        except EventAppError as e:
            return False, e.message, None
        return True, "个人信息更新成功", user

    def request_password_reset(self, email):
        """生成密码重置令牌；邮箱不存在时返回 None（对外响应保持一致）"""
        user = self.db_manager.get_user_by_email(email)
        if not user:
            logger.info(f"密码重置请求的邮箱不存在: {email}")
            return None

        token = self.db_manager.create_reset_token(user.email)
        # 暂无邮件服务，重置链接写入日志
        logger.info(f"密码重置链接: {self.reset_link_base}?token={token}")
        return token

    def reset_password(self, token, new_password):
        """使用令牌重置密码"""
        entry = self.db_manager.find_reset_token(token)
        if not entry:
            return False, "令牌无效或已过期"
        error = self._validate_password(new_password)
        if error:
            return False, error

        user = self.db_manager.get_user_by_email(entry.email)
        if not user:
            return False, "用户不存在"

        self.db_manager.update_user_password(user.user_id, generate_password_hash(new_password))
        self.db_manager.mark_token_used(token)
        logger.info(f"用户 {user.email} 通过令牌重置密码成功")
        return True, "密码修改成功"


# 全局用户管理器实例
user_manager = UserManager()
