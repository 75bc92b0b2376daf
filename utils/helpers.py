#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
钓鱼赛事管理系统 - 辅助函数
"""

import os
import re
import math
import hashlib
from datetime import datetime


def validate_email(email):
    """验证邮箱格式"""
    if not email:
        return False

    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    return re.match(pattern, email) is not None


def parse_positive_int(value, default=None):
    """解析正整数，无法解析或不为正时返回默认值"""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def parse_amount(value):
    """解析渔获数量，返回非负有限数值；不合法时返回 None"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(',', '.')
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount) or amount < 0:
        return None
    # 整数值保持为 int，避免 5 变成 5.0
    return int(amount) if amount.is_integer() else amount


def generate_password_hash(password, salt_length=16):
    """生成密码哈希

    返回 salt+hash 的十六进制字符串，便于直接写入 JSON 数据文件。
    """
    # 生成随机盐
    salt = os.urandom(salt_length)
    # 使用 PBKDF2 算法生成哈希
    password_hash = hashlib.pbkdf2_hmac('sha256', password.encode('utf-8'), salt, 100000)
    return (salt + password_hash).hex()


def verify_password(password, password_hash):
    """验证密码（salt+hash 的十六进制字符串）"""
    if not password_hash or not isinstance(password_hash, str):
        return False

    try:
        raw = bytes.fromhex(password_hash)
    except ValueError:
        return False

    # 原始数据至少应包含 16 字节盐 + 32 字节哈希
    if len(raw) < 16 + 32:
        return False

    salt = raw[:16]
    stored_hash = raw[16:]
    computed_hash = hashlib.pbkdf2_hmac('sha256', password.encode('utf-8'), salt, 100000)
    return computed_hash == stored_hash


def timestamp_for_filename():
    return datetime.now().strftime('%Y%m%d_%H%M%S')
