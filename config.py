#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
钓鱼赛事管理系统 - 配置文件
"""

import os
from datetime import timedelta
from dotenv import load_dotenv

# 加载环境变量
load_dotenv()

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


class Config:
    """应用配置类"""

    # Flask 基础配置
    SECRET_KEY = os.environ.get('SECRET_KEY')

    # 数据文件配置（整份快照读写）
    DATA_FILE = os.environ.get('DATA_FILE') or os.path.join(BASE_DIR, 'database.json')
    # 数据文件损坏或无法读取时是否回退到默认快照
    DATA_LOAD_FALLBACK = os.environ.get('DATA_LOAD_FALLBACK', 'true').lower() in ['true', 'on', '1']

    # 默认管理员（首次初始化数据文件时写入）
    DEFAULT_ADMIN_EMAIL = os.environ.get('DEFAULT_ADMIN_EMAIL') or 'admin@angel-event.de'
    DEFAULT_ADMIN_PASSWORD = os.environ.get('DEFAULT_ADMIN_PASSWORD') or 'admin123'

    # 服务器配置
    HOST = os.environ.get('HOST') or '0.0.0.0'
    PORT = int(os.environ.get('PORT') or 3000)
    DEBUG = os.environ.get('DEBUG', 'False').lower() == 'true'

    # Session 配置
    PERMANENT_SESSION_LIFETIME = timedelta(hours=24)
    SESSION_COOKIE_SECURE = False  # 生产环境应设为 True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # 密码重置配置
    RESET_TOKEN_TTL = timedelta(hours=1)
    RESET_LINK_BASE = os.environ.get('RESET_LINK_BASE') or 'http://localhost:3000/reset-password.html'
    PASSWORD_MIN_LENGTH = 6

    # 日志配置
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'
    LOG_FILE = os.environ.get('LOG_FILE') or 'angel_event.log'

    # 赛事默认值
    EVENT_DEFAULTS = {
        'max_participants': 20,
        'spots': 10,
    }

    # 赛事执行配置
    # reject: 参赛人数超过 2*钓位数 时拒绝开赛; unseated: 多出的选手不分配钓位
    SEAT_OVERFLOW_POLICY = os.environ.get('SEAT_OVERFLOW_POLICY') or 'reject'
    # any_started: 可录入已开始的任一轮次; current: 只能录入当前轮次
    CATCH_ROUND_POLICY = os.environ.get('CATCH_ROUND_POLICY') or 'any_started'

    @staticmethod
    def init_app(app):
        """初始化应用配置"""
        import logging
        handlers = [logging.StreamHandler()]
        log_file = app.config.get('LOG_FILE')
        if log_file:
            handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
        logging.basicConfig(
            level=getattr(logging, app.config.get('LOG_LEVEL', 'INFO')),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            handlers=handlers
        )


class DevelopmentConfig(Config):
    """开发环境配置"""
    DEBUG = True
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'angel-event-planer-secret-key'


class ProductionConfig(Config):
    """生产环境配置"""
    DEBUG = False
    SESSION_COOKIE_SECURE = True
    SECRET_KEY = os.environ.get('SECRET_KEY')
    # 生产环境不允许静默回退到默认数据
    DATA_LOAD_FALLBACK = os.environ.get('DATA_LOAD_FALLBACK', 'false').lower() in ['true', 'on', '1']


class TestingConfig(Config):
    """测试环境配置"""
    TESTING = True
    SECRET_KEY = 'testing-secret-key'
    LOG_FILE = None


# 配置映射
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
