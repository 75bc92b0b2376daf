#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
钓鱼赛事管理系统 - 应用入口
"""

import os
import sys
import time

from dotenv import load_dotenv
from flask import Flask, jsonify, request, g
from werkzeug.middleware.proxy_fix import ProxyFix

load_dotenv()

from config import config as config_map
from database import db_manager
from errors import StoreError
from user_manager import user_manager
from api import auth_bp, users_bp, events_bp, participants_bp, execution_bp


def create_app(env_name=None, overrides=None):
    app = Flask(__name__)
    env_name = (env_name or os.environ.get('APP_ENV', 'default')).lower()
    config_class = config_map.get(env_name, config_map['default'])
    app.config.from_object(config_class)
    if overrides:
        app.config.update(overrides)

    if env_name == 'production' and not app.config.get('SECRET_KEY'):
        raise RuntimeError('SECRET_KEY environment variable is required in production')

    config_class.init_app(app)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    @app.before_request
    def start_request_timer():
        g.request_start_time = time.perf_counter()

    @app.after_request
    def log_request_time(response):
        start_time = getattr(g, 'request_start_time', None)
        if start_time is not None:
            duration_ms = (time.perf_counter() - start_time) * 1000
            app.logger.info(
                "Request %s %s took %.2fms, status %d",
                request.method,
                request.path,
                duration_ms,
                response.status_code,
            )
        return response

    db_manager.init_app(app)
    user_manager.init_app(app)

    # 启动时确保数据文件存在
    try:
        if db_manager.init_database():
            app.logger.info(f"已初始化数据文件: {db_manager.store.path}")
    except StoreError as e:
        # 记录错误但不阻止应用启动，请求时会再次尝试
        app.logger.error(f"数据文件初始化失败: {e}")

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(users_bp, url_prefix='/api/admin')
    app.register_blueprint(events_bp, url_prefix='/api/events')
    app.register_blueprint(execution_bp, url_prefix='/api/events')
    app.register_blueprint(participants_bp, url_prefix='/api')

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({'success': False, 'error': 'not_found', 'message': '接口不存在'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'success': False, 'error': 'method_not_allowed', 'message': '请求方法不允许'}), 405

    @app.errorhandler(500)
    def internal_error(error):
        return jsonify({'success': False, 'error': 'internal', 'message': '服务器错误'}), 500

    return app


if __name__ == '__main__':
    try:
        app = create_app()
        app.run(
            host=app.config.get('HOST', '0.0.0.0'),
            port=app.config.get('PORT', 3000),
            debug=app.config.get('DEBUG', True)
        )
    except KeyboardInterrupt:
        sys.exit(0)
