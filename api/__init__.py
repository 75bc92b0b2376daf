#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
钓鱼赛事管理系统 - API接口模块
"""

from .account import auth_bp, users_bp
from .events import events_bp
from .participants import participants_bp
from .execution import execution_bp

__version__ = '1.0.0'

# 导出所有蓝图
__all__ = ['auth_bp', 'users_bp', 'events_bp', 'participants_bp', 'execution_bp']
