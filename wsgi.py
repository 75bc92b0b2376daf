#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
钓鱼赛事管理系统 - WSGI 入口
"""

from app import create_app

app = create_app()
