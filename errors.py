#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
钓鱼赛事管理系统 - 业务异常定义

所有异常都带有 kind（错误类别）和 status_code（对应的 HTTP 状态码），
由 utils.decorators.handle_db_errors 统一转换为 JSON 响应。
"""


class EventAppError(Exception):
    """业务异常基类"""
    kind = 'error'
    status_code = 400
    default_message = '操作失败'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self):
        return {
            'success': False,
            'error': self.kind,
            'message': self.message,
        }


class NotFoundError(EventAppError):
    kind = 'not_found'
    status_code = 404
    default_message = '记录不存在'


class AlreadyRegisteredError(EventAppError):
    kind = 'already_registered'
    status_code = 409
    default_message = '用户已报名该赛事'


class CapacityExceededError(EventAppError):
    kind = 'capacity_exceeded'
    status_code = 409
    default_message = '名额已满'


class AlreadyStartedError(EventAppError):
    kind = 'already_started'
    status_code = 409
    default_message = '赛事已开始'


class NotStartedError(EventAppError):
    kind = 'not_started'
    status_code = 409
    default_message = '赛事尚未开始'


class EventFinishedError(EventAppError):
    kind = 'finished'
    status_code = 409
    default_message = '赛事已结束'


class EmptyEventError(EventAppError):
    kind = 'empty'
    status_code = 409
    default_message = '赛事没有参赛者'


class ReferentialIntegrityError(EventAppError):
    kind = 'referential_integrity'
    status_code = 409
    default_message = '记录仍被引用，无法删除'


class AlreadyExistsError(EventAppError):
    kind = 'already_exists'
    status_code = 409
    default_message = '记录已存在'


class ValidationError(EventAppError):
    kind = 'validation'
    status_code = 400
    default_message = '参数不合法'


class StoreError(EventAppError):
    """数据文件读写失败"""
    kind = 'store'
    status_code = 500
    default_message = '数据存储失败'
