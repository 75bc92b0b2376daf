#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
钓鱼赛事管理系统 - 数据文件存储和操作

所有操作遵循同一个模式：整份读取快照 -> 在内存中修改 -> 整份写回。
DatabaseManager.transaction() 就是这个读改写单元，进程内串行执行。
"""

import json
import logging
import os
import random
import tempfile
import threading
import time
from contextlib import contextmanager

from config import Config
from errors import StoreError
from models import Snapshot, build_default_snapshot
from utils.helpers import generate_password_hash
from db_modules.db_users import UserDbMixin
from db_modules.db_events import EventDbMixin
from db_modules.db_participants import ParticipantDbMixin
from db_modules.db_execution import ExecutionDbMixin
from db_modules.db_reset_tokens import ResetTokenDbMixin

logger = logging.getLogger(__name__)

# 单写者：同一进程内所有读改写单元共用一把锁
_store_lock = threading.RLock()


class JsonFileStore:
    """JSON 文件存储：load() 读取整份快照，save() 整份写回"""

    def __init__(self, path, fallback_to_default=True, default_factory=None,
                 slow_threshold_ms=50):
        self.path = path
        self.fallback_to_default = fallback_to_default
        self.default_factory = default_factory or Snapshot
        self._slow_threshold_ms = slow_threshold_ms

    def exists(self):
        return os.path.exists(self.path)

    def load(self):
        """读取快照；文件不存在时写入默认数据"""
        if not self.exists():
            logger.info(f"数据文件不存在，初始化默认数据: {self.path}")
            snapshot = self.default_factory()
            self.save(snapshot)
            return snapshot

        start = time.perf_counter()
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            snapshot = Snapshot.from_dict(data)
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            # json.JSONDecodeError 是 ValueError 的子类
            logger.error(f"加载数据文件失败: {self.path}: {e}")
            if self.fallback_to_default:
                logger.warning("已回退到默认数据（本次修改将覆盖损坏的数据文件）")
                return self.default_factory()
            raise StoreError(f'数据文件读取失败: {e}') from e
        finally:
            self._log_if_slow('load', start)
        return snapshot

    def save(self, snapshot):
        """整份写回；先写临时文件再替换，避免写一半的文件"""
        start = time.perf_counter()
        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix='.database-', suffix='.json', dir=directory)
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(snapshot.to_dict(), f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            logger.error(f"保存数据文件失败: {self.path}: {e}")
            raise StoreError(f'数据文件写入失败: {e}') from e
        finally:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            self._log_if_slow('save', start)
        return True

    def _log_if_slow(self, operation, start):
        duration_ms = (time.perf_counter() - start) * 1000
        if duration_ms >= self._slow_threshold_ms:
            logger.warning("Slow store %s took %.1f ms: %s", operation, duration_ms, self.path)


class DatabaseManager(
    UserDbMixin,
    EventDbMixin,
    ParticipantDbMixin,
    ExecutionDbMixin,
    ResetTokenDbMixin,
):
    """数据管理器"""

    def __init__(self, data_file=None, fallback_to_default=None, rng=None):
        self.settings = {
            'default_admin_email': Config.DEFAULT_ADMIN_EMAIL,
            'default_admin_password': Config.DEFAULT_ADMIN_PASSWORD,
            'reset_token_ttl': Config.RESET_TOKEN_TTL,
            'event_defaults': dict(Config.EVENT_DEFAULTS),
            'seat_overflow_policy': Config.SEAT_OVERFLOW_POLICY,
            'catch_round_policy': Config.CATCH_ROUND_POLICY,
        }
        self.rng = rng or random.Random()
        self.store = JsonFileStore(
            data_file or Config.DATA_FILE,
            fallback_to_default=Config.DATA_LOAD_FALLBACK if fallback_to_default is None else fallback_to_default,
            default_factory=self._default_snapshot,
        )

    def init_app(self, app):
        """根据 Flask 配置重新设置数据文件和业务参数"""
        self.store.path = app.config.get('DATA_FILE', self.store.path)
        self.store.fallback_to_default = app.config.get('DATA_LOAD_FALLBACK', self.store.fallback_to_default)
        for key in self.settings:
            config_key = key.upper()
            if config_key in app.config:
                self.settings[key] = app.config[config_key]

    def _default_snapshot(self):
        return build_default_snapshot(
            self.settings['default_admin_email'],
            generate_password_hash(self.settings['default_admin_password']),
        )

    @contextmanager
    def transaction(self):
        """读改写单元：加载整份快照，代码块正常结束后整份写回

        代码块中抛出异常时不写回，快照中的修改全部丢弃。
        """
        with _store_lock:
            snapshot = self.store.load()
            yield snapshot
            self.store.save(snapshot)

    def load_snapshot(self):
        """只读加载整份快照"""
        with _store_lock:
            return self.store.load()

    def init_database(self):
        """确保数据文件存在（不存在时写入默认数据）"""
        with _store_lock:
            if not self.store.exists():
                self.store.load()
                return True
        return False


# 全局数据管理器实例
db_manager = DatabaseManager()
