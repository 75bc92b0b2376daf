"""
tests/conftest.py - 公共测试夹具

每个测试使用独立的临时数据文件，抽签使用固定种子的 random.Random。
"""

import random

import pytest

from database import DatabaseManager, db_manager as global_db_manager
from models import User


ADMIN_EMAIL = 'admin@angel-event.de'
ADMIN_PASSWORD = 'admin123'


@pytest.fixture
def data_file(tmp_path):
    return str(tmp_path / 'database.json')


@pytest.fixture
def manager(data_file):
    """独立的数据管理器（不回退到默认数据，便于暴露存储错误）"""
    return DatabaseManager(data_file=data_file, fallback_to_default=False, rng=random.Random(1234))


@pytest.fixture
def make_user(manager):
    """按名字快速创建用户，返回 user_id"""
    def _make_user(name, phone=''):
        user = manager.create_user(User(name=name, email=f'{name.lower()}@example.com', phone=phone))
        return user.user_id
    return _make_user


@pytest.fixture
def make_event(manager):
    """创建赛事，返回 event_id"""
    def _make_event(max_participants=20, spots=10, title='Test-Cup'):
        event = manager.create_event({
            'title': title,
            'date': '2026-08-01',
            'location': 'Wannsee',
            'max_participants': max_participants,
            'spots': spots,
        }, created_by=1)
        return event.event_id
    return _make_event


@pytest.fixture
def app(data_file):
    from app import create_app

    application = create_app('testing', {'DATA_FILE': data_file, 'DATA_LOAD_FALLBACK': False})
    global_db_manager.rng = random.Random(42)
    yield application


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, email, password):
    return client.post('/api/auth/login', json={'email': email, 'password': password})


@pytest.fixture
def admin_client(app):
    c = app.test_client()
    resp = login(c, ADMIN_EMAIL, ADMIN_PASSWORD)
    assert resp.status_code == 200
    return c
