"""数据文件存储测试：初始化、损坏回退、原子写回、ID 分配"""

import json
import os

import pytest

from database import DatabaseManager
from errors import StoreError
from models import ROUND_NOT_STARTED


class TestInitialization:

    def test_missing_file_is_seeded(self, manager, data_file):
        assert not os.path.exists(data_file)
        assert manager.init_database() is True
        assert os.path.exists(data_file)
        assert manager.init_database() is False

    def test_default_data(self, manager):
        users = manager.get_all_users()
        assert len(users) == 1
        admin = users[0]
        assert admin.is_admin
        assert admin.email == 'admin@angel-event.de'
        assert 'admin123' not in admin.password_hash

        events = manager.get_all_events()
        assert [e.event_id for e in events] == [1, 2, 3]
        for event in events:
            assert event.participants == []
            assert event.current_round == ROUND_NOT_STARTED

    def test_file_is_json_with_string_keys(self, manager, data_file, make_user, make_event):
        event_id = make_event(spots=2)
        uid = make_user('Anna')
        manager.register_participant(event_id, uid)
        manager.start_event(event_id)
        manager.record_catch(event_id, uid, 1, 4)

        with open(data_file, encoding='utf-8') as f:
            raw = json.load(f)
        stored = next(e for e in raw['events'] if e['id'] == event_id)
        assert stored['catches'] == {str(uid): {'1': 4}}
        assert stored['participant_spots'][str(uid)] == {'spot': 1, 'side': 'left'}


class TestCorruptFile:

    def write_garbage(self, data_file):
        with open(data_file, 'w', encoding='utf-8') as f:
            f.write('{not json')

    def test_fallback_to_default(self, data_file):
        self.write_garbage(data_file)
        manager = DatabaseManager(data_file=data_file, fallback_to_default=True)
        events = manager.get_all_events()
        assert [e.event_id for e in events] == [1, 2, 3]

    def test_error_without_fallback(self, manager, data_file):
        self.write_garbage(data_file)
        with pytest.raises(StoreError):
            manager.get_all_events()

    def test_non_object_root(self, manager, data_file):
        with open(data_file, 'w', encoding='utf-8') as f:
            json.dump([1, 2, 3], f)
        with pytest.raises(StoreError):
            manager.get_all_users()

    def write_wrong_nested_type(self, data_file):
        with open(data_file, 'w', encoding='utf-8') as f:
            json.dump({'events': [{'id': 1, 'catches': {'1': [5]}}]}, f)

    def test_wrong_nested_type_falls_back(self, data_file):
        self.write_wrong_nested_type(data_file)
        manager = DatabaseManager(data_file=data_file, fallback_to_default=True)
        assert [e.event_id for e in manager.load_snapshot().events] == [1, 2, 3]

    def test_wrong_nested_type_without_fallback(self, manager, data_file):
        self.write_wrong_nested_type(data_file)
        with pytest.raises(StoreError):
            manager.load_snapshot()

    def test_string_ids_are_normalized(self, manager, data_file):
        manager.init_database()
        with open(data_file, encoding='utf-8') as f:
            raw = json.load(f)
        raw['users'][0]['id'] = '1'
        raw['events'][0]['id'] = '1'
        raw['events'][0]['participants'] = [{'user_id': '1', 'payment_method': 'cash'}]
        with open(data_file, 'w', encoding='utf-8') as f:
            json.dump(raw, f)

        assert manager.get_user_by_id(1).is_admin
        assert [p['id'] for p in manager.get_event_participants(1)] == [1]

    def test_legacy_round_keys_and_paypal(self, manager, data_file):
        manager.init_database()
        with open(data_file, encoding='utf-8') as f:
            raw = json.load(f)
        raw['events'][0]['participants'] = [
            {'user_id': 1, 'payment_method': 'paypal', 'paid': True},
        ]
        raw['events'][0]['current_round'] = 2
        raw['events'][0]['catches'] = {'1': {'round1': 3, 'round2': 5}}
        with open(data_file, 'w', encoding='utf-8') as f:
            json.dump(raw, f)

        event = manager.get_event_by_id(1)
        assert event.catches == {1: {1: 3, 2: 5}}
        assert event.participants[0].payment_method.value == 'external'


class TestTransaction:

    def test_failed_block_is_not_saved(self, manager):
        manager.init_database()
        with pytest.raises(RuntimeError):
            with manager.transaction() as snapshot:
                snapshot.get_event(1).title = 'Changed'
                raise RuntimeError('boom')
        assert manager.get_event_by_id(1).title == 'Hecht-Cup 2026'

    def test_changes_survive_new_manager(self, manager, data_file, make_user):
        uid = make_user('Bernd', phone='0151')
        reopened = DatabaseManager(data_file=data_file, fallback_to_default=False)
        user = reopened.get_user_by_id(uid)
        assert user.name == 'Bernd'
        assert user.phone == '0151'

    def test_no_temp_files_left(self, manager, tmp_path):
        manager.init_database()
        manager.create_event({'title': 'X'})
        assert [p.name for p in tmp_path.iterdir()] == ['database.json']


class TestIdentifiers:

    def test_ids_are_not_reused_after_delete(self, manager, make_event, make_user):
        event_id = make_event()
        manager.delete_event(event_id)
        assert make_event() == event_id + 1

        uid = make_user('Carla')
        manager.delete_user(uid)
        assert make_user('Dieter') == uid + 1
