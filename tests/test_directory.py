"""用户与赛事目录测试"""

import pytest

from errors import (
    AlreadyStartedError,
    AlreadyExistsError,
    NotFoundError,
    ReferentialIntegrityError,
    ValidationError,
)
from models import User, UserRole


class TestEvents:

    def test_create_uses_defaults(self, manager):
        event = manager.create_event({'title': '  Barsch-Pokal  ', 'price': '15'}, created_by=1)
        assert event.title == 'Barsch-Pokal'
        assert event.price == 15.0
        assert event.max_participants == 20
        assert event.spots == 10
        assert event.created_by == 1
        assert manager.get_event_by_id(event.event_id).title == 'Barsch-Pokal'

    @pytest.mark.parametrize('data', [{'title': ''}, {'title': 'X', 'price': 'teuer'}, {'title': 'X', 'price': -5}])
    def test_create_invalid(self, manager, data):
        with pytest.raises(ValidationError):
            manager.create_event(data)

    def test_update_keeps_execution_state(self, manager, make_user, make_event):
        event_id = make_event(spots=2)
        uid = make_user('Anna')
        manager.register_participant(event_id, uid)
        manager.start_event(event_id)
        manager.record_catch(event_id, uid, 1, 3)
        before = manager.get_event_by_id(event_id)

        event = manager.update_event(event_id, {
            'title': 'Neuer Name',
            'location': 'Tegeler See',
            'participants': [],
            'current_round': 0,
            'catches': {},
        })
        assert event.title == 'Neuer Name'
        assert event.location == 'Tegeler See'
        assert [p.user_id for p in event.participants] == [uid]
        assert event.current_round == 1
        assert event.catches == {uid: {1: 3}}
        assert event.participant_order == before.participant_order
        assert event.participant_spots == before.participant_spots

    def test_capacity_frozen_after_start(self, manager, make_user, make_event):
        event_id = make_event(max_participants=4, spots=2)
        for name in ('Anna', 'Bernd', 'Carla', 'Dieter'):
            manager.register_participant(event_id, make_user(name))
        manager.start_event(event_id)

        with pytest.raises(AlreadyStartedError):
            manager.update_event(event_id, {'spots': 1})
        with pytest.raises(AlreadyStartedError):
            manager.update_event(event_id, {'max_participants': 10})

        # 数值不变或只改目录字段时允许
        event = manager.update_event(event_id, {'spots': 2, 'title': 'Umbenannt'})
        assert event.title == 'Umbenannt'

        event = manager.advance_round(event_id)
        assert event.spots == 2
        assert all(uid in event.participant_spots for uid in event.participant_order)

        manager.finish_event(event_id)
        with pytest.raises(AlreadyStartedError):
            manager.update_event(event_id, {'spots': 3})

    def test_update_capacity_only_with_valid_numbers(self, manager, make_event):
        event_id = make_event(max_participants=8, spots=4)
        event = manager.update_event(event_id, {'max_participants': 'abc', 'spots': 0})
        assert (event.max_participants, event.spots) == (8, 4)
        event = manager.update_event(event_id, {'max_participants': '12', 'spots': 6})
        assert (event.max_participants, event.spots) == (12, 6)

    def test_update_and_delete_unknown(self, manager):
        with pytest.raises(NotFoundError):
            manager.update_event(999, {'title': 'X'})
        with pytest.raises(NotFoundError):
            manager.delete_event(999)

    def test_delete(self, manager, make_event):
        event_id = make_event()
        assert manager.delete_event(event_id) is True
        assert manager.get_event_by_id(event_id) is None


class TestUsers:

    def test_email_is_unique_ignoring_case(self, manager, make_user):
        make_user('Anna')
        with pytest.raises(AlreadyExistsError):
            manager.create_user(User(name='Anna 2', email='ANNA@example.com'))

    def test_lookup_by_email(self, manager, make_user):
        uid = make_user('Anna')
        assert manager.get_user_by_email(' Anna@Example.com ').user_id == uid
        assert manager.get_user_by_email('nobody@example.com') is None

    def test_update_user(self, manager, make_user):
        uid = make_user('Anna')
        user = manager.update_user(uid, name='Anna B.', role='admin')
        assert user.name == 'Anna B.'
        assert user.role == UserRole.ADMIN
        assert manager.get_user_by_id(uid).is_admin

    def test_update_user_rejects(self, manager, make_user):
        anna, bernd = make_user('Anna'), make_user('Bernd')
        with pytest.raises(AlreadyExistsError):
            manager.update_user(bernd, email='anna@example.com')
        with pytest.raises(ValidationError):
            manager.update_user(anna, role='captain')
        with pytest.raises(ValidationError):
            manager.update_user(anna, user_id=5)
        with pytest.raises(NotFoundError):
            manager.update_user(999, name='X')

    def test_delete_user_with_registration(self, manager, make_user, make_event):
        event_id, uid = make_event(), make_user('Anna')
        manager.register_participant(event_id, uid)
        with pytest.raises(ReferentialIntegrityError):
            manager.delete_user(uid)

        manager.cancel_participant(event_id, uid)
        assert manager.delete_user(uid) is True
        assert manager.get_user_by_id(uid) is None

    def test_delete_unknown_user(self, manager):
        with pytest.raises(NotFoundError):
            manager.delete_user(999)
