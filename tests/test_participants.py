"""报名名单测试：报名、取消、名额、缴费状态、查询"""

import pytest

from errors import (
    AlreadyRegisteredError,
    AlreadyStartedError,
    CapacityExceededError,
    NotFoundError,
    ValidationError,
)
from models import PaymentMethod


def participant_ids(manager, event_id):
    return [p.user_id for p in manager.get_event_by_id(event_id).participants]


class TestRegister:

    def test_new_registration_is_unpaid(self, manager, make_user, make_event):
        event_id, uid = make_event(), make_user('Anna')
        manager.register_participant(event_id, uid, 'external')

        event = manager.get_event_by_id(event_id)
        participant = event.get_participant(uid)
        assert participant.paid is False
        assert participant.payment_method == PaymentMethod.EXTERNAL
        assert event.current_participants == 1

    def test_duplicate_is_rejected(self, manager, make_user, make_event):
        event_id, uid = make_event(), make_user('Anna')
        manager.register_participant(event_id, uid)
        with pytest.raises(AlreadyRegisteredError):
            manager.register_participant(event_id, uid)
        assert participant_ids(manager, event_id) == [uid]

    def test_capacity(self, manager, make_user, make_event):
        event_id = make_event(max_participants=1)
        first, second = make_user('Anna'), make_user('Bernd')
        manager.register_participant(event_id, first)
        with pytest.raises(CapacityExceededError):
            manager.register_participant(event_id, second)
        assert participant_ids(manager, event_id) == [first]

    def test_unknown_event_or_user(self, manager, make_user, make_event):
        with pytest.raises(NotFoundError):
            manager.register_participant(999, make_user('Anna'))
        with pytest.raises(NotFoundError):
            manager.register_participant(make_event(), 999)

    def test_invalid_payment_method(self, manager, make_user, make_event):
        with pytest.raises(ValidationError):
            manager.register_participant(make_event(), make_user('Anna'), 'bitcoin')

    def test_rejected_after_start_even_for_registered_user(self, manager, make_user, make_event):
        event_id = make_event()
        anna, bernd = make_user('Anna'), make_user('Bernd')
        manager.register_participant(event_id, anna)
        manager.start_event(event_id)

        with pytest.raises(AlreadyStartedError):
            manager.register_participant(event_id, bernd)
        with pytest.raises(AlreadyStartedError):
            manager.register_participant(event_id, anna)

        manager.finish_event(event_id)
        with pytest.raises(AlreadyStartedError):
            manager.register_participant(event_id, bernd)


class TestCancel:

    def test_register_then_cancel_restores_list(self, manager, make_user, make_event):
        event_id = make_event()
        anna, bernd = make_user('Anna'), make_user('Bernd')
        manager.register_participant(event_id, anna)
        before = participant_ids(manager, event_id)

        manager.register_participant(event_id, bernd)
        manager.cancel_participant(event_id, bernd)
        assert participant_ids(manager, event_id) == before

    def test_cancel_unregistered(self, manager, make_user, make_event):
        with pytest.raises(NotFoundError):
            manager.cancel_participant(make_event(), make_user('Anna'))

    def test_cancel_after_start(self, manager, make_user, make_event):
        event_id, uid = make_event(), make_user('Anna')
        manager.register_participant(event_id, uid)
        manager.start_event(event_id)
        with pytest.raises(AlreadyStartedError):
            manager.cancel_participant(event_id, uid)
        assert participant_ids(manager, event_id) == [uid]


class TestPayment:

    def test_set_paid_is_idempotent(self, manager, make_user, make_event):
        event_id, uid = make_event(), make_user('Anna')
        manager.register_participant(event_id, uid)

        manager.set_participant_paid(event_id, uid, True)
        manager.set_participant_paid(event_id, uid, True)
        assert manager.get_event_by_id(event_id).get_participant(uid).paid is True

        manager.set_participant_paid(event_id, uid, False)
        assert manager.get_event_by_id(event_id).get_participant(uid).paid is False

    def test_unregistered_user(self, manager, make_user, make_event):
        with pytest.raises(NotFoundError):
            manager.set_participant_paid(make_event(), make_user('Anna'))

    def test_allowed_while_running(self, manager, make_user, make_event):
        event_id, uid = make_event(), make_user('Anna')
        manager.register_participant(event_id, uid)
        manager.start_event(event_id)
        assert manager.set_participant_paid(event_id, uid).paid is True


class TestQueries:

    def test_participant_listing(self, manager, make_user, make_event):
        event_id = make_event()
        uid = make_user('Anna', phone='0170 123')
        manager.register_participant(event_id, uid, 'cash')

        assert manager.get_event_participants(event_id) == [{
            'id': uid,
            'name': 'Anna',
            'email': 'anna@example.com',
            'phone': '0170 123',
            'payment_method': 'cash',
            'paid': False,
        }]

    def test_listing_skips_missing_users(self, manager, make_user, make_event):
        event_id = make_event()
        anna, bernd = make_user('Anna'), make_user('Bernd')
        manager.register_participant(event_id, anna)
        manager.register_participant(event_id, bernd)
        with manager.transaction() as snapshot:
            snapshot.delete_user(bernd)

        assert [p['id'] for p in manager.get_event_participants(event_id)] == [anna]

    def test_listing_unknown_event(self, manager):
        with pytest.raises(NotFoundError):
            manager.get_event_participants(999)

    def test_available_users(self, manager, make_user, make_event):
        event_id = make_event()
        anna, bernd = make_user('Anna'), make_user('Bernd')
        manager.register_participant(event_id, anna)

        available = {u['id'] for u in manager.get_available_users(event_id)}
        assert available == {1, bernd}

    def test_user_events(self, manager, make_user, make_event):
        first, second = make_event(title='A'), make_event(title='B')
        uid = make_user('Anna')
        manager.register_participant(second, uid, 'external')

        events = manager.get_user_events(uid)
        assert [e['id'] for e in events] == [second]
        assert events[0]['user_payment_method'] == 'external'
        assert events[0]['user_paid'] is False

        with_status = {e['id']: e for e in manager.get_events_with_status(uid)}
        assert with_status[first]['user_registered'] is False
        assert with_status[second]['user_registered'] is True
