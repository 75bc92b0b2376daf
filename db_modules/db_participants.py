import logging

from errors import (
    AlreadyRegisteredError,
    AlreadyStartedError,
    CapacityExceededError,
    NotFoundError,
    ValidationError,
)
from models import Participant, PaymentMethod, ROUND_NOT_STARTED, ROUND_FINISHED


logger = logging.getLogger(__name__)


def _ensure_registration_open(event, action):
    """报名名单只在赛事开始前可修改；开赛后（包括结束后）永久冻结"""
    if event.current_round == ROUND_FINISHED:
        raise AlreadyStartedError(f'赛事已结束，无法{action}')
    if event.current_round != ROUND_NOT_STARTED:
        raise AlreadyStartedError(f'赛事已开始，无法{action}')


def _participant_view(participant, user):
    return {
        'id': user.user_id,
        'name': user.name,
        'email': user.email,
        'phone': user.phone or '',
        'payment_method': participant.payment_method.value,
        'paid': participant.paid,
    }


class ParticipantDbMixin:
    """参赛者（报名名单）相关数据操作 mixin。

    依赖宿主类提供:
    - self.transaction(): 读改写单元的上下文管理器
    - self.load_snapshot(): 只读加载快照
    """

    # ==================== 报名与取消 ====================

    def register_participant(self, event_id, user_id, payment_method=PaymentMethod.CASH):
        """报名参赛，新报名记录 paid=False"""
        try:
            method = PaymentMethod.parse(payment_method)
        except ValueError:
            raise ValidationError('无效的支付方式')

        with self.transaction() as snapshot:
            event = snapshot.get_event(event_id)
            if not event:
                raise NotFoundError('赛事不存在')
            if not snapshot.get_user(user_id):
                raise NotFoundError('用户不存在')

            _ensure_registration_open(event, '报名')

            if event.has_participant(user_id):
                raise AlreadyRegisteredError('用户已报名该赛事')
            if len(event.participants) >= event.max_participants:
                raise CapacityExceededError('报名人数已满')

            event.participants.append(Participant(user_id=user_id, payment_method=method, paid=False))
        logger.info(f"用户 {user_id} 报名赛事 {event_id}（{method.value}）")
        return event

    def cancel_participant(self, event_id, user_id):
        """取消报名（仅限赛事开始前）"""
        with self.transaction() as snapshot:
            event = snapshot.get_event(event_id)
            if not event:
                raise NotFoundError('赛事不存在')

            _ensure_registration_open(event, '取消报名')

            participant = event.get_participant(user_id)
            if not participant:
                raise NotFoundError('用户未报名该赛事')

            event.participants.remove(participant)
        logger.info(f"用户 {user_id} 取消报名赛事 {event_id}")
        return event

    def set_participant_paid(self, event_id, user_id, paid=True):
        """更新缴费状态（幂等）"""
        with self.transaction() as snapshot:
            event = snapshot.get_event(event_id)
            if not event:
                raise NotFoundError('赛事不存在')

            participant = event.get_participant(user_id)
            if not participant:
                raise NotFoundError('用户未报名该赛事')

            participant.paid = bool(paid)
        logger.info(f"赛事 {event_id} 用户 {user_id} 缴费状态: {bool(paid)}")
        return participant

    # ==================== 查询 ====================

    def get_event_participants(self, event_id):
        """获取报名名单（附带用户姓名、邮箱、电话）

        引用的用户已不存在时，该条记录直接跳过。
        """
        snapshot = self.load_snapshot()
        event = snapshot.get_event(event_id)
        if not event:
            raise NotFoundError('赛事不存在')

        result = []
        for participant in event.participants:
            user = snapshot.get_user(participant.user_id)
            if user:
                result.append(_participant_view(participant, user))
        return result

    def get_available_users(self, event_id):
        """获取尚未报名该赛事的用户"""
        snapshot = self.load_snapshot()
        event = snapshot.get_event(event_id)
        if not event:
            raise NotFoundError('赛事不存在')

        return [
            {
                'id': user.user_id,
                'name': user.name,
                'email': user.email,
                'phone': user.phone or '',
            }
            for user in snapshot.users
            if not event.has_participant(user.user_id)
        ]

    def get_user_events(self, user_id):
        """获取用户报名的所有赛事（附带该用户的支付方式与缴费状态）"""
        result = []
        for event in self.load_snapshot().events:
            participant = event.get_participant(user_id)
            if not participant:
                continue
            event_dict = event.to_dict()
            event_dict['user_payment_method'] = participant.payment_method.value
            event_dict['user_paid'] = participant.paid
            result.append(event_dict)
        return result

    def get_events_with_status(self, user_id):
        """获取全部赛事，并标注当前用户的报名状态"""
        result = []
        for event in self.load_snapshot().events:
            participant = event.get_participant(user_id)
            event_dict = event.to_dict()
            event_dict['user_registered'] = participant is not None
            event_dict['user_payment_method'] = participant.payment_method.value if participant else None
            event_dict['user_paid'] = participant.paid if participant else None
            result.append(event_dict)
        return result
