import logging
from datetime import datetime

from errors import (
    AlreadyStartedError,
    CapacityExceededError,
    EmptyEventError,
    EventFinishedError,
    NotFoundError,
    NotStartedError,
    ValidationError,
)
from models import Round, ROUND_NOT_STARTED, ROUND_FINISHED
from utils.competition import assign_spots, rotate_order, seat_capacity, shuffle_participants
from utils.helpers import parse_amount


logger = logging.getLogger(__name__)


def _ensure_running(event):
    if event.current_round == ROUND_NOT_STARTED:
        raise NotStartedError('赛事尚未开始')
    if event.current_round == ROUND_FINISHED:
        raise EventFinishedError('赛事已结束')


def _close_open_round(event, now):
    current = event.get_round(event.current_round)
    if current and current.is_open:
        current.finished_at = now


class ExecutionDbMixin:
    """赛事执行（抽签、钓位、轮换、渔获、排名）相关数据操作 mixin。

    状态由 event.current_round 表示：
    0 = 未开始（报名中），>0 = 当前进行的轮次，-1 = 已结束（终态）。

    依赖宿主类提供:
    - self.transaction() / self.load_snapshot()
    - self.rng: random.Random 实例（抽签用，可注入）
    - self.settings['seat_overflow_policy'], self.settings['catch_round_policy']
    """

    # ==================== 状态流转 ====================

    def start_event(self, event_id):
        """开赛：随机抽签、开启第 1 轮、清空渔获、分配钓位"""
        with self.transaction() as snapshot:
            event = snapshot.get_event(event_id)
            if not event:
                raise NotFoundError('赛事不存在')
            if not event.participants:
                raise EmptyEventError('赛事没有参赛者')
            if event.current_round != ROUND_NOT_STARTED:
                raise AlreadyStartedError('赛事已开始')

            capacity = seat_capacity(event.spots)
            if len(event.participants) > capacity and self.settings['seat_overflow_policy'] == 'reject':
                raise CapacityExceededError(
                    f'参赛人数 {len(event.participants)} 超过钓位容量 {capacity}（{event.spots} 个钓位）')

            event.participant_order = shuffle_participants(
                [p.user_id for p in event.participants], self.rng)
            event.current_round = 1
            event.rounds = [Round(1, started_at=datetime.now())]
            event.catches = {}
            event.participant_spots = assign_spots(event.participant_order, event.spots)

        logger.info(f"赛事 {event_id} 开赛，出场顺序: {event.participant_order}")
        return event

    def advance_round(self, event_id):
        """进入下一轮：结束当前轮次，顺序轮换一位，重新分配钓位"""
        with self.transaction() as snapshot:
            event = snapshot.get_event(event_id)
            if not event:
                raise NotFoundError('赛事不存在')
            _ensure_running(event)

            now = datetime.now()
            _close_open_round(event, now)

            event.participant_order = rotate_order(event.participant_order)
            event.current_round += 1
            event.rounds.append(Round(event.current_round, started_at=now))
            event.participant_spots = assign_spots(event.participant_order, event.spots)

        logger.info(f"赛事 {event_id} 进入第 {event.current_round} 轮")
        return event

    def finish_event(self, event_id):
        """结束赛事（终态）"""
        with self.transaction() as snapshot:
            event = snapshot.get_event(event_id)
            if not event:
                raise NotFoundError('赛事不存在')
            _ensure_running(event)

            _close_open_round(event, datetime.now())
            event.current_round = ROUND_FINISHED

        logger.info(f"赛事 {event_id} 已结束")
        return event

    # ==================== 渔获与排名 ====================

    def record_catch(self, event_id, user_id, round_number, amount):
        """录入渔获：同一选手同一轮次以最后一次录入为准（覆盖，不累加）"""
        with self.transaction() as snapshot:
            event = snapshot.get_event(event_id)
            if not event:
                raise NotFoundError('赛事不存在')
            _ensure_running(event)

            if not event.has_participant(user_id):
                raise NotFoundError('该用户不是本赛事参赛者')

            if isinstance(round_number, bool) or not isinstance(round_number, int):
                raise ValidationError('轮次必须为整数')
            if self.settings['catch_round_policy'] == 'current':
                if round_number != event.current_round:
                    raise ValidationError(f'只能录入当前轮次（第 {event.current_round} 轮）')
            elif not 1 <= round_number <= event.current_round:
                raise ValidationError(f'轮次必须在 1 到 {event.current_round} 之间')

            value = parse_amount(amount)
            if value is None:
                raise ValidationError('渔获数量必须为非负数')

            event.catches.setdefault(user_id, {})[round_number] = value

        logger.info(f"赛事 {event_id} 第 {round_number} 轮 用户 {user_id} 渔获: {value}")
        return value

    def get_event_standings(self, event_id):
        """计算排名：每位参赛者所有轮次渔获之和，按总数降序

        总数相同时保持报名顺序（稳定排序）。
        """
        snapshot = self.load_snapshot()
        event = snapshot.get_event(event_id)
        if not event:
            raise NotFoundError('赛事不存在')

        stats = []
        for participant in event.participants:
            user = snapshot.get_user(participant.user_id)
            if not user:
                continue
            catches = dict(event.catches.get(participant.user_id, {}))
            stats.append({
                'user_id': participant.user_id,
                'name': user.name,
                'total': sum(amount or 0 for amount in catches.values()),
                'catches': catches,
            })

        return sorted(stats, key=lambda item: item['total'], reverse=True)
