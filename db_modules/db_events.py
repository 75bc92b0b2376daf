import logging

from errors import AlreadyStartedError, NotFoundError, ValidationError
from models import Event, ROUND_NOT_STARTED
from utils.helpers import parse_positive_int


logger = logging.getLogger(__name__)

# 赛事目录字段：update_event 只合并这些字段，比赛执行相关字段保持不变
_DIRECTORY_FIELDS = ('title', 'date', 'location', 'description', 'price', 'image')


def _parse_price(value, default=0.0):
    if value is None or value == '':
        return default
    try:
        price = float(value)
    except (TypeError, ValueError):
        raise ValidationError('价格格式无效')
    if price < 0:
        raise ValidationError('价格不能为负数')
    return price


class EventDbMixin:
    """赛事相关数据操作 mixin。

    依赖宿主类提供:
    - self.transaction(): 读改写单元的上下文管理器
    - self.load_snapshot(): 只读加载快照
    - self.settings['event_defaults']: 新赛事的默认名额与钓位数
    """

    # ==================== 赛事相关操作 ====================

    def get_all_events(self):
        """获取全部赛事"""
        return self.load_snapshot().list_events()

    def get_event_by_id(self, event_id):
        """根据ID获取赛事"""
        return self.load_snapshot().get_event(event_id)

    def create_event(self, data, created_by=None):
        """创建赛事"""
        defaults = self.settings['event_defaults']
        title = (data.get('title') or '').strip()
        if not title:
            raise ValidationError('赛事名称不能为空')

        event = Event(
            title=title,
            date=data.get('date'),
            location=data.get('location'),
            description=data.get('description'),
            price=_parse_price(data.get('price')),
            image=data.get('image'),
            max_participants=parse_positive_int(data.get('max_participants'), defaults['max_participants']),
            spots=parse_positive_int(data.get('spots'), defaults['spots']),
            created_by=created_by,
        )
        with self.transaction() as snapshot:
            snapshot.upsert_event(event)
        logger.info(f"创建赛事 {event.event_id}: {event.title}")
        return event

    def update_event(self, event_id, data):
        """更新赛事目录信息

        报名名单、出场顺序、钓位、渔获、轮次和 current_round 均保留原值；
        max_participants / spots 仅在提供了有效正整数时覆盖；
        赛事开始后（包括结束后）不允许修改这两项。
        """
        with self.transaction() as snapshot:
            event = snapshot.get_event(event_id)
            if not event:
                raise NotFoundError('赛事不存在')

            max_participants = parse_positive_int(data.get('max_participants'), event.max_participants)
            spots = parse_positive_int(data.get('spots'), event.spots)
            if event.current_round != ROUND_NOT_STARTED and (
                    max_participants != event.max_participants or spots != event.spots):
                raise AlreadyStartedError('赛事已开始，无法修改名额或钓位数')

            for field in _DIRECTORY_FIELDS:
                if field not in data:
                    continue
                value = data[field]
                if field == 'price':
                    value = _parse_price(value, event.price)
                elif field == 'title':
                    value = (value or '').strip() or event.title
                setattr(event, field, value)

            event.max_participants = max_participants
            event.spots = spots
        logger.info(f"更新赛事 {event_id}: {event.title}")
        return event

    def delete_event(self, event_id):
        """删除赛事"""
        with self.transaction() as snapshot:
            if not snapshot.delete_event(event_id):
                raise NotFoundError('赛事不存在')
        logger.info(f"删除赛事 {event_id}")
        return True
