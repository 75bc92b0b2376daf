#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
钓鱼赛事管理系统 - 数据模型定义

所有实体都保存在同一份快照（Snapshot）中，整份读取、整份写回。
"""

from datetime import datetime
from enum import Enum

# current_round 的特殊取值
ROUND_NOT_STARTED = 0
ROUND_FINISHED = -1


class UserRole(Enum):
    """用户角色枚举"""
    ADMIN = 'admin'              # 管理员
    USER = 'user'                # 普通用户


class PaymentMethod(Enum):
    """支付方式枚举"""
    CASH = 'cash'                # 现场现金
    EXTERNAL = 'external'        # 外部支付（PayPal 等）

    @classmethod
    def parse(cls, value):
        """解析支付方式，兼容旧数据中的 paypal"""
        if isinstance(value, cls):
            return value
        if value is None or value == '':
            return cls.CASH
        value = str(value).strip().lower()
        if value == 'paypal':
            return cls.EXTERNAL
        return cls(value)


class SpotSide(Enum):
    """钓位左右侧"""
    LEFT = 'left'
    RIGHT = 'right'


class EventState(Enum):
    """赛事执行状态（由 current_round 推导）"""
    NOT_STARTED = 'not_started'  # 报名中
    RUNNING = 'running'          # 进行中
    FINISHED = 'finished'        # 已结束


def _parse_datetime(value):
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace('Z', ''))
    except ValueError:
        return None


def _isoformat(value):
    return value.isoformat() if value else None


def _parse_round_key(key):
    """轮次键统一为整数，兼容旧格式 'round1'"""
    if isinstance(key, int):
        return key
    key = str(key)
    if key.startswith('round'):
        key = key[len('round'):]
    return int(key)


class User:
    """用户模型"""
    def __init__(self, user_id=None, name=None, email=None, password_hash=None,
                 role=UserRole.USER, phone=None, created_at=None):
        self.user_id = user_id
        self.name = name
        self.email = email
        self.password_hash = password_hash
        self.role = role if isinstance(role, UserRole) else UserRole(role)
        self.phone = phone or ''
        self.created_at = created_at or datetime.now()

    @property
    def is_admin(self):
        return self.role == UserRole.ADMIN

    def to_dict(self):
        """转换为字典（不含密码）"""
        return {
            'id': self.user_id,
            'name': self.name,
            'email': self.email,
            'role': self.role.value,
            'phone': self.phone,
            'created_at': _isoformat(self.created_at),
        }

    def to_storage(self):
        data = self.to_dict()
        data['password_hash'] = self.password_hash
        return data

    @classmethod
    def from_dict(cls, data):
        return cls(
            user_id=int(data['id']),
            name=data.get('name'),
            email=data.get('email'),
            password_hash=data.get('password_hash'),
            role=data.get('role', 'user'),
            phone=data.get('phone'),
            created_at=_parse_datetime(data.get('created_at')),
        )


class Participant:
    """参赛者模型（属于某个赛事，以 user_id 为键）"""
    def __init__(self, user_id=None, payment_method=PaymentMethod.CASH, paid=False,
                 registered_at=None):
        self.user_id = user_id
        self.payment_method = PaymentMethod.parse(payment_method)
        self.paid = bool(paid)
        self.registered_at = registered_at or datetime.now()

    def to_dict(self):
        return {
            'user_id': self.user_id,
            'payment_method': self.payment_method.value,
            'paid': self.paid,
            'registered_at': _isoformat(self.registered_at),
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            user_id=int(data['user_id']),
            payment_method=data.get('payment_method'),
            paid=data.get('paid', False),
            registered_at=_parse_datetime(data.get('registered_at')),
        )


class SpotAssignment:
    """钓位分配：钓位号 + 左右侧"""
    def __init__(self, spot, side):
        self.spot = spot
        self.side = side if isinstance(side, SpotSide) else SpotSide(side)

    def __eq__(self, other):
        if not isinstance(other, SpotAssignment):
            return NotImplemented
        return self.spot == other.spot and self.side == other.side

    def __repr__(self):
        return f"SpotAssignment(spot={self.spot}, side={self.side.value})"

    def to_dict(self):
        return {'spot': self.spot, 'side': self.side.value}

    @classmethod
    def from_dict(cls, data):
        return cls(spot=int(data['spot']), side=data['side'])


class Round:
    """比赛轮次"""
    def __init__(self, round_number, started_at=None, finished_at=None):
        self.round_number = round_number
        self.started_at = started_at or datetime.now()
        self.finished_at = finished_at

    @property
    def is_open(self):
        return self.finished_at is None

    def to_dict(self):
        return {
            'round': self.round_number,
            'started_at': _isoformat(self.started_at),
            'finished_at': _isoformat(self.finished_at),
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            round_number=int(data['round']),
            started_at=_parse_datetime(data.get('started_at')),
            finished_at=_parse_datetime(data.get('finished_at')),
        )


class Event:
    """赛事模型（包含报名名单与比赛执行状态）"""
    def __init__(self, event_id=None, title=None, date=None, location=None,
                 description=None, price=0.0, image=None, max_participants=20,
                 spots=10, participants=None, participant_order=None,
                 participant_spots=None, catches=None, rounds=None,
                 current_round=ROUND_NOT_STARTED, created_at=None, created_by=None):
        self.event_id = event_id
        self.title = title
        self.date = date
        self.location = location
        self.description = description
        self.price = price
        self.image = image
        self.max_participants = max_participants
        self.spots = spots
        self.participants = participants or []
        self.participant_order = participant_order or []
        self.participant_spots = participant_spots or {}
        self.catches = catches or {}
        self.rounds = rounds or []
        self.current_round = current_round
        self.created_at = created_at or datetime.now()
        self.created_by = created_by

    @property
    def current_participants(self):
        return len(self.participants)

    @property
    def state(self):
        if self.current_round == ROUND_FINISHED:
            return EventState.FINISHED
        if self.current_round > 0:
            return EventState.RUNNING
        return EventState.NOT_STARTED

    def get_participant(self, user_id):
        for participant in self.participants:
            if participant.user_id == user_id:
                return participant
        return None

    def has_participant(self, user_id):
        return self.get_participant(user_id) is not None

    def get_round(self, round_number):
        for round_ in self.rounds:
            if round_.round_number == round_number:
                return round_
        return None

    def to_dict(self):
        """转换为字典（同时用于持久化与接口输出）"""
        return {
            'id': self.event_id,
            'title': self.title,
            'date': self.date,
            'location': self.location,
            'description': self.description,
            'price': self.price,
            'image': self.image,
            'max_participants': self.max_participants,
            'spots': self.spots,
            'current_participants': self.current_participants,
            'participants': [p.to_dict() for p in self.participants],
            'participant_order': list(self.participant_order),
            'participant_spots': {
                str(user_id): assignment.to_dict()
                for user_id, assignment in self.participant_spots.items()
            },
            'catches': {
                str(user_id): {str(round_number): amount for round_number, amount in rounds.items()}
                for user_id, rounds in self.catches.items()
            },
            'rounds': [r.to_dict() for r in self.rounds],
            'current_round': self.current_round,
            'state': self.state.value,
            'created_at': _isoformat(self.created_at),
            'created_by': self.created_by,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            event_id=int(data['id']),
            title=data.get('title'),
            date=data.get('date'),
            location=data.get('location'),
            description=data.get('description'),
            price=data.get('price', 0.0),
            image=data.get('image'),
            max_participants=data.get('max_participants', 20),
            spots=data.get('spots', 10),
            participants=[Participant.from_dict(p) for p in data.get('participants') or []],
            participant_order=[int(uid) for uid in data.get('participant_order') or []],
            participant_spots={
                int(user_id): SpotAssignment.from_dict(assignment)
                for user_id, assignment in (data.get('participant_spots') or {}).items()
            },
            catches={
                int(user_id): {_parse_round_key(key): amount for key, amount in rounds.items()}
                for user_id, rounds in (data.get('catches') or {}).items()
            },
            rounds=[Round.from_dict(r) for r in data.get('rounds') or []],
            current_round=int(data.get('current_round') or ROUND_NOT_STARTED),
            created_at=_parse_datetime(data.get('created_at')),
            created_by=data.get('created_by'),
        )


class ResetToken:
    """一次性密码重置令牌"""
    def __init__(self, email, token, expires_at, used=False):
        self.email = email
        self.token = token
        self.expires_at = expires_at
        self.used = used

    def is_valid(self, now=None):
        now = now or datetime.now()
        return not self.used and self.expires_at > now

    def to_dict(self):
        return {
            'email': self.email,
            'token': self.token,
            'expires_at': _isoformat(self.expires_at),
            'used': self.used,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            email=data['email'],
            token=data['token'],
            expires_at=_parse_datetime(data.get('expires_at')) or datetime.min,
            used=data.get('used', False),
        )


class Snapshot:
    """全部持久化实体的快照，同时充当各实体的仓储接口"""

    def __init__(self, users=None, events=None, reset_tokens=None, counters=None):
        self.users = users or []
        self.events = events or []
        self.reset_tokens = reset_tokens or []
        self.counters = dict(counters or {})
        # 计数器至少不小于已有的最大 ID，避免删除后 ID 复用
        self.counters['users'] = max(
            [self.counters.get('users', 0)] + [u.user_id for u in self.users])
        self.counters['events'] = max(
            [self.counters.get('events', 0)] + [e.event_id for e in self.events])

    def next_id(self, collection):
        """分配单调递增的 ID"""
        self.counters[collection] = self.counters.get(collection, 0) + 1
        return self.counters[collection]

    # ==================== 用户 ====================

    def list_users(self):
        return list(self.users)

    def get_user(self, user_id):
        for user in self.users:
            if user.user_id == user_id:
                return user
        return None

    def get_user_by_email(self, email):
        if not email:
            return None
        email = email.strip().lower()
        for user in self.users:
            if (user.email or '').lower() == email:
                return user
        return None

    def upsert_user(self, user):
        if user.user_id is None:
            user.user_id = self.next_id('users')
        for index, existing in enumerate(self.users):
            if existing.user_id == user.user_id:
                self.users[index] = user
                return user
        self.users.append(user)
        return user

    def delete_user(self, user_id):
        before = len(self.users)
        self.users = [u for u in self.users if u.user_id != user_id]
        return len(self.users) != before

    # ==================== 赛事 ====================

    def list_events(self):
        return list(self.events)

    def get_event(self, event_id):
        for event in self.events:
            if event.event_id == event_id:
                return event
        return None

    def upsert_event(self, event):
        if event.event_id is None:
            event.event_id = self.next_id('events')
        for index, existing in enumerate(self.events):
            if existing.event_id == event.event_id:
                self.events[index] = event
                return event
        self.events.append(event)
        return event

    def delete_event(self, event_id):
        before = len(self.events)
        self.events = [e for e in self.events if e.event_id != event_id]
        return len(self.events) != before

    # ==================== 序列化 ====================

    def to_dict(self):
        return {
            'users': [u.to_storage() for u in self.users],
            'events': [e.to_dict() for e in self.events],
            'reset_tokens': [t.to_dict() for t in self.reset_tokens],
            'counters': dict(self.counters),
        }

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise ValueError('snapshot root must be an object')
        return cls(
            users=[User.from_dict(u) for u in data.get('users') or []],
            events=[Event.from_dict(e) for e in data.get('events') or []],
            reset_tokens=[ResetToken.from_dict(t) for t in data.get('reset_tokens') or []],
            counters=data.get('counters'),
        )


def build_default_snapshot(admin_email, admin_password_hash):
    """首次运行时写入的默认数据：一个管理员和三个示例赛事"""
    admin = User(user_id=1, name='Admin', email=admin_email,
                 password_hash=admin_password_hash, role=UserRole.ADMIN)
    events = [
        Event(event_id=1, title='Hecht-Cup 2026', date='2026-05-15',
              location='Müggelsee, Berlin',
              description='Traditionsreicher Hecht-Wettkampf mit tollen Preisen.',
              price=25, image='fas fa-water', max_participants=20, spots=10, created_by=1),
        Event(event_id=2, title='Karpfen-Meisterschaft', date='2026-06-22',
              location='Chiemsee, Bayern',
              description='Das größte Karpfentreffen im Süden.',
              price=30, image='fas fa-fish', max_participants=30, spots=15, created_by=1),
        Event(event_id=3, title='Seeangeln auf Zander', date='2026-07-10',
              location='Bodensee',
              description='Vom Boot aus auf Zander, für erfahrene Angler.',
              price=40, image='fas fa-ship', max_participants=15, spots=8, created_by=1),
    ]
    return Snapshot(users=[admin], events=events)
