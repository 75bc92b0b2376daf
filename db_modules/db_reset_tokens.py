import logging
import secrets
from datetime import datetime

from models import ResetToken


logger = logging.getLogger(__name__)


class ResetTokenDbMixin:
    """密码重置令牌相关数据操作 mixin。

    依赖宿主类提供:
    - self.transaction() / self.load_snapshot()
    - self.settings['reset_token_ttl']: 令牌有效期（timedelta）
    """

    def create_reset_token(self, email):
        """为邮箱生成新令牌，同一邮箱之前的令牌全部作废"""
        token = secrets.token_hex(32)
        with self.transaction() as snapshot:
            snapshot.reset_tokens = [t for t in snapshot.reset_tokens if t.email != email]
            snapshot.reset_tokens.append(ResetToken(
                email=email,
                token=token,
                expires_at=datetime.now() + self.settings['reset_token_ttl'],
            ))
        return token

    def find_reset_token(self, token):
        """查找有效（未过期、未使用）的令牌"""
        now = datetime.now()
        for entry in self.load_snapshot().reset_tokens:
            if entry.token == token and entry.is_valid(now):
                return entry
        return None

    def mark_token_used(self, token):
        """标记令牌已使用"""
        with self.transaction() as snapshot:
            for entry in snapshot.reset_tokens:
                if entry.token == token:
                    entry.used = True
                    return True
        return False
