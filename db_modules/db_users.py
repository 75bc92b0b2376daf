import logging

from errors import AlreadyExistsError, NotFoundError, ReferentialIntegrityError, ValidationError
from models import UserRole


logger = logging.getLogger(__name__)

# update_user 允许修改的字段
_UPDATABLE_USER_FIELDS = ('name', 'email', 'phone', 'role', 'password_hash')


class UserDbMixin:
    """用户相关数据操作 mixin。

    依赖宿主类提供:
    - self.transaction(): 读改写单元的上下文管理器
    - self.load_snapshot(): 只读加载快照
    """

    # ==================== 用户相关操作 ====================

    def get_all_users(self):
        """获取所有用户"""
        return self.load_snapshot().list_users()

    def get_user_by_id(self, user_id):
        """根据ID获取用户"""
        return self.load_snapshot().get_user(user_id)

    def get_user_by_email(self, email):
        """根据邮箱获取用户（不区分大小写）"""
        return self.load_snapshot().get_user_by_email(email)

    def create_user(self, user):
        """创建用户，邮箱唯一"""
        with self.transaction() as snapshot:
            if snapshot.get_user_by_email(user.email):
                raise AlreadyExistsError('邮箱已被注册')
            user.user_id = None
            snapshot.upsert_user(user)
        logger.info(f"创建用户 {user.user_id}: {user.email}")
        return user

    def update_user(self, user_id, **fields):
        """更新用户字段（只合并允许修改的字段）"""
        unknown = set(fields) - set(_UPDATABLE_USER_FIELDS)
        if unknown:
            raise ValidationError(f"不支持修改的字段: {', '.join(sorted(unknown))}")

        with self.transaction() as snapshot:
            user = snapshot.get_user(user_id)
            if not user:
                raise NotFoundError('用户不存在')

            if 'email' in fields and fields['email'] != user.email:
                other = snapshot.get_user_by_email(fields['email'])
                if other and other.user_id != user_id:
                    raise AlreadyExistsError('邮箱已被注册')
            if 'role' in fields and not isinstance(fields['role'], UserRole):
                try:
                    fields['role'] = UserRole(fields['role'])
                except ValueError:
                    raise ValidationError('无效的用户角色')

            for key, value in fields.items():
                setattr(user, key, value)
        return user

    def update_user_password(self, user_id, password_hash):
        """更新用户密码哈希"""
        self.update_user(user_id, password_hash=password_hash)
        return True

    def delete_user(self, user_id):
        """删除用户；用户仍在任一赛事的报名名单中时拒绝删除"""
        with self.transaction() as snapshot:
            user = snapshot.get_user(user_id)
            if not user:
                raise NotFoundError('用户不存在')

            if any(event.has_participant(user_id) for event in snapshot.events):
                raise ReferentialIntegrityError('用户已报名赛事，无法删除')

            snapshot.delete_user(user_id)
        logger.info(f"删除用户 {user_id}: {user.email}")
        return True
