from .auth import auth_bp
from .users import users_bp

__all__ = ['auth_bp', 'users_bp']
