from flask import Blueprint
import logging

from database import db_manager


auth_bp = Blueprint('auth', __name__)

logger = logging.getLogger(__name__)

from . import (
    register,
    login,
    logout,
    get_me,
    change_password,
    update_profile,
    forgot_password,
    reset_password,
)

__all__ = ['auth_bp']
