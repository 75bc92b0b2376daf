from flask import Blueprint
import logging

from database import db_manager


participants_bp = Blueprint('participants', __name__)

logger = logging.getLogger(__name__)

from . import (
    get_participants,
    get_available_users,
    add_participant,
    remove_participant,
    update_payment,
    export_participants,
    register_event,
    cancel_registration,
    payment_success,
    get_my_events,
)

__all__ = ['participants_bp']
