from flask import Blueprint
import logging

from database import db_manager


execution_bp = Blueprint('execution', __name__)

logger = logging.getLogger(__name__)

from . import (
    start_event,
    record_catch,
    next_round,
    finish_event,
    get_stats,
    export_stats,
)

__all__ = ['execution_bp']
