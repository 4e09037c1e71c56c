from src.common.logging.config import logger
from src.common.logging.decorators import format_user, log_action


__all__ = [
    'logger',
    'log_action',
    'format_user',
]
