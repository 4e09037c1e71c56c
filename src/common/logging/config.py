import logging
from logging.handlers import RotatingFileHandler
import os
import sys

from colorama import init

from src.common.logging.filters import UserFilter
from src.common.logging.formatters import ColoredFormatter
from src.config import COUNT_FILES, LOGS_DIR, MAX_BYTES


init(strip=False, autoreset=True)

# Настройка для non-TTY окружений
if not sys.stdout.isatty():
    os.environ.setdefault('FORCE_COLOR', '1')
    os.environ.setdefault('CLICOLOR_FORCE', '1')
    if 'TERM' not in os.environ:
        os.environ['TERM'] = 'xterm-256color'

LOGS_DIR.mkdir(parents=True, exist_ok=True)
logs_path = LOGS_DIR / 'working.log'

logging.addLevelName(logging.WARNING, '⚠️ WARNING')
logging.addLevelName(logging.ERROR, '🛑 ERROR')
logging.addLevelName(logging.CRITICAL, '💀CRITICAL💀')

file_handler = RotatingFileHandler(
    logs_path,
    maxBytes=MAX_BYTES,
    backupCount=COUNT_FILES,
    encoding='utf-8',
)
console_handler = logging.StreamHandler(sys.stdout)

file_formatter = logging.Formatter(
    fmt='%(asctime)s | %(levelname)s | %(user_plain)s | %(message)s',
    datefmt='%d-%m-%Y %H:%M:%S',
)
console_formatter = ColoredFormatter(
    fmt='%(asctime)s | %(levelname)s | %(user_colored)s | %(message)s',
    datefmt='%d-%m-%Y %H:%M:%S',
)

console_handler.setFormatter(console_formatter)
file_handler.setFormatter(file_formatter)

# Фильтр вешаем на хендлеры, чтобы записи дочерних логгеров
# ('app.cache' и др.) тоже получали поля user_plain / user_colored.
file_handler.addFilter(UserFilter())
console_handler.addFilter(UserFilter())

logger = logging.getLogger('app')
logger.setLevel(logging.INFO)
logger.addHandler(file_handler)
logger.addHandler(console_handler)
logger.propagate = False
