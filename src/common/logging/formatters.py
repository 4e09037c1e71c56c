import copy
import logging
from typing import Any

from colorama import Fore, Style


class ColoredFormatter(logging.Formatter):
    """Форматтер с цветами ANSI для консольного вывода.

    Раскрашивает уровень логирования. Запись копируется, чтобы
    файловый хендлер получил уровень без escape-последовательностей.
    """

    LEVEL_COLORS = {
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.MAGENTA,
    }

    def format(self, record: Any) -> str:
        """Форматирует запись лога с цветами.

        Args:
            record: Запись лога

        Returns:
            Отформатированная строка лога

        """
        colored = copy.copy(record)
        level_color = self.LEVEL_COLORS.get(colored.levelno, Fore.WHITE)
        colored.levelname = (
            f'{level_color}{colored.levelname}{Style.RESET_ALL}'
        )
        return super().format(colored)
