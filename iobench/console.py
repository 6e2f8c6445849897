"""Консоль для отчета и настройка логирования"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

_console: Optional[Console] = None
_err_console: Optional[Console] = None

_THEME = Theme({
    "repr.path": "default",
    "repr.filename": "default",
    "repr.number": "default",
    "log.message": "default",
})


def get_console() -> Console:
    """Консоль stdout для таблицы отчета"""
    global _console
    if _console is None:
        _console = Console(theme=_THEME, highlight=False)
    return _console


def get_err_console() -> Console:
    """Консоль stderr для логов, чтобы не мешать таблице"""
    global _err_console
    if _err_console is None:
        _err_console = Console(theme=_THEME, stderr=True)
    return _err_console


def setup_logging(level: str = "INFO") -> None:
    """Настройка logging через RichHandler (один раз на процесс)"""
    log = logging.getLogger()

    # Не дублируем вывод, если логирование уже настроено
    if log.handlers:
        return

    handler = RichHandler(
        console=get_err_console(),
        rich_tracebacks=True,
        show_time=True,
        show_path=False,
        log_time_format="%H:%M:%S",
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    log.addHandler(handler)
    log.setLevel(level)
