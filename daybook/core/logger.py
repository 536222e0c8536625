"""
Logging setup
Console output plus rotating daybook.log and error.log files, driven by the [logging] config section
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Dict, Optional

from daybook.config.loader import get_config

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"

_SIZE_UNITS = {"KB": 1024, "MB": 1024**2, "GB": 1024**3}


def parse_size(value) -> int:
    """``"10MB"`` -> bytes; bare numbers are bytes already"""
    text = str(value).strip().upper()
    for unit, factor in _SIZE_UNITS.items():
        if text.endswith(unit):
            return int(text[: -len(unit)]) * factor
    return int(text)


class LoggerManager:
    """Owns the root logger handlers installed by Daybook"""

    def __init__(self):
        self._loggers: Dict[str, logging.Logger] = {}
        self.configure()

    def configure(self) -> None:
        options = get_config().section("logging")
        logs_dir = Path(options.get("logs_dir", "./logs"))
        max_bytes = parse_size(options.get("max_file_size", "10MB"))
        backups = int(options.get("backup_count", 5))
        level = str(options.get("level", "INFO")).upper()

        logs_dir.mkdir(parents=True, exist_ok=True)

        root = logging.getLogger()
        root.setLevel(getattr(logging, level, logging.INFO))
        self._drop_own_handlers(root)

        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        self._install(root, console, logging.DEBUG)

        for filename, handler_level in (("daybook.log", logging.DEBUG), ("error.log", logging.ERROR)):
            handler = logging.handlers.RotatingFileHandler(
                logs_dir / filename,
                maxBytes=max_bytes,
                backupCount=backups,
                encoding="utf-8",
            )
            handler.setFormatter(logging.Formatter(FILE_FORMAT))
            self._install(root, handler, handler_level)

    @staticmethod
    def _drop_own_handlers(root: logging.Logger) -> None:
        # handlers added by others (pytest capture) stay in place
        for handler in list(root.handlers):
            if getattr(handler, "_daybook", False):
                root.removeHandler(handler)
                handler.close()

    @staticmethod
    def _install(root: logging.Logger, handler: logging.Handler, level: int) -> None:
        handler.setLevel(level)
        handler._daybook = True  # type: ignore[attr-defined]
        root.addHandler(handler)

    def get_logger(self, name: str) -> logging.Logger:
        if name not in self._loggers:
            self._loggers[name] = logging.getLogger(name)
        return self._loggers[name]


_logger_manager: Optional[LoggerManager] = None


def get_logger(name: str) -> logging.Logger:
    """Module logger, configuring handlers on first use"""
    global _logger_manager
    if _logger_manager is None:
        _logger_manager = LoggerManager()
    return _logger_manager.get_logger(name)


def setup_logging() -> None:
    """Re-apply the [logging] section, e.g. after switching config files"""
    global _logger_manager
    if _logger_manager is None:
        _logger_manager = LoggerManager()
    else:
        _logger_manager.configure()
