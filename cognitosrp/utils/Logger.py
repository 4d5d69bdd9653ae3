#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from colorama import init, Fore, Style
import sys
from datetime import datetime
from enum import Enum, IntEnum
from pathlib import Path

from cognitosrp.utils.ConfigLoader import ConfigLoader

init()


class DebugColorLevel(Enum):
    SUCCESS = Fore.GREEN + Style.BRIGHT
    INFO = Fore.BLUE + Style.BRIGHT
    WARNING = Fore.YELLOW + Style.BRIGHT
    ERROR = Fore.RED + Style.BRIGHT
    DEBUG = Fore.CYAN + Style.BRIGHT


class DebugLevel(IntEnum):
    NONE = 0x00
    SUCCESS = 0x01
    INFO = 0x02
    WARNING = 0x08
    ERROR = 0x10
    DEBUG = 0x20
    ALL = 0xff


LEVEL_MAP = {
    'None': DebugLevel.NONE,
    'Success': DebugLevel.SUCCESS,
    'Information': DebugLevel.INFO,
    'Warning': DebugLevel.WARNING,
    'Error': DebugLevel.ERROR,
    'Debug': DebugLevel.DEBUG,
    'All': DebugLevel.ALL
}


class Logger:
    """Unified colored console logger + file logger."""

    # set_level() override for the console mask; None means "use config"
    _console_mask = None

    @staticmethod
    def _logging_config() -> dict:
        return ConfigLoader.get_config().get('Logging', {})

    @staticmethod
    def _get_logging_mask(levels):
        mask = DebugLevel.NONE
        for level in levels:
            if level in LEVEL_MAP:
                mask |= LEVEL_MAP[level]

        return mask

    @staticmethod
    def _should_log(level: DebugLevel):
        if Logger._console_mask is not None:
            return (Logger._console_mask & level) != 0
        levels = Logger._logging_config().get('logging_levels', 'All').split(', ')
        mask = Logger._get_logging_mask(levels)
        return (mask & level) != 0

    @staticmethod
    def _should_log_file(level: DebugLevel):
        levels = Logger._logging_config().get('logging_file_levels', 'None').split(', ')
        mask = Logger._get_logging_mask(levels)
        return (mask & level) != 0

    @staticmethod
    def _date():
        return datetime.now().strftime(Logger._logging_config().get('date_format', '[%Y-%m-%d %H:%M:%S]'))

    @staticmethod
    def _colorize(label, color, msg):
        if label:
            return f"{color.value}{label}{Style.RESET_ALL}{Logger._date()} {msg}"
        return msg

    @staticmethod
    def _log_path() -> Path:
        cfg = Logger._logging_config()
        return Path(cfg.get('log_dir', 'logs')) / cfg.get('log_file', 'cognitosrp.log')

    @staticmethod
    def set_level(*names: str):
        """
        Override the console levels, e.g. set_level("ALL") or
        set_level("Error", "Warning"). set_level() restores the config levels.
        """
        if not names:
            Logger._console_mask = None
            return

        mask = DebugLevel.NONE
        for name in names:
            if name.upper() in DebugLevel.__members__:
                mask |= DebugLevel[name.upper()]
            else:
                mask |= LEVEL_MAP.get(name, DebugLevel.NONE)
        Logger._console_mask = mask

    @staticmethod
    def add_to_log(msg, level_tag):
        if level_tag:
            line = f"[{level_tag}] {Logger._date()} {msg}"
        else:
            line = msg

        path = Logger._log_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding='utf-8', errors='replace') as log:
            log.write(line + "\n")

    @staticmethod
    def reset_log():
        path = Logger._log_path()
        if path.exists():
            open(path, "w").close()

    # ===================================================================
    # Console + File logging methods
    # ===================================================================

    @staticmethod
    def _emit(level: DebugLevel, color: DebugColorLevel, tag: str, msg):
        if Logger._should_log(level):
            print(Logger._colorize(f"[{tag}]", color, msg), file=sys.stderr)
        if Logger._should_log_file(level):
            Logger.add_to_log(msg, tag)

    @staticmethod
    def debug(msg):
        Logger._emit(DebugLevel.DEBUG, DebugColorLevel.DEBUG, "DEBUG", msg)

    @staticmethod
    def info(msg):
        Logger._emit(DebugLevel.INFO, DebugColorLevel.INFO, "INFO", msg)

    @staticmethod
    def warning(msg):
        Logger._emit(DebugLevel.WARNING, DebugColorLevel.WARNING, "WARNING", msg)

    @staticmethod
    def error(msg):
        Logger._emit(DebugLevel.ERROR, DebugColorLevel.ERROR, "ERROR", msg)

    @staticmethod
    def success(msg):
        Logger._emit(DebugLevel.SUCCESS, DebugColorLevel.SUCCESS, "SUCCESS", msg)
