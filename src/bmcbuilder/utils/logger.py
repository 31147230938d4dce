import logging
import os
import sys
from typing import Dict, Optional

import colorlog

from .. import constants

CONSOLE_FORMAT = '%(asctime)s %(levelname).4s %(name)s: %(message)s'
FILE_FORMAT = '%(asctime)s [%(levelname)-8s] %(name)s: %(message)s'
LEVEL_COLORS = {
    'DEBUG': 'blue',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'bold_red',
}


def setup_logger(debug: bool = False, module_levels: Optional[Dict[str, str]] = None, log_file: Optional[str] = None):
    """
    Configure the root logger for a build run.

    Container output is streamed line by line through the launcher loggers,
    so a long build can be followed on the console and kept in `log_file`.
    Calling this again only re-applies the level settings.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if debug else logging.INFO)

    if not root.handlers:
        root.addHandler(_console_handler())
        if log_file:
            _attach_file_handler(root, log_file)

    _apply_module_levels(module_levels)


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    # NO_COLOR: https://no-color.org/
    if sys.stderr.isatty() and not os.environ.get("NO_COLOR"):
        formatter = colorlog.ColoredFormatter(
            '%(log_color)s' + CONSOLE_FORMAT,
            datefmt='%H:%M:%S',
            log_colors=LEVEL_COLORS,
        )
    else:
        formatter = logging.Formatter(CONSOLE_FORMAT, datefmt='%H:%M:%S')
    handler.setFormatter(formatter)
    return handler


def _attach_file_handler(root: logging.Logger, log_file: str):
    try:
        handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    except OSError as e:
        root.warning(f"Cannot open log file '{log_file}', logging to console only: {e}")
        return
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    root.addHandler(handler)
    root.info(f"Build log appended to '{log_file}'")


def parse_module_levels(value: Optional[str]) -> Optional[Dict[str, str]]:
    """Turn 'launch=DEBUG,conf=WARNING' into a name -> level mapping."""
    if not value:
        return None
    levels = {}
    for item in value.split(','):
        name, sep, level = item.partition('=')
        if sep and name.strip():
            levels[name.strip()] = level.strip().upper()
    return levels


def _apply_module_levels(module_levels: Optional[Dict[str, str]]):
    """
    Set per-module levels, falling back to the BMCB_LOG_LEVELS variable.

    Names may be aliases (`launch`, `conf`, ...), dotted paths relative to the
    package (`builder.workspace`) or full logger names.
    """
    if module_levels is None:
        module_levels = parse_module_levels(os.environ.get(constants.LOG_LEVELS_ENV))
    for name, level_name in (module_levels or {}).items():
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            logging.warning(f"Ignoring unknown log level '{level_name}' for '{name}'")
            continue
        logging.getLogger(_logger_name(name)).setLevel(level)


def _logger_name(name: str) -> str:
    if name in constants.LOG_ALIAS_MAP:
        return constants.LOG_ALIAS_MAP[name]
    name = name.removesuffix('.*')
    if name.split('.', 1)[0] in constants.KNOWN_TOP_MODULES:
        return f'bmcbuilder.{name}'
    return name
