"""Process-wide logging setup."""

import logging

from pythonjsonlogger import jsonlogger

_HANDLER_NAME = 'ellarises'


def setup_logger(level: int = logging.INFO, json: bool = True) -> None:
    """
    Install a single stream handler on the root logger.

    Calling this again (e.g. from several app factories in one test run)
    only updates the level.
    """
    logger = logging.getLogger()
    logger.setLevel(level)
    if any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        return

    logHandler = logging.StreamHandler()
    logHandler.set_name(_HANDLER_NAME)
    if json:
        formatter: logging.Formatter = jsonlogger.JsonFormatter(
            '%(asctime)s %(levelname)s %(name)s %(message)s',
            rename_fields={'levelname': 'level', 'asctime': 'timestamp'}
        )
    else:
        formatter = logging.Formatter(
            '%(asctime)s %(levelname)s %(name)s: %(message)s'
        )
    logHandler.setFormatter(formatter)
    logger.addHandler(logHandler)
