"""
Root logger setup for hosts embedding the converters (see `converters.activate`).
"""
import logging

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'

LEVELS = {name: getattr(logging, name) for name in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')}


def _level(log_level) -> int:
    if isinstance(log_level, int):
        return log_level
    return LEVELS.get(str(log_level).upper(), logging.INFO)


def _handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def configure_logging(log_level='INFO', log_file: str = None) -> int:
    """
    Route converter logs to the console and, optionally, a UTF-8 file.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ERROR) or a logging constant.
            Unknown names fall back to INFO.
        log_file: Optional path of a log file, written in addition to the console.

    Returns:
        int: The level applied to the root logger.
    """
    level = _level(log_level)
    handlers = [_handler(logging.StreamHandler(), level)]
    if log_file:
        handlers.append(_handler(logging.FileHandler(log_file, encoding='utf-8'), level))
    logging.basicConfig(level=level, handlers=handlers, force=True)
    return level
