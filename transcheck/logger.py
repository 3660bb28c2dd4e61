import logging
from pathlib import Path

LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
LOG_FILE = LOG_DIR / "transcheck.log"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_LOG_MODE = 'info'

# Cache for log settings to avoid repeated config reads
_log_settings_cache = None


def _get_log_settings():
    """Get (log_mode, log_to_file) from configuration."""
    global _log_settings_cache
    if _log_settings_cache is not None:
        return _log_settings_cache

    try:
        from transcheck.config import load_config
        config = load_config()
    except Exception:
        # Config is still importing or unreadable; don't cache so the next logger retries
        return DEFAULT_LOG_MODE, False

    _log_settings_cache = (config.get('log_mode', DEFAULT_LOG_MODE), bool(config.get('log_to_file', False)))
    return _log_settings_cache


def _level_for(log_mode: str) -> int:
    if log_mode == 'debug':
        return logging.DEBUG
    if log_mode == 'off':
        # Higher than CRITICAL disables everything
        return logging.CRITICAL + 1
    return logging.INFO


def _apply_settings(logger: logging.Logger, log_mode: str, log_to_file: bool) -> None:
    level = _level_for(log_mode)
    log_format = logging.Formatter(LOG_FORMAT)
    logger.setLevel(level)

    file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
    want_file = log_to_file and log_mode != 'off'

    if want_file and not file_handlers:
        LOG_DIR.mkdir(exist_ok=True)
        f_handler = logging.FileHandler(LOG_FILE, encoding='utf-8')
        f_handler.setLevel(logging.DEBUG)
        f_handler.setFormatter(log_format)
        logger.addHandler(f_handler)
    elif not want_file and file_handlers:
        for handler in file_handlers:
            handler.close()
            logger.removeHandler(handler)

    console_handlers = [
        h for h in logger.handlers
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
    ]
    if not console_handlers:
        c_handler = logging.StreamHandler()
        c_handler.setFormatter(log_format)
        logger.addHandler(c_handler)
        console_handlers = [c_handler]
    for handler in console_handlers:
        handler.setLevel(level)


def refresh_log_mode():
    """Clear the cached log settings and re-apply them to every logger created by get_logger."""
    global _log_settings_cache
    _log_settings_cache = None

    log_mode, log_to_file = _get_log_settings()
    for logger_name in list(logging.Logger.manager.loggerDict.keys()):
        if not logger_name.startswith('transcheck'):
            continue
        logger = logging.getLogger(logger_name)
        # Only loggers with handlers were configured by get_logger
        if logger.handlers:
            _apply_settings(logger, log_mode, log_to_file)


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    log_mode, log_to_file = _get_log_settings()
    _apply_settings(logger, log_mode, log_to_file)
    return logger
