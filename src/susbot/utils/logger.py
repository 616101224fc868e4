import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(name: str = 'susbot', log_level: str = 'INFO', log_file: Optional[str] = None) -> logging.Logger:
    """Configure and return a named logger.

    Handlers are attached only once per logger, so calling this repeatedly
    (e.g. once per CLI invocation in tests) does not duplicate output.

    Args:
        name: Logger name; ``'susbot'`` configures the whole package
        log_level: Level name such as ``'DEBUG'`` or ``'INFO'``
        log_file: Optional path of a file to log to as well

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, str(log_level).upper(), logging.INFO))

    if not getattr(logger, '_susbot_configured', False):
        formatter = logging.Formatter(LOG_FORMAT)

        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

        logger._susbot_configured = True

    return logger
