"""
Logging Configuration
Sets up the package logger for the application and the command line tool.

trimesh logs every boolean operation at DEBUG; it is kept at WARNING so that
`--log-level DEBUG` shows the block generation steps instead.
"""
import logging
import sys
from typing import Optional, Union

LOGGER_NAME = "drillblock"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATEFMT = '%H:%M:%S'

QUIET_LIBRARIES = ("trimesh",)


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the logger for the 'drillblock' namespace.

    Args:
        level: Logging level, as a number (logging.DEBUG) or a name ("DEBUG").
        log_file: Optional path to save logs to a file.

    Returns:
        The configured package logger.
    """
    if isinstance(level, str):
        name = level
        level = logging.getLevelName(name.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Repeated calls must not duplicate output
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    for name in QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logger.info(f"Logging initialized at {logging.getLevelName(level)}.")
    return logger
