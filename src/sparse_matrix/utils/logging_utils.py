import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logger(name: str, level: int = logging.WARNING, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attaches a stdout handler, and optionally a file handler, to the named logger.

    Handlers previously attached to the logger are closed and removed, so
    calling this again reconfigures the logger instead of duplicating output.

    Parameters
    ----------
    name : str
        The logger name, usually the package name `"sparse_matrix"`.
    level : int, optional
        Level applied to the logger and every handler, by default `logging.WARNING`.
    log_file : Optional[str], optional
        If given, records are also appended to this file. Missing parent
        directories are created.

    Returns
    -------
    logging.Logger
        The configured logger.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, mode='a', encoding='utf-8'))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
        logger.addHandler(handler)

    return logger
