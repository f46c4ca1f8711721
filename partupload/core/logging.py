"""Logging utilities for partupload modules."""

import logging

PACKAGE_LOGGER = 'partupload'


def get_logger(name: str) -> logging.Logger:
    """Get a logger in the ``partupload`` namespace.

    Short names are prefixed, so ``get_logger('retry')`` and
    ``get_logger('partupload.retry')`` return the same logger. Records
    propagate to the root logger; the package logger carries a
    ``NullHandler`` so nothing is printed until the application
    configures logging. A logger without an explicit level starts at
    WARNING while the root logger has no handlers.

    Args:
        name: Logger name, e.g. 'upload.transport'

    Returns:
        Logger instance
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + '.'):
        name = f"{PACKAGE_LOGGER}.{name}"

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if not any(isinstance(h, logging.NullHandler) for h in package_logger.handlers):
        package_logger.addHandler(logging.NullHandler())

    logger = logging.getLogger(name)
    logger.propagate = True
    if logger.level == logging.NOTSET and not logging.getLogger().handlers:
        logger.setLevel(logging.WARNING)

    return logger
