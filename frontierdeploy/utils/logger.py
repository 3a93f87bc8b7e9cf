"""Centralized logging configuration for frontierdeploy.

Coloured console output via *colorama*, with ``--verbose`` / ``--quiet``
mapped onto log levels.

Usage::

    from frontierdeploy.utils.logger import get_logger

    log = get_logger(__name__)
    log.info("Uploaded %s", key)
    log.error("Upload failed: %s", err)
    log.debug("ETag for %s: %s", key, etag)  # only shown with --verbose
"""
import logging
import sys

from colorama import Fore, Style

__all__ = ["get_logger", "setup_logging"]

# ---------------------------------------------------------------------------
# Custom formatter that injects colorama colours per level
# ---------------------------------------------------------------------------

_LEVEL_COLOURS = {
    logging.DEBUG: Fore.WHITE,
    logging.INFO: Fore.CYAN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.RED + Style.BRIGHT,
}


class ColouredFormatter(logging.Formatter):
    """Formatter that prepends coloured level tags to log messages."""

    def format(self, record: logging.LogRecord) -> str:
        colour = _LEVEL_COLOURS.get(record.levelno, "")
        msg = super().format(record)
        return f"{colour}[{record.levelname}]{Style.RESET_ALL} {msg}"


# ---------------------------------------------------------------------------
# Module-level setup
# ---------------------------------------------------------------------------

_ROOT_LOGGER_NAME = "frontierdeploy"
_configured = False


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure the root *frontierdeploy* logger.

    Call once during CLI bootstrap.

    Args:
        verbose: If *True*, set level to ``DEBUG``.
        quiet: If *True*, set level to ``WARNING`` (overrides *verbose*).
    """
    global _configured  # noqa: PLW0603

    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    root = logging.getLogger(_ROOT_LOGGER_NAME)
    root.setLevel(level)

    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColouredFormatter("%(message)s"))
        root.addHandler(handler)
    else:
        for handler in root.handlers:
            handler.setLevel(level)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a child logger under the *frontierdeploy* namespace.

    Applies the default ``INFO`` configuration if :func:`setup_logging`
    has not run yet.

    Args:
        name: Typically ``__name__`` of the calling module.
    """
    if not _configured:
        setup_logging()

    if not name.startswith(_ROOT_LOGGER_NAME):
        name = f"{_ROOT_LOGGER_NAME}.{name}"

    return logging.getLogger(name)
