import logging
import sys

ROOT_LOGGER = "cartshop"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Install a single stdout handler on the ``cartshop`` logger tree.
    Safe to call more than once (e.g. one app per test).
    """
    log = logging.getLogger(ROOT_LOGGER)
    log.setLevel(level.upper())
    if not log.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
        log.addHandler(h)
    return log


def get_logger(name: str) -> logging.Logger:
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
