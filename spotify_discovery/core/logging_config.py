import logging
import os
import sys

# Third-party loggers that are too chatty at INFO during search fan-out
_NOISY_LOGGERS = ("urllib3", "requests", "httpx")


def _level_from_env(default: int) -> int:
    name = (os.getenv("LOG_LEVEL") or "").upper()
    if not name:
        return default
    value = logging.getLevelName(name)
    # getLevelName returns "Level X" for unknown names
    return value if isinstance(value, int) else default


def configure_logging(level: int = logging.INFO) -> None:
    """
    Configure root logging for the CLI and the API.

    - Logs go to stdout, one line per record: time, level, logger name
    - LOG_LEVEL (env) overrides `level`
    - Safe to call more than once: existing handlers are kept, only the level moves
    """
    level = _level_from_env(level)
    root = logging.getLogger()

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    if root.handlers:
        root.setLevel(level)
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
            datefmt="%H:%M:%S",
        )
    )

    root.addHandler(handler)
    root.setLevel(level)
