import logging

# Global project logger (level and handlers come from logging_config)
logger = logging.getLogger("spotify_discovery")


def log_section(title: str) -> None:
    """
    Log a top-level section header (one per pipeline run or CLI phase).
    """
    logger.info("")
    logger.info("=== %s ===", title)


def log_info(message: str) -> None:
    logger.info("%s", message)


def log_step(message: str) -> None:
    """
    A pipeline stage or network call is starting.
    """
    logger.info("→ %s", message)


def log_success(message: str) -> None:
    logger.info("✅ %s", message)


def log_warning(message: str) -> None:
    """
    Non-fatal problem: a skipped search, a fallback being used, ...
    """
    logger.warning("⚠️ %s", message)


def log_error(message: str) -> None:
    """
    A stage failed and the run stops.
    """
    logger.error("❌ %s", message)


def log_debug(message: str) -> None:
    logger.debug("%s", message)


def log_progress(
    current: int,
    total: int,
    prefix: str = "",
) -> None:
    """
    Progress line for fan-out loops.

    Example:
      log_progress(2, 5, prefix="Playlist search")
      -> "Playlist search 2/5 (40.0%)"
    """
    if total <= 0:
        total = 1

    fraction = max(0.0, min(1.0, current / total))
    percent = fraction * 100

    if prefix:
        logger.info("%s %d/%d (%.1f%%)", prefix, current, total, percent)
    else:
        logger.info("%d/%d (%.1f%%)", current, total, percent)
