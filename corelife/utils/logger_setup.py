"""loguru sinks for simulation runs: a console stream and a rotating run log."""

from datetime import datetime, timezone
import os
import sys

from loguru import logger

_FORMAT = "{time:HH:mm:ss.SSS} | {level: <8} | {message}"


def setup_logger(
    log_dir: str = "logs",
    level: str = "INFO",
    rotation: str = "50 MB",
    retention: str = "30 days",
) -> str:
    """Route corelife logging to stderr and to a per-run file in *log_dir*.

    Returns the path of the run log.
    """
    os.makedirs(log_dir, exist_ok=True)
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    log_file = os.path.join(log_dir, f"corelife_{stamp}.log")

    logger.remove()
    logger.add(sys.stderr, level=level, format=_FORMAT, colorize=sys.stderr.isatty())
    logger.add(
        log_file,
        level=level,
        format=_FORMAT,
        rotation=rotation,
        retention=retention,
        encoding="utf-8",
    )
    logger.info("[Logging] Level {}, run log at {}", level, log_file)
    return log_file
