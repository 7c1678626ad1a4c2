import os
import sys
from typing import List, Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def setup_logging(debug_mode: bool = True, log_dir: Optional[str] = "logs",
                  rotation: str = "10 MB", retention: str = "1 week") -> List[int]:
    """
    Configures Loguru sinks for a vmkit application.

    Replaces any existing sinks with a stderr sink (DEBUG in debug mode,
    INFO otherwise) and, when `log_dir` is set, a rotating file sink.

    Returns:
        Ids of the added sinks, usable with logger.remove()
    """
    logger.remove()

    level = "DEBUG" if debug_mode else "INFO"
    handler_ids = [logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)]

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handler_ids.append(logger.add(
            os.path.join(log_dir, "vmkit_{time}.log"),
            rotation=rotation,
            retention=retention,
            level="DEBUG",
        ))

    logger.info(f"Logging initialized ({level}{', file sink in ' + log_dir if log_dir else ''})")
    return handler_ids
