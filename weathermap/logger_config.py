import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from weathermap.config import LOG_LEVEL
from weathermap.paths import LOGS, ensure_dirs

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(log_dir: str | None = None, level: str = LOG_LEVEL) -> logging.Logger:
    """Console + rotating file logging for the "weathermap" logger.

    Streamlit reruns the script on every interaction, so this is called
    many times per session; handlers are attached only on the first call.
    """
    if log_dir is None:
        ensure_dirs()
        log_dir = str(LOGS)
    Path(log_dir).mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger("weathermap")
    logger.setLevel(level)
    # Streamlit puts its own handler on the root logger
    logger.propagate = False
    # one line per provider request is enough
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)

    file_handler = RotatingFileHandler(
        Path(log_dir) / "weathermap.log",
        maxBytes=5_000_000,
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)

    logger.addHandler(console)
    logger.addHandler(file_handler)
    logger.debug("logging to %s at %s", file_handler.baseFilename, level)
    return logger
