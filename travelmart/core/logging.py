import logging
import sys

from travelmart.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure root logging once for the API process and Celery workers."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        stream=sys.stdout,
        format=LOG_FORMAT,
    )
    # SQL echo is noisy at INFO; keep it behind DEBUG
    if logging.getLogger().level > logging.DEBUG:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
