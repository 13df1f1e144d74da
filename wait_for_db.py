"""Block until DATABASE_URL accepts connections (used before migrations in containers)."""
import logging
import os
import time

from sqlalchemy import create_engine, text

from travelmart.core.config import settings
from travelmart.core.logging import setup_logging

setup_logging()
logger = logging.getLogger("wait_for_db")

timeout_s = int(os.getenv("DB_WAIT_TIMEOUT", "60"))
engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True)
start = time.time()
last_err = None

logger.info("waiting for database %s (timeout=%ss)", engine.url.render_as_string(hide_password=True), timeout_s)
while True:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("database is ready")
        break
    except Exception as e:
        last_err = e
        if time.time() - start > timeout_s:
            logger.error("timed out waiting for database, last error: %s", last_err)
            raise
        time.sleep(1)
engine.dispose()
