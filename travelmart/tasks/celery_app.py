from urllib.parse import urlparse, urlunparse, parse_qs, urlencode

from celery import Celery
from celery.signals import after_setup_logger
from travelmart.core.config import settings


def _redis_url_for_celery(url: str) -> str:
    """Celery requires ssl_cert_reqs for rediss:// (e.g. Upstash TLS)."""
    if not url or not url.strip().lower().startswith("rediss://"):
        return url
    parsed = urlparse(url)
    qs = parse_qs(parsed.query)
    if "ssl_cert_reqs" not in qs:
        qs["ssl_cert_reqs"] = ["CERT_NONE"]
        new_query = urlencode(qs, doseq=True)
        return urlunparse(parsed._replace(query=new_query))
    return url


_redis_url = _redis_url_for_celery(settings.REDIS_URL)

celery = Celery(
    "travelmart",
    broker=_redis_url,
    backend=_redis_url,
    include=["travelmart.tasks.jobs"],
)

celery.conf.timezone = "Asia/Karachi"


@after_setup_logger.connect
def _quiet_sql(logger, **kwargs):
    from travelmart.core.logging import setup_logging
    setup_logging()


celery.conf.beat_schedule = {
    "complete-past-reservations": {
        "task": "travelmart.tasks.jobs.complete_past_reservations",
        "schedule": settings.COMPLETE_SWEEP_SECONDS,
    },
}
