from travelmart.tasks.celery_app import celery
from travelmart.tasks import worker_jobs

@celery.task(name="travelmart.tasks.jobs.complete_past_reservations")
def complete_past_reservations():
    return worker_jobs.complete_past_reservations()
