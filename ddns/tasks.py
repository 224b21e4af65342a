from celery import shared_task
from celery.utils.log import get_task_logger
from django.conf import settings

from ddns.apps import get_engine
from ddns.locks import LockUnavailable

logger = get_task_logger(__name__)


@shared_task(bind=True, ignore_result=True)
def remove_expired(self):
    """
    Periodic task that deletes every host whose registration was not refreshed
    within the retention window.
    """
    engine = get_engine()
    try:
        lock = engine.locks.acquire(
            'remove_expired',
            timeout=getattr(settings, 'DDNS_EXPIRY_LOCK_TIMEOUT', 300),
            blocking=False,
        )
    except LockUnavailable:
        logger.info('Cannot aquire task lock. Probaly another sweep is running. Bailing out.')
        return

    try:
        removed = engine.remove_expired()
        if removed:
            logger.info('Removed %d expired hosts: %s', len(removed), ', '.join(removed))
    except Exception:
        logger.exception('Could not remove expired hosts')
    finally:
        lock.release()


@shared_task(bind=True, ignore_result=True)
def reconcile_hosts(self):
    """Re-push the records of every host to the zone."""
    get_engine().reconcile_all()
