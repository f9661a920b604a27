from celery import shared_task

from django.conf import settings
from django.core.cache import cache

from .purge import MediaPurger
from .storage import get_storage

import logging


logger = logging.getLogger(__name__)

PURGE_LOCK_TIMEOUT = 3600  # Seconds


# --- Periodic media purge with lock ---
@shared_task(bind=True, name="purge_media_files", time_limit=3000, ignore_result=True)
def purge_media_files_task(self, force=None, storage_alias=None):
    """
    Scheduled version of the purge_media_files command.

    - force defaults to MEDIA_PURGE_SCHEDULED_FORCE (False: dry run, report only)
    - storage_alias defaults to MEDIA_PURGE_STORAGE_ALIAS
    - A cache lock per storage keeps two purges of the same root from racing
      on deletions

    Returns the number of files removed (or that would be removed).
    """
    if force is None:
        force = settings.MEDIA_PURGE_SCHEDULED_FORCE
    storage_alias = storage_alias or settings.MEDIA_PURGE_STORAGE_ALIAS

    lock_key = f"purge_media_files_lock_{storage_alias}"
    try:
        lock = cache.lock(lock_key, timeout=PURGE_LOCK_TIMEOUT)
        acquired = lock.acquire(blocking=False)
    except Exception as e:
        logger.error(f"Failed to acquire lock for purge_media_files_task: {str(e)}")
        raise self.retry(exc=e, countdown=300)

    if not acquired:
        logger.info(f"Media purge of {storage_alias} already running, skipping")
        return 0

    try:
        purger = MediaPurger(
            storage=get_storage(storage_alias),
            storage_alias=storage_alias,
            delete_order=settings.MEDIA_PURGE_DELETE_ORDER,
        )
        result = purger.run(force=force)
    except Exception:
        logger.exception(f"Media purge of {storage_alias} failed")
        raise
    finally:
        lock.release()

    logger.info(
        f"Media purge of {storage_alias} removed {result.total_count} files "
        f"({result.without_record_count} without record, {result.unreferenced_count} unreferenced, "
        f"force={force})"
    )
    return result.total_count
