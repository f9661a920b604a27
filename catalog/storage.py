"""
Filesystem side of the media purge.

Wraps Django storages (configured per alias in the STORAGES setting) with the
two operations the purge needs: a recursive listing of every file under the
storage root, and a delete that tells apart "deleted" from "already gone".

Usage:
    storage = get_storage('catalogStorage')
    for stored_file in list_files(storage):
        ...
    delete_file(storage, stored_file.key)  # Raises MediaFileNotFound if missing
"""
import logging
import posixpath
from dataclasses import dataclass
from typing import Iterator, List, Optional

from django.core.files.storage import InvalidStorageError, Storage, storages

logger = logging.getLogger(__name__)


class StorageRootError(Exception):
    """The storage root is unknown, missing or cannot be listed."""


class MediaFileNotFound(Exception):
    """The file to delete is no longer in the storage."""

    def __init__(self, key):
        self.key = key
        super().__init__(f"File '{key}' not found in storage")


@dataclass(frozen=True)
class StoredFile:
    key: str  # Storage-relative path, joined against FileInfo.key
    path: str  # Absolute filesystem path, used for deletion and reporting
    size: Optional[int] = None
    type: str = 'file'


def get_storage(alias):
    """
    Resolves a storage alias (e.g. 'catalogStorage') to its Django storage.

    Raises:
        StorageRootError: If no storage is configured under that alias.
    """
    try:
        return storages[alias]
    except InvalidStorageError as e:
        raise StorageRootError(f"Unknown storage alias '{alias}'") from e


def _size(storage: Storage, key: str) -> Optional[int]:
    try:
        return storage.size(key)
    except OSError as e:
        # Dangling symlink, or removed after the listing
        logger.warning(f"Cannot read size of {key}: {e}")
        return None


def _walk(storage: Storage, prefix: str) -> Iterator[StoredFile]:
    directories, files = storage.listdir(prefix)

    for name in sorted(files):
        key = posixpath.join(prefix, name) if prefix else name
        yield StoredFile(key=key, path=storage.path(key), size=_size(storage, key))

    for name in sorted(directories):
        yield from _walk(storage, posixpath.join(prefix, name) if prefix else name)


def list_files(storage: Storage) -> List[StoredFile]:
    """
    Lists every file under the storage root, recursively.

    Directories are walked but never returned. The listing is materialized once,
    so callers see the same order for the whole run.

    Raises:
        StorageRootError: If the root (or a directory below it) cannot be listed.
    """
    try:
        files = list(_walk(storage, ''))
    except OSError as e:
        raise StorageRootError(f"Cannot list storage root '{storage.path('')}': {e}") from e

    logger.info(f"Listed {len(files)} files in {storage.path('')}")
    return files


def delete_file(storage: Storage, key: str):
    """
    Deletes one file from the storage.

    Raises:
        MediaFileNotFound: If the file was already removed (e.g. by an earlier,
            interrupted run).
    """
    if not storage.exists(key):
        raise MediaFileNotFound(key)

    storage.delete(key)
    logger.debug(f"Deleted file {key}")
