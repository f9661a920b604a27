"""
Media purge: reconciles the files of a storage with the FileInfo table and the
catalog, then removes what is orphaned.

Two passes over one listing of the storage:
    1. files without a FileInfo row;
    2. files whose FileInfo row (in the scanned storage) is not referenced by
       any product or product model raw values.

Nothing is deleted unless the run is forced. A dry run prints and counts
exactly what a forced run would.
"""
import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .models import FileInfo
from .repositories import FileInfoRepository, ReferencingEntity, is_referenced
from .storage import MediaFileNotFound, StoredFile, delete_file, list_files

logger = logging.getLogger(__name__)


class DeleteOrder(str, enum.Enum):
    """Which half of an orphan record goes first in the second pass."""

    FILE_FIRST = 'file_first'  # A failure leaves at worst a record without its file
    RECORD_FIRST = 'record_first'  # A failure leaves at worst an untracked file


@dataclass
class PurgeResult:
    files: List[Tuple[StoredFile, Optional[FileInfo]]]
    dry_run: bool = True
    without_record: List[StoredFile] = field(default_factory=list)
    unreferenced: List[Tuple[StoredFile, FileInfo]] = field(default_factory=list)

    @property
    def without_record_count(self):
        return len(self.without_record)

    @property
    def unreferenced_count(self):
        return len(self.unreferenced)

    @property
    def total_count(self):
        return self.without_record_count + self.unreferenced_count


class MediaPurger:
    """
    Runs the two purge passes against one storage.

    Args:
        storage: Django storage to scan (see catalog.storage.get_storage).
        storage_alias: Alias of that storage. Only FileInfo rows with this
            alias are considered in the second pass.
        file_infos: Metadata lookup/delete access, FileInfoRepository by default.
        referencing_entities: Entity kinds searched for file keys.
        delete_order: Order of file and record deletion in the second pass.
        stdout: Optional writer (e.g. a management command's self.stdout) for
            progress lines. Lines are also logged at DEBUG level.
    """

    def __init__(
        self,
        storage,
        storage_alias,
        file_infos=None,
        referencing_entities=tuple(ReferencingEntity),
        delete_order=DeleteOrder.FILE_FIRST,
        stdout=None,
    ):
        self.storage = storage
        self.storage_alias = storage_alias
        self.file_infos = file_infos or FileInfoRepository()
        self.referencing_entities = tuple(referencing_entities)
        self.delete_order = DeleteOrder(delete_order)
        self.stdout = stdout

    def run(self, force=False) -> PurgeResult:
        self._write("Searching media files...")
        # Every file is looked up exactly once; both passes reuse these pairs
        files = [
            (stored_file, self.file_infos.find_by_key(stored_file.key))
            for stored_file in list_files(self.storage)
        ]
        self._write(f"Found {len(files)} media files")
        self._write("")

        result = PurgeResult(files=files, dry_run=not force)

        # --- Pass 1: files without a database entry ---
        self._write("Removing media files without database entry...")
        for stored_file, file_info in files:
            if file_info is not None:
                continue

            if force:
                self._delete_file(stored_file)
            result.without_record.append(stored_file)
            self._write(f'Removed file "{stored_file.path}"')

        self._write(f"Removed {result.without_record_count} files without database entry")
        self._write("")

        # --- Pass 2: files not linked to any product or product model ---
        self._write("Removing media files which are not linked to products anymore...")
        for stored_file, file_info in files:
            if file_info is None or file_info.storage != self.storage_alias:
                continue
            if is_referenced(file_info.key, self.referencing_entities):
                continue

            if force:
                self._delete_unreferenced(stored_file, file_info)
            result.unreferenced.append((stored_file, file_info))
            self._write(f'Removed file "{stored_file.path}"')

        self._write(f"Removed {result.unreferenced_count} files which are not linked to products anymore")
        self._write("")

        logger.info(
            "Media purge finished (dry_run=%s). Without record: %d, unreferenced: %d, total: %d",
            result.dry_run,
            result.without_record_count,
            result.unreferenced_count,
            result.total_count,
        )
        return result

    def _delete_file(self, stored_file):
        try:
            delete_file(self.storage, stored_file.key)
        except MediaFileNotFound:
            # Already gone, e.g. removed by an interrupted earlier run
            logger.warning(f"File {stored_file.path} was already removed from storage")

    def _delete_unreferenced(self, stored_file, file_info):
        if self.delete_order is DeleteOrder.FILE_FIRST:
            self._delete_file(stored_file)
            self.file_infos.delete(file_info)
        else:
            self.file_infos.delete(file_info)
            self._delete_file(stored_file)

    def _write(self, message):
        if message:
            logger.debug(message)
        if self.stdout is not None:
            self.stdout.write(message)
