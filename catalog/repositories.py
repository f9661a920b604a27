import enum
import logging
import re

from django.db import transaction

from .models import FileInfo, Product, ProductModel

logger = logging.getLogger(__name__)



# --- Metadata lookup and record deletion ---
class FileInfoRepository:
    """
    Read/delete access to FileInfo rows for the purge.
    """

    def find_by_key(self, key):
        """
        Returns the FileInfo whose key is exactly `key`, or None.
        """
        return FileInfo.objects.filter(key=key).first()

    def delete(self, file_info):
        # Each record is committed on its own so an aborted run keeps what it already removed
        with transaction.atomic():
            file_info.delete()
        logger.debug(f"Deleted file info {file_info.key}")



# --- Entities that may embed a file key in their raw values ---
class ReferencingEntity(enum.Enum):
    PRODUCT = 'product'
    PRODUCT_MODEL = 'product_model'

    @property
    def model(self):
        return {
            ReferencingEntity.PRODUCT: Product,
            ReferencingEntity.PRODUCT_MODEL: ProductModel,
        }[self]

    def count_where_payload_contains(self, substring):
        # LIKE narrows the rows; the escaped regex keeps the match literal and
        # case-sensitive on SQLite too, where LIKE ignores ASCII case
        return self.model.objects.filter(
            raw_values__contains=substring,
            raw_values__regex=re.escape(substring),
        ).count()


def is_referenced(file_key, entities=tuple(ReferencingEntity)):
    """
    True if at least one entity of any given kind has `file_key` somewhere in
    its raw values. Literal, case-sensitive substring search; the payload is
    never parsed.
    """
    return any(entity.count_where_payload_contains(file_key) > 0 for entity in entities)
