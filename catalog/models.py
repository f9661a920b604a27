from django.db import models

# Default storage alias for new file infos
from .data.helpers import CATALOG_STORAGE_ALIAS



# ============================================
# File info model - one row per uploaded media file
# ============================================
class FileInfo(models.Model):
    # Storage-relative path of the file, e.g. "a/b/c/d/abcdef_image.jpg"
    key = models.CharField(max_length=255, unique=True)
    original_filename = models.CharField(max_length=255, blank=True)
    mime_type = models.CharField(max_length=255, blank=True)
    size = models.PositiveBigIntegerField(null=True, blank=True)
    extension = models.CharField(max_length=10, blank=True)
    hash = models.CharField(max_length=100, blank=True)
    storage = models.CharField(
        max_length=255,
        default=CATALOG_STORAGE_ALIAS,
        db_index=True,
        help_text="Alias of the storage the file lives in (see STORAGES)"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "file info"
        verbose_name_plural = "file infos"

    def __str__(self):
        return f"{self.key} ({self.storage})"



# ============================================
# Catalog entities
# ============================================
# raw_values holds the serialized attribute values of the entity. Media
# attributes embed the FileInfo key somewhere in that blob.
class Product(models.Model):
    identifier = models.CharField(max_length=255, unique=True)
    raw_values = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.identifier



class ProductModel(models.Model):
    code = models.CharField(max_length=255, unique=True)
    raw_values = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.code
