# admin.py
from django.contrib import admin
from .models import FileInfo, Product, ProductModel
from .tasks import purge_media_files_task


# Queues a dry-run purge of the whole catalog storage; results end up in the worker log.
# The selected rows are not used, the purge always scans every file.
@admin.action(description='Queue dry-run purge of the whole catalog storage (selection is ignored)')
def queue_media_purge(modeladmin, request, queryset):
    purge_media_files_task.delay(force=False)
    modeladmin.message_user(
        request,
        "Media purge of the whole catalog storage queued in safe mode. Check the worker log for results."
    )


#File info admin
@admin.register(FileInfo)
class FileInfoAdmin(admin.ModelAdmin):
    list_display = ('key', 'original_filename', 'mime_type', 'size', 'storage', 'created_at')
    list_filter = ('storage', 'mime_type')
    search_fields = ('key', 'original_filename')
    readonly_fields = ('created_at',)
    actions = [queue_media_purge]


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('identifier', 'updated_at')
    search_fields = ('identifier', 'raw_values')


@admin.register(ProductModel)
class ProductModelAdmin(admin.ModelAdmin):
    list_display = ('code', 'updated_at')
    search_fields = ('code', 'raw_values')
