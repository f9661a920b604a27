from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from catalog.purge import DeleteOrder, MediaPurger
from catalog.storage import StorageRootError, get_storage

import logging
logger = logging.getLogger(__name__)

# Example CLI usage: python manage.py purge_media_files (dry run) | python manage.py purge_media_files --force

class Command(BaseCommand):
    help = 'Remove unused product media files'

    def add_arguments(self, parser):
        """
        1. --force / -f: Actually delete files and file infos. Without it the
           command only reports what it would remove.

        2. --storage: Storage alias to purge. Defaults to MEDIA_PURGE_STORAGE_ALIAS.

        3. --delete-order: For orphan file infos, delete the file first
           (default) or the database record first.
        """
        parser.add_argument(
            '-f', '--force',
            action='store_true',
            help='Force deletion'
        )
        parser.add_argument(
            '--storage',
            type=str,
            default=settings.MEDIA_PURGE_STORAGE_ALIAS,
            help='Storage alias to purge (default: %(default)s)'
        )
        parser.add_argument(
            '--delete-order',
            choices=[order.value for order in DeleteOrder],
            default=settings.MEDIA_PURGE_DELETE_ORDER,
            help='Deletion order for files with an unused database entry (default: %(default)s)'
        )

    def handle(self, *args, **options):
        force = options['force']
        storage_alias = options['storage']

        if not force:
            self.stdout.write(self.style.WARNING('Command running in safe mode. Use --force to delete files.'))

        try:
            purger = MediaPurger(
                storage=get_storage(storage_alias),
                storage_alias=storage_alias,
                delete_order=options['delete_order'],
                stdout=self.stdout,
            )
            result = purger.run(force=force)
        except StorageRootError as e:
            logger.error(f"Media purge aborted: {e}")
            raise CommandError(str(e))

        self.stdout.write(self.style.SUCCESS(f'Removed {result.total_count} files'))
