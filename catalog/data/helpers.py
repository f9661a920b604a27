# Alias of the storage holding product and product model media. Used as the
# default storage of FileInfo rows and of the purge command.
CATALOG_STORAGE_ALIAS = 'catalogStorage'
