from io import StringIO

import pytest
from django.core.files.storage import FileSystemStorage
from django.core.management.base import OutputWrapper


def put_file(root, key, content=b"image-bytes"):
    """Creates `key` (a storage-relative path) under `root` and returns its path."""
    path = root / key
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path


@pytest.fixture
def storage_root(tmp_path):
    root = tmp_path / "catalog"
    root.mkdir()
    return root


@pytest.fixture
def storage(storage_root):
    return FileSystemStorage(location=str(storage_root))


@pytest.fixture
def catalog_storage(settings, storage_root):
    """Points the catalogStorage alias at the temporary storage root."""
    settings.STORAGES = {
        **settings.STORAGES,
        "catalogStorage": {
            "BACKEND": "django.core.files.storage.FileSystemStorage",
            "OPTIONS": {"location": str(storage_root)},
        },
    }
    return storage_root


@pytest.fixture
def output():
    buffer = StringIO()
    return buffer, OutputWrapper(buffer)
