"""Tests for the purge_media_files management command."""

from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from catalog.models import FileInfo, Product
from tests.conftest import put_file

pytestmark = pytest.mark.django_db


def run_command(*args):
    out = StringIO()
    call_command("purge_media_files", *args, stdout=out)
    return out.getvalue()


def populate(root):
    put_file(root, "a.jpg")
    put_file(root, "b.jpg")
    put_file(root, "c.jpg")
    FileInfo.objects.create(key="b.jpg")
    FileInfo.objects.create(key="c.jpg")
    Product.objects.create(identifier="shirt", raw_values='{"picture": "c.jpg"}')


def test_safe_mode_by_default(catalog_storage) -> None:
    populate(catalog_storage)

    output = run_command()

    assert "Command running in safe mode. Use --force to delete files." in output
    assert "Removed 1 files without database entry" in output
    assert "Removed 1 files which are not linked to products anymore" in output
    assert "Removed 2 files" in output
    assert sorted(p.name for p in catalog_storage.iterdir()) == ["a.jpg", "b.jpg", "c.jpg"]
    assert FileInfo.objects.count() == 2


def test_force_deletes(catalog_storage) -> None:
    populate(catalog_storage)

    output = run_command("--force")

    assert "safe mode" not in output
    assert "Removed 2 files" in output
    assert sorted(p.name for p in catalog_storage.iterdir()) == ["c.jpg"]
    assert list(FileInfo.objects.values_list("key", flat=True)) == ["c.jpg"]


def test_short_force_flag(catalog_storage) -> None:
    put_file(catalog_storage, "a.jpg")

    output = run_command("-f")

    assert f'Removed file "{catalog_storage / "a.jpg"}"' in output
    assert not (catalog_storage / "a.jpg").exists()


def test_second_forced_run_is_a_no_op(catalog_storage) -> None:
    populate(catalog_storage)
    run_command("--force")

    output = run_command("--force")

    assert "Removed 0 files" in output


def test_record_first_order(catalog_storage) -> None:
    put_file(catalog_storage, "b.jpg")
    FileInfo.objects.create(key="b.jpg")

    run_command("--force", "--delete-order", "record_first")

    assert not (catalog_storage / "b.jpg").exists()
    assert not FileInfo.objects.exists()


def test_unknown_storage_alias(catalog_storage) -> None:
    with pytest.raises(CommandError, match="Unknown storage alias"):
        run_command("--storage", "assetStorage")


def test_missing_storage_root(settings, tmp_path) -> None:
    settings.STORAGES = {
        **settings.STORAGES,
        "catalogStorage": {
            "BACKEND": "django.core.files.storage.FileSystemStorage",
            "OPTIONS": {"location": str(tmp_path / "missing")},
        },
    }

    with pytest.raises(CommandError, match="Cannot list storage root"):
        run_command("--force")
