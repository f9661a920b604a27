"""Tests for the file info admin purge action."""

from unittest.mock import MagicMock, patch

import pytest

from catalog.admin import queue_media_purge
from catalog.models import FileInfo

pytestmark = pytest.mark.django_db


def test_action_says_it_covers_the_whole_storage() -> None:
    assert "whole catalog storage" in queue_media_purge.short_description
    assert "selection is ignored" in queue_media_purge.short_description


def test_action_queues_dry_run_regardless_of_selection() -> None:
    FileInfo.objects.create(key="a.jpg")
    modeladmin = MagicMock()
    request = MagicMock()

    with patch("catalog.admin.purge_media_files_task") as task:
        queue_media_purge(modeladmin, request, FileInfo.objects.none())

    task.delay.assert_called_once_with(force=False)
    message = modeladmin.message_user.call_args.args[1]
    assert "whole catalog storage" in message
