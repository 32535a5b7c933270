"""
Pytest configuration for Qt-based tests.

Provides fixtures for proper Qt object cleanup between tests to prevent segfaults,
and keeps settings files out of the user's real config directory.
"""
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication

import audiototext.core.settings.settings as settings_module
from fakes import FakeTask


@pytest.fixture(autouse=True)
def cleanup_qt_objects(qtbot, request):
    """
    Auto-cleanup fixture that runs after each test to ensure Qt objects are
    properly destroyed before the next test starts.

    This prevents segmentation faults caused by dangling Qt object references.
    """
    yield

    # Process any pending events
    app = QApplication.instance()
    if app:
        app.processEvents()


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path, monkeypatch):
    """Point settings persistence at a temporary directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setattr(settings_module, "get_config_dir", lambda: config_dir)
    monkeypatch.setattr(settings_module, "_settings_instance", None)
    return config_dir


@pytest.fixture
def audio_file(tmp_path):
    path = tmp_path / "speech.m4a"
    path.write_bytes(b"\x00" * 64)
    return str(path)


@pytest.fixture
def fake_tasks():
    """Task factory recording every FakeTask it creates."""
    created = []

    def factory(task_id, recognizer, request):
        task = FakeTask(task_id, recognizer, request)
        created.append(task)
        return task

    factory.created = created
    return factory
