import pytest

from commitpresets.observers import RecordingObserver


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the developer's shell settings out of the tests."""
    for name in ("SILENT", "COMMIT_PRESETS_PRESET", "COMMIT_PRESETS_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def recorder():
    """Observer that collects diagnostics instead of printing them."""
    return RecordingObserver()


@pytest.fixture
def commit_msg_file(tmp_path):
    """Write a commit message the way git does for a commit-msg hook."""
    def _write(content, name="COMMIT_EDITMSG"):
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content)
        return path

    return _write
