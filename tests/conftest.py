import pytest

from .helpers import RecordingSink


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Keep config discovery away from the developer's real files."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    monkeypatch.delenv("BRAILSPIN_CONFIG_PATH", raising=False)
    monkeypatch.delenv("BRAILSPIN_INTERVAL", raising=False)
    return work
