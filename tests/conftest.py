import pytest

from textgate.config import get_settings
from textgate.errors import Err, ErrorCode, Ok


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Each test reads TEXTGATE_* from its own environment."""
    monkeypatch.delenv("TEXTGATE_LOG_REJECTIONS", raising=False)
    monkeypatch.delenv("TEXTGATE_VALIDATORS_FILE", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def log_rejections(monkeypatch):
    monkeypatch.setenv("TEXTGATE_LOG_REJECTIONS", "true")
    get_settings.cache_clear()


def assert_ok(result):
    assert isinstance(result, Ok), f"expected Ok, got {result!r}"
    return result.value


def assert_err(result, code: ErrorCode, message: str | None = None):
    assert isinstance(result, Err), f"expected Err({code.name}), got {result!r}"
    assert result.error.code is code, f"expected {code.name}, got {result.error.code.name} ({result.error.message})"
    if message is not None:
        assert result.error.message == message
    return result.error
