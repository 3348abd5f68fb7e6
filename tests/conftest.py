import pytest

from settings import get_settings


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Each test starts from defaults, without a currency symbol."""
    monkeypatch.setenv("SPLITLY_CURRENCY_SYMBOL", "")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client():
    from app import app

    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client
