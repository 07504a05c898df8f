import pytest

BASE_URL = "https://cms.example"


@pytest.fixture()
def drupal_base_url(monkeypatch: pytest.MonkeyPatch) -> str:
    monkeypatch.setenv("DRUPAL_BASE_URL", BASE_URL)
    return BASE_URL


@pytest.fixture()
def no_drupal_base_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DRUPAL_BASE_URL", raising=False)
