from unittest.mock import MagicMock

from collections.abc import Generator
from fastapi import FastAPI
from fastapi.testclient import TestClient
import inject
import pytest

from app.application import create_fastapi_app
from app.config import Config, ConfigTemplates, reset_config, set_config
from app.services.settings.whitelist import Whitelists
from tests.test_config import get_test_config
from tests.utils import make_query_context


@pytest.fixture
def test_config() -> Config:
    return get_test_config()


@pytest.fixture
def templates(test_config: Config) -> ConfigTemplates:
    return test_config.templates


@pytest.fixture
def whitelists(test_config: Config) -> Whitelists:
    return Whitelists(test_config.whitelist)


@pytest.fixture
def query_context() -> MagicMock:
    return make_query_context()


@pytest.fixture
def fastapi_app() -> Generator[FastAPI, None, None]:
    set_config(get_test_config())
    app = create_fastapi_app()
    yield app
    inject.clear()
    reset_config()


@pytest.fixture
def api_client(fastapi_app: FastAPI) -> TestClient:
    return TestClient(fastapi_app)
