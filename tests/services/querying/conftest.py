from unittest.mock import MagicMock

import pytest

from app.services.api.client_types import ClientTypes
from app.services.querying.query_base import QueryBase


@pytest.fixture()
def mock_http_services() -> dict[ClientTypes, MagicMock]:
    return {client_type: MagicMock() for client_type in ClientTypes}


@pytest.fixture()
def query_base(mock_http_services: dict[ClientTypes, MagicMock]) -> QueryBase:
    return QueryBase(mock_http_services)  # type: ignore
