from unittest.mock import MagicMock

import pytest
from requests.exceptions import ConnectionError

from app.models.zaak.dto import Case
from app.services.api.client_types import ClientTypes
from app.services.querying.exceptions import QueryFailedException
from app.services.querying.query_base import QueryBase
from tests.utils import CASE_TYPE_URI, CASE_URI, mock_response

CASE_BODY = {
    "url": CASE_URI,
    "identificatie": "ZAAK-1",
    "omschrijving": "Test case",
    "zaaktype": CASE_TYPE_URI,
    "registratiedatum": "2024-04-30",
    "unexpected": "ignored",
}


def test_get_should_deserialize_response(
    query_base: QueryBase, mock_http_services: dict[ClientTypes, MagicMock]
) -> None:
    client = mock_http_services[ClientTypes.OPENZAAK]
    client.do_request.return_value = mock_response(200, CASE_BODY)

    case = query_base.get(ClientTypes.OPENZAAK, CASE_URI, Case, params={"a": "b"})

    assert case.identification == "ZAAK-1"
    assert case.name == "Test case"
    client.do_request.assert_called_once_with("GET", sub_route=CASE_URI, json=None, params={"a": "b"})


def test_post_should_send_body(
    query_base: QueryBase, mock_http_services: dict[ClientTypes, MagicMock]
) -> None:
    client = mock_http_services[ClientTypes.OPENZAAK]
    client.do_request.return_value = mock_response(201, CASE_BODY)

    query_base.post(ClientTypes.OPENZAAK, "zaken", {"x": 1}, Case)

    client.do_request.assert_called_once_with("POST", sub_route="zaken", json={"x": 1}, params=None)


def test_patch_should_send_body(
    query_base: QueryBase, mock_http_services: dict[ClientTypes, MagicMock]
) -> None:
    client = mock_http_services[ClientTypes.OPENZAAK]
    client.do_request.return_value = mock_response(200, CASE_BODY)

    case = query_base.patch(ClientTypes.OPENZAAK, CASE_URI, {"omschrijving": "Test case"}, Case)

    assert case.name == "Test case"
    client.do_request.assert_called_once_with(
        "PATCH", sub_route=CASE_URI, json={"omschrijving": "Test case"}, params=None
    )


def test_get_should_fail_on_error_status(
    query_base: QueryBase, mock_http_services: dict[ClientTypes, MagicMock]
) -> None:
    mock_http_services[ClientTypes.OPENZAAK].do_request.return_value = mock_response(
        404, None, text="not found"
    )

    with pytest.raises(QueryFailedException) as e:
        query_base.get(ClientTypes.OPENZAAK, CASE_URI, Case)

    assert e.value.url == CASE_URI
    assert e.value.body == "not found"
    assert "404" in str(e.value)


def test_get_should_fail_on_unreadable_body(
    query_base: QueryBase, mock_http_services: dict[ClientTypes, MagicMock]
) -> None:
    mock_http_services[ClientTypes.OPENZAAK].do_request.return_value = mock_response(
        200, {"url": CASE_URI}
    )

    with pytest.raises(QueryFailedException) as e:
        query_base.get(ClientTypes.OPENZAAK, CASE_URI, Case)

    assert "Case" in e.value.message


def test_get_should_fail_on_invalid_json(
    query_base: QueryBase, mock_http_services: dict[ClientTypes, MagicMock]
) -> None:
    response = mock_response(200)
    response.json.side_effect = ValueError("no json")
    mock_http_services[ClientTypes.OPENZAAK].do_request.return_value = response

    with pytest.raises(QueryFailedException):
        query_base.get(ClientTypes.OPENZAAK, CASE_URI, Case)


def test_get_should_fail_when_service_is_unreachable(
    query_base: QueryBase, mock_http_services: dict[ClientTypes, MagicMock]
) -> None:
    mock_http_services[ClientTypes.OPENZAAK].do_request.side_effect = ConnectionError("down")

    with pytest.raises(QueryFailedException) as e:
        query_base.get(ClientTypes.OPENZAAK, CASE_URI, Case)

    assert "Could not reach" in e.value.message


def test_client_should_fail_for_unknown_client_type() -> None:
    query_base = QueryBase({})

    with pytest.raises(ValueError):
        query_base.client(ClientTypes.NOTIFY)
