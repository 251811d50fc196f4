import logging
from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel, ValidationError
from requests import Response
from requests.exceptions import ConnectionError

from app.services.api.api_service import HttpService
from app.services.api.client_types import ClientTypes
from app.services.querying.exceptions import QueryFailedException

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class QueryBase:
    """
    Issues single requests to the upstream services and deserializes the JSON
    responses into typed models.
    """

    def __init__(self, clients: Dict[ClientTypes, HttpService]) -> None:
        self.__clients = clients

    def get(
        self,
        client_type: ClientTypes,
        url: str,
        model: Type[T],
        params: Dict[str, Any] | None = None,
    ) -> T:
        return self.__process("GET", client_type, url, model, params=params)

    def post(
        self,
        client_type: ClientTypes,
        url: str,
        body: Dict[str, Any],
        model: Type[T],
    ) -> T:
        return self.__process("POST", client_type, url, model, body=body)

    def patch(
        self,
        client_type: ClientTypes,
        url: str,
        body: Dict[str, Any],
        model: Type[T],
    ) -> T:
        return self.__process("PATCH", client_type, url, model, body=body)

    def client(self, client_type: ClientTypes) -> HttpService:
        if client_type not in self.__clients:
            raise ValueError(f"No HTTP client configured for {client_type.value}")
        return self.__clients[client_type]

    def __process(
        self,
        method: str,
        client_type: ClientTypes,
        url: str,
        model: Type[T],
        body: Dict[str, Any] | None = None,
        params: Dict[str, Any] | None = None,
    ) -> T:
        client = self.client(client_type)
        try:
            response = client.do_request(method, sub_route=url, json=body, params=params)
        except ConnectionError as e:
            raise QueryFailedException(
                url=url,
                body="",
                message=f"Could not reach {client_type.value}: {e}",
            )

        if response.status_code >= 400:
            logger.error(
                f"HTTP {method} to {url} failed with status {response.status_code}"
            )
            raise QueryFailedException(
                url=url,
                body=response.text,
                message=f"The {client_type.value} API responded with status {response.status_code}",
            )

        return self.__deserialize(response, url, model)

    @staticmethod
    def __deserialize(response: Response, url: str, model: Type[T]) -> T:
        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise QueryFailedException(
                url=url,
                body=response.text,
                message=f"The response could not be read as {model.__name__}: {e}",
            )
