import time
from typing import Any

import jwt

from app.services.api.authenticators.authenticator import Authenticator

_UUID_LENGTH = 36


class NotifyAuthenticator(Authenticator):
    """
    Authenticator for the NotifyNL API. The API key has the form
    "{key_name}-{service_id}-{secret}" and every request carries a short lived
    JWT signed with the secret.
    """
    def __init__(self, api_key: str) -> None:
        if len(api_key) < 2 * _UUID_LENGTH + 1:
            raise ValueError("The NotifyNL API key is too short, please fix in app.conf")
        self.__service_id = api_key[-(2 * _UUID_LENGTH + 1):-(_UUID_LENGTH + 1)]
        self.__secret = api_key[-_UUID_LENGTH:]

    def get_authentication_header(self) -> str:
        token = jwt.encode(
            {"iss": self.__service_id, "iat": int(time.time())},
            self.__secret,
            algorithm="HS256",
        )
        return f"Bearer {token}"

    def get_auth(self) -> Any:
        return None
