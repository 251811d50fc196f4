from typing import Any
from app.services.api.authenticators.authenticator import Authenticator


class TokenAuthenticator(Authenticator):
    """
    Authenticator for static API tokens, as used by the OpenKlant and Objecten APIs
    ("Token <token>") and by services accepting a pre-generated JWT ("Bearer <token>").
    """
    def __init__(self, token: str, scheme: str = "Token") -> None:
        self.__token = token
        self.__scheme = scheme

    def get_authentication_header(self) -> str:
        return f"{self.__scheme} {self.__token}"

    def get_auth(self) -> Any:
        return None
