from abc import ABC, abstractmethod
from typing import Any


class Authenticator(ABC):
    """
    Abstract base class for authentication providers of the upstream services.

    Concrete implementations return the authentication data expected by
    the target service, either as a header value or as an object that can
    be handed to ``requests`` directly.
    """

    @abstractmethod
    def get_authentication_header(self) -> str:
        """
        Returns the value for the HTTP `Authorization` header, e.g.
        ``"Token <token>"``. An empty string means no header is sent.
        """
        ...

    @abstractmethod
    def get_auth(self) -> Any:
        """
        Return authentication data in a library-specific format, such as
        ``requests``'s ``auth`` parameter.
        """
        ...
