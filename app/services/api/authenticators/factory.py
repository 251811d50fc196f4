from app.config import Config
from app.services.api.authenticators.authenticator import Authenticator
from app.services.api.authenticators.null_authenticator import NullAuthenticator
from app.services.api.authenticators.notify_authenticator import NotifyAuthenticator
from app.services.api.authenticators.token_authenticator import TokenAuthenticator
from app.services.api.client_types import ClientTypes


class AuthenticatorFactory:
    def __init__(self, config: Config) -> None:
        self.__config = config

    def create_authenticator(self, client_type: ClientTypes) -> Authenticator:
        auth = self.__config.authentication

        match client_type:
            case ClientTypes.OPENZAAK | ClientTypes.BESLUITEN:
                token, scheme = auth.openzaak_token, "Bearer"
            case ClientTypes.OPENKLANT | ClientTypes.CONTACTMOMENTEN:
                token, scheme = auth.openklant_token, "Token"
            case ClientTypes.OBJECTEN:
                token, scheme = auth.objecten_token, "Token"
            case ClientTypes.NOTIFY:
                if not self.__config.notify.api_key:
                    raise ValueError(
                        "notify api_key cannot be None, please fix in app.conf"
                    )
                return NotifyAuthenticator(api_key=self.__config.notify.api_key)
            case _:
                raise ValueError(
                    f"incorrect client type {client_type} for authenticator, please fix in app.conf"
                )

        if token is None or token == "":
            return NullAuthenticator()
        return TokenAuthenticator(token=token, scheme=scheme)
