from enum import Enum


class ClientTypes(str, Enum):
    """
    The upstream services this application talks to. Each one gets its own
    HTTP client with its own base URL and credentials.
    """
    OPENZAAK = "openzaak"
    BESLUITEN = "besluiten"
    OPENKLANT = "openklant"
    CONTACTMOMENTEN = "contactmomenten"
    OBJECTEN = "objecten"
    NOTIFY = "notify"
