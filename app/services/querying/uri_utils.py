import re
from typing import Callable
from uuid import UUID

from app.services.querying.exceptions import QueryContextException

_GUID_PATTERN = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)


def extract_guid(uri: str | None) -> str:
    """
    Returns the last GUID found in the given URI, in lower case. An empty
    string is returned when there is none.
    """
    if not uri:
        return ""
    matches = _GUID_PATTERN.findall(uri)
    if not matches:
        return ""
    return str(UUID(matches[-1]))


def _contains(uri: str | None, segment: str) -> bool:
    return uri is not None and segment in uri


def is_case_uri(uri: str | None) -> bool:
    return _contains(uri, "/zaken/")


def is_status_type_uri(uri: str | None) -> bool:
    return _contains(uri, "/statustypen/")


def is_decision_uri(uri: str | None) -> bool:
    return _contains(uri, "/besluiten/")


def is_decision_type_uri(uri: str | None) -> bool:
    return _contains(uri, "/besluittypen/")


def is_decision_resource_uri(uri: str | None) -> bool:
    return _contains(uri, "/besluitinformatieobjecten/")


def is_info_object_uri(uri: str | None) -> bool:
    return _contains(uri, "/enkelvoudiginformatieobjecten/")


def is_object_uri(uri: str | None) -> bool:
    return _contains(uri, "/objects/")


def is_party_uri(uri: str | None) -> bool:
    return _contains(uri, "/partijen/")


def ensure_uri(uri: str | None, check: Callable[[str | None], bool], kind: str) -> str:
    """
    Returns the URI when it passes the given shape check, raises a QueryContextException otherwise.
    """
    if uri is None or uri == "":
        raise QueryContextException(f"The {kind} URI could not be determined from the available context")
    if not check(uri):
        raise QueryContextException(f"The given URI is not a {kind} URI: {uri}")
    return uri

