import logging
from typing import Iterable, Set, Tuple

from app.config import ConfigWhitelist
from app.services.querying.uri_utils import extract_guid

logger = logging.getLogger(__name__)

WILDCARD = "*"


class WhitelistIds:
    """
    The whitelisted case type identifiers of a single scenario. The identifiers
    are stored in a set shared by all scenarios, keyed by the name of the
    setting they were configured under.
    """

    def __init__(self, setting_name: str, ids: Iterable[str], shared: Set[Tuple[str, str]]) -> None:
        self.setting_name = setting_name
        self.__shared = shared

        cleaned = [value.strip() for value in ids if value.strip()]
        self.count = len(cleaned)
        self.__everything_allowed = WILDCARD in cleaned
        if not self.__everything_allowed:
            shared.update((setting_name, value) for value in cleaned)

    def is_allowed(self, case_type_id: str | None) -> bool:
        if self.__everything_allowed:
            return True
        if case_type_id is None or case_type_id.strip() == "":
            return False
        return (self.setting_name, case_type_id.strip()) in self.__shared

    def __str__(self) -> str:
        return self.setting_name


class Whitelists:
    """
    All whitelists and allow flags, built once from the configuration and not
    changed afterwards.
    """

    def __init__(self, config: ConfigWhitelist) -> None:
        self.__ids: Set[Tuple[str, str]] = set()

        self.zaak_create = WhitelistIds(
            "whitelist.zaak_create_ids", config.zaak_create_ids, self.__ids
        )
        self.zaak_update = WhitelistIds(
            "whitelist.zaak_update_ids", config.zaak_update_ids, self.__ids
        )
        self.zaak_close = WhitelistIds(
            "whitelist.zaak_close_ids", config.zaak_close_ids, self.__ids
        )
        self.task_assigned = WhitelistIds(
            "whitelist.task_assigned_ids", config.task_assigned_ids, self.__ids
        )
        self.decision_made = WhitelistIds(
            "whitelist.decision_made_ids", config.decision_made_ids, self.__ids
        )

        self.message_allowed = config.message_allowed
        self.task_object_type_uuid = extract_guid(config.task_object_type_uuid)
        self.message_object_type_uuid = extract_guid(config.message_object_type_uuid)
        self.decision_infoobject_type_uuids = frozenset(
            extract_guid(uuid) for uuid in config.decision_infoobject_type_uuids if extract_guid(uuid)
        )

        logger.info(
            f"Loaded whitelists with {len(self.__ids)} case type identifiers, messages allowed: {self.message_allowed}"
        )
