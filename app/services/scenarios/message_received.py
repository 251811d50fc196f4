from typing import Any, Dict

from app.config import ConfigTemplates
from app.models.klant.dto import CommonPartyData
from app.models.notification.dto import NotificationEvent
from app.models.notify.dto import NotifyMethods
from app.models.objecten.dto import IdTypes, MessageObject
from app.services.querying.query_context import QueryContext
from app.services.scenarios.base_scenario import BaseScenario, PreparedData, party_personalization
from app.services.scenarios.exceptions import AbortedNotifyingException
from app.services.scenarios.scenario_types import ScenarioTypes
from app.services.settings.whitelist import Whitelists


class MessageReceivedScenario(BaseScenario):
    """
    A message was placed in the personal inbox of a citizen or an
    organization. There is no case involved, so only the global
    "message allowed" flag applies.
    """

    scenario_type = ScenarioTypes.MESSAGE_RECEIVED

    def __init__(
        self,
        query_context: QueryContext,
        whitelists: Whitelists,
        templates: ConfigTemplates,
    ) -> None:
        super().__init__(query_context, whitelists, templates)
        self.message: MessageObject | None = None

    def prepare_data(self, event: NotificationEvent) -> PreparedData:
        if not self.whitelists.message_allowed:
            raise AbortedNotifyingException(
                "Notifications about received messages are disabled in whitelist.message_allowed"
            )

        self.message = self.query_context.get_message()
        identification = self.message.record.data.identification
        if identification.type not in (IdTypes.BSN, IdTypes.KVK):
            raise AbortedNotifyingException(
                f"The message {self.message.uri} is not addressed to a person or an organization"
            )

        party = self.query_context.get_party_data(identification.value, identification.type)
        return PreparedData(party=party)

    def get_template_id(self, method: NotifyMethods) -> str | None:
        return getattr(self.templates, f"{method.value}_message_received", None)

    def get_personalization(self, party: CommonPartyData) -> Dict[str, Any]:
        if self.message is None:
            raise ValueError("The message has not been prepared")

        data = self.message.record.data
        return {
            "message.onderwerp": data.subject,
            "message.handelingsperspectief": data.actions_perspective,
            **party_personalization(party),
        }
