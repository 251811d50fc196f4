from typing import Any, Dict, List

from app.models.klant.dto import CommonPartyData
from app.models.notification.dto import NotificationEvent
from app.models.notify.dto import NotifyData, NotifyMethods
from app.services.scenarios.base_scenario import BaseScenario, PreparedData
from app.services.scenarios.exceptions import ScenarioNotImplementedException
from app.services.scenarios.scenario_types import ScenarioTypes


class NotImplementedScenario(BaseScenario):
    """
    Fallback for events which do not match any supported scenario. Every
    operation fails, so these events never disappear without a trace.
    """

    scenario_type = ScenarioTypes.NOT_IMPLEMENTED

    def try_get_data(self, event: NotificationEvent) -> List[NotifyData]:
        raise ScenarioNotImplementedException()

    def prepare_data(self, event: NotificationEvent) -> PreparedData:
        raise ScenarioNotImplementedException()

    def get_template_id(self, method: NotifyMethods) -> str | None:
        raise ScenarioNotImplementedException()

    def get_personalization(self, party: CommonPartyData) -> Dict[str, Any]:
        raise ScenarioNotImplementedException()
