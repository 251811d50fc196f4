from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List
from unittest.mock import MagicMock

from app.models.klant.dto import CommonPartyData, DistributionChannels, LetterAddress
from app.models.notification.dto import NotificationEvent
from app.models.zaak.dto import Case, CaseStatus, CaseStatuses, CaseType
from app.services.querying.query_context import QueryContext
from tests.test_config import MESSAGE_OBJECT_TYPE_UUID, TASK_OBJECT_TYPE_UUID

CASE_URI = "http://openzaak.test/zaken/api/v1/zaken/5c1d4e0a-7a6f-4a7e-9b8e-2f6a3c9d1e01"
STATUS_URI = "http://openzaak.test/zaken/api/v1/statussen/8d7b7c1e-3c1f-4f55-8a0e-6f3b9b1a2c02"
STATUS_TYPE_URI = "http://openzaak.test/catalogi/api/v1/statustypen/0f9c6c6a-8d3e-4d8f-9b7a-1c2d3e4f5a03"
CASE_TYPE_URI = "http://openzaak.test/catalogi/api/v1/zaaktypen/a1b2c3d4-e5f6-4a7b-8c9d-0e1f2a3b4c04"
OBJECT_URI = "http://objecten.test/api/v2/objects/b2c3d4e5-f6a7-4b8c-9d0e-1f2a3b4c5d05"
DECISION_URI = "http://openzaak.test/besluiten/api/v1/besluiten/c3d4e5f6-a7b8-4c9d-8e0f-2a3b4c5d6e06"
DECISION_RESOURCE_URI = (
    "http://openzaak.test/besluiten/api/v1/besluitinformatieobjecten/d4e5f6a7-b8c9-4d0e-9f1a-3b4c5d6e7f07"
)
PARTY_URI = "http://openklant.test/klantinteracties/api/v1/partijen/e5f6a7b8-c9d0-4e1f-8a2b-4c5d6e7f8a08"


def make_case_event(**overrides: Any) -> NotificationEvent:
    data: Dict[str, Any] = {
        "actie": "create",
        "kanaal": "zaken",
        "resource": "status",
        "kenmerken": {
            "zaaktype": CASE_TYPE_URI,
            "bronorganisatie": "286130270",
            "vertrouwelijkheidaanduiding": "openbaar",
        },
        "hoofdObject": CASE_URI,
        "resourceUrl": STATUS_URI,
        "aanmaakdatum": "2024-05-01T10:00:00Z",
    }
    data.update(overrides)
    return NotificationEvent.model_validate(data)


def make_object_event(object_type_uuid: str = TASK_OBJECT_TYPE_UUID) -> NotificationEvent:
    return NotificationEvent.model_validate(
        {
            "actie": "create",
            "kanaal": "objecten",
            "resource": "object",
            "kenmerken": {
                "objectType": f"http://objecttypen.test/api/v2/objecttypes/{object_type_uuid}",
            },
            "hoofdObject": OBJECT_URI,
            "resourceUrl": OBJECT_URI,
            "aanmaakdatum": "2024-05-01T10:00:00Z",
        }
    )


def make_message_event() -> NotificationEvent:
    return make_object_event(MESSAGE_OBJECT_TYPE_UUID)


def make_decision_event() -> NotificationEvent:
    return NotificationEvent.model_validate(
        {
            "actie": "create",
            "kanaal": "besluiten",
            "resource": "besluit",
            "kenmerken": {
                "besluittype": "http://openzaak.test/catalogi/api/v1/besluittypen/f6a7b8c9-d0e1-4f2a-9b3c-5d6e7f8a9b09",
                "verantwoordelijkeOrganisatie": "286130270",
            },
            "hoofdObject": DECISION_URI,
            "resourceUrl": DECISION_RESOURCE_URI,
            "aanmaakdatum": "2024-05-01T10:00:00Z",
        }
    )


def make_case(name: str = "Test case", identification: str = "ZAAK-1") -> Case:
    return Case(
        uri=CASE_URI,
        identification=identification,
        name=name,
        case_type_uri=CASE_TYPE_URI,
        registration_date="2024-04-30",
    )


def make_case_type(
    identification: str = "ZT-CREATE",
    is_final_status: bool = False,
    is_notification_expected: bool = True,
    name: str = "In behandeling",
) -> CaseType:
    return CaseType(
        uri=STATUS_TYPE_URI,
        name=name,
        description="behandeling",
        identification=identification,
        is_final_status=is_final_status,
        is_notification_expected=is_notification_expected,
    )


def make_case_statuses(count: int) -> CaseStatuses:
    start = datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
    results: List[CaseStatus] = [
        CaseStatus(
            uri=f"http://openzaak.test/zaken/api/v1/statussen/{index}",
            type_uri=STATUS_TYPE_URI,
            created=start + timedelta(hours=index),
        )
        for index in range(count)
    ]
    return CaseStatuses(count=count, results=results)


def make_party(
    channel: DistributionChannels = DistributionChannels.EMAIL,
    email_address: str = "alice@example.com",
    telephone_number: str = "",
    name: str = "Alice",
    letter_address: LetterAddress | None = None,
) -> CommonPartyData:
    return CommonPartyData(
        uri=PARTY_URI,
        name=name,
        surname_prefix="van",
        surname="Wonderland",
        distribution_channel=channel,
        email_address=email_address,
        telephone_number=telephone_number,
        letter_address=letter_address,
    )


def make_query_context() -> MagicMock:
    """
    Query context with every accessor mocked, returning a regular case by default.
    """
    query_context = MagicMock(spec=QueryContext)
    query_context.get_case_statuses.return_value = make_case_statuses(1)
    query_context.get_last_case_type.return_value = make_case_type()
    query_context.get_case.return_value = make_case()
    query_context.get_bsn_number.return_value = "999993653"
    query_context.get_party_data.return_value = make_party()
    return query_context


def mock_response(status_code: int = 200, body: Any = None, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body
    response.text = text
    return response
