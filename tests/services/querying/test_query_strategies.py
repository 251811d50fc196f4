from unittest.mock import MagicMock

import pytest

from app.config import ConfigVariables
from app.models.besluit.dto import DecisionResource, DecisionResources
from app.models.klant.dto import (
    Citizen,
    CitizenResults,
    DistributionChannels,
    LetterAddress,
    PartyResults,
)
from app.models.objecten.dto import GenericObject, IdTypes, TaskObject, TaskStatuses
from app.models.zaak.dto import CaseRoles, CaseStatuses, CaseType
from app.services.api.client_types import ClientTypes
from app.services.contact.channel_resolver import ContactChannelResolver, NoDigitalAddressException
from app.services.querying.exceptions import QueryContextException, QueryFailedException
from app.services.querying.query_base import QueryBase
from app.services.querying.query_context import DataQueryService
from app.services.querying.strategies.besluiten import QueryBesluitenV1
from app.services.querying.strategies.klant import QueryKlantV1, QueryKlantV2
from app.services.querying.strategies.objecten import QueryObjectenV2
from app.services.querying.strategies.zaak import QueryZaakV1
from tests.test_config import MESSAGE_OBJECT_TYPE_UUID, get_test_config
from tests.utils import (
    CASE_URI,
    DECISION_RESOURCE_URI,
    DECISION_URI,
    OBJECT_URI,
    make_case_event,
    make_case_statuses,
    make_decision_event,
    make_object_event,
)

ZAAK_BASE = "http://openzaak.test/zaken/api/v1"
BESLUITEN_BASE = "http://openzaak.test/besluiten/api/v1"
KLANT_BASE = "http://openklant.test/klantinteracties/api/v1"
INFO_OBJECT_URI = (
    "http://openzaak.test/documenten/api/v1/enkelvoudiginformatieobjecten/1f2e3d4c-5b6a-4978-8a9b-0c1d2e3f4a10"
)


@pytest.fixture()
def query_base() -> MagicMock:
    return MagicMock(spec=QueryBase)


def make_zaak(query_base: MagicMock, **event_overrides: str) -> QueryZaakV1:
    return QueryZaakV1(
        query_base=query_base,
        event=make_case_event(**event_overrides),
        base_url=ZAAK_BASE,
        initiator_role="initiator",
        subject_type="natuurlijk_persoon",
    )


def test_zaak_should_query_statuses_of_event_case(query_base: MagicMock) -> None:
    query_base.get.return_value = make_case_statuses(2)

    statuses = make_zaak(query_base).get_case_statuses()

    assert statuses.count == 2
    query_base.get.assert_called_once_with(
        ClientTypes.OPENZAAK, f"{ZAAK_BASE}/statussen", CaseStatuses, params={"zaak": CASE_URI}
    )


def test_zaak_should_fail_without_case_context(query_base: MagicMock) -> None:
    zaak = make_zaak(query_base, hoofdObject=OBJECT_URI)

    with pytest.raises(QueryContextException):
        zaak.get_case()

    query_base.get.assert_not_called()


def test_zaak_should_fail_on_case_without_statuses(query_base: MagicMock) -> None:
    with pytest.raises(QueryFailedException):
        make_zaak(query_base).get_last_case_type(CaseStatuses(count=0))


def test_zaak_should_query_type_of_last_status(query_base: MagicMock) -> None:
    statuses = make_case_statuses(3)
    query_base.get.return_value = CaseType(zaaktypeIdentificatie="ZT-UPDATE")

    case_type = make_zaak(query_base).get_last_case_type(statuses)

    assert case_type.identification == "ZT-UPDATE"
    query_base.get.assert_called_once_with(
        ClientTypes.OPENZAAK, statuses.results[-1].type_uri, CaseType
    )


def test_zaak_should_return_empty_bsn_for_unidentified_initiator(query_base: MagicMock) -> None:
    query_base.get.return_value = CaseRoles.model_validate(
        {"count": 1, "results": [{"omschrijvingGeneriek": "initiator"}]}
    )

    assert make_zaak(query_base).get_bsn_number(CASE_URI) == ""


def test_zaak_should_return_bsn_of_initiator(query_base: MagicMock) -> None:
    query_base.get.return_value = CaseRoles.model_validate(
        {
            "count": 2,
            "results": [
                {"omschrijvingGeneriek": "belanghebbende", "betrokkeneIdentificatie": {"inpBsn": "111"}},
                {"omschrijvingGeneriek": "initiator", "betrokkeneIdentificatie": {"inpBsn": "999993653"}},
            ],
        }
    )

    assert make_zaak(query_base).get_bsn_number(CASE_URI) == "999993653"
    assert query_base.get.call_args.kwargs["params"] == {
        "zaak": CASE_URI,
        "omschrijvingGeneriek": "initiator",
        "betrokkeneType": "natuurlijk_persoon",
    }


def test_zaak_should_fail_on_ambiguous_initiator(query_base: MagicMock) -> None:
    role = {"omschrijvingGeneriek": "initiator", "betrokkeneIdentificatie": {"inpBsn": "1"}}
    query_base.get.return_value = CaseRoles.model_validate({"count": 2, "results": [role, role]})

    with pytest.raises(QueryFailedException):
        make_zaak(query_base).get_case_role(CASE_URI)


def test_besluiten_should_use_resource_url_of_event(query_base: MagicMock) -> None:
    besluiten = QueryBesluitenV1(query_base, make_decision_event(), BESLUITEN_BASE)

    besluiten.get_decision_resource()

    query_base.get.assert_called_once_with(
        ClientTypes.BESLUITEN, DECISION_RESOURCE_URI, DecisionResource
    )


def test_besluiten_should_fall_back_to_first_document(query_base: MagicMock) -> None:
    event = make_decision_event().model_copy(update={"resource_uri": DECISION_URI})
    query_base.get.return_value = DecisionResources.model_validate(
        [{"url": DECISION_RESOURCE_URI, "informatieobject": INFO_OBJECT_URI, "besluit": DECISION_URI}]
    )

    resource = QueryBesluitenV1(query_base, event, BESLUITEN_BASE).get_decision_resource()

    assert resource.info_object_uri == INFO_OBJECT_URI
    query_base.get.assert_called_once_with(
        ClientTypes.BESLUITEN,
        f"{BESLUITEN_BASE}/besluitinformatieobjecten",
        DecisionResources,
        params={"besluit": DECISION_URI},
    )


def test_besluiten_should_fail_on_decision_without_documents(query_base: MagicMock) -> None:
    event = make_decision_event().model_copy(update={"resource_uri": DECISION_URI})
    query_base.get.return_value = DecisionResources.model_validate([])

    with pytest.raises(QueryFailedException):
        QueryBesluitenV1(query_base, event, BESLUITEN_BASE).get_decision_resource()


def test_besluiten_should_reject_non_info_object_uri(query_base: MagicMock) -> None:
    besluiten = QueryBesluitenV1(query_base, make_decision_event(), BESLUITEN_BASE)

    with pytest.raises(QueryContextException):
        besluiten.get_info_object(DECISION_URI)


def test_objecten_should_normalize_task(query_base: MagicMock) -> None:
    query_base.get.return_value = TaskObject.model_validate(
        {
            "url": OBJECT_URI,
            "record": {
                "data": {
                    "zaak": CASE_URI,
                    "title": "Upload documents",
                    "status": "open",
                    "identificatie": {"type": "bsn", "value": "999993653"},
                }
            },
        }
    )

    task = QueryObjectenV2(query_base, make_object_event()).get_task()

    assert task.uri == OBJECT_URI
    assert task.case_uri == CASE_URI
    assert task.status == TaskStatuses.OPEN
    assert task.identification.type == IdTypes.BSN


def test_klant_v1_should_query_by_bsn(query_base: MagicMock) -> None:
    query_base.get.return_value = CitizenResults.model_validate(
        {"count": 1, "results": [{"url": "k1", "voornaam": "Alice", "emailadres": "alice@example.com"}]}
    )

    party = QueryKlantV1(query_base, KLANT_BASE).get_party_data("999993653")

    assert party.name == "Alice"
    assert party.distribution_channel == DistributionChannels.EMAIL
    query_base.get.assert_called_once_with(
        ClientTypes.OPENKLANT,
        f"{KLANT_BASE}/klanten",
        CitizenResults,
        params={"subjectNatuurlijkPersoon__inpBsn": "999993653"},
    )


def test_klant_v1_should_fail_without_results(query_base: MagicMock) -> None:
    query_base.get.return_value = CitizenResults(count=0)

    with pytest.raises(QueryFailedException):
        QueryKlantV1(query_base, KLANT_BASE).get_party_data("12345678", IdTypes.KVK)


@pytest.mark.parametrize(
    "citizen, expected",
    [
        (Citizen(emailadres="a@b.nl", telefoonnummer="0612345678"), DistributionChannels.BOTH),
        (Citizen(emailadres="a@b.nl"), DistributionChannels.EMAIL),
        (Citizen(telefoonnummer="0612345678"), DistributionChannels.SMS),
        (Citizen(adres=LetterAddress(straatnaam="Dorpsstraat")), DistributionChannels.LETTER),
    ],
)
def test_klant_v1_should_determine_channel(citizen: Citizen, expected: DistributionChannels) -> None:
    assert QueryKlantV1.determine_channel(citizen) == expected


def test_klant_v1_should_fail_without_contact_details() -> None:
    with pytest.raises(NoDigitalAddressException):
        QueryKlantV1.determine_channel(Citizen())


def test_klant_should_require_identification(query_base: MagicMock) -> None:
    with pytest.raises(QueryContextException):
        QueryKlantV1(query_base, KLANT_BASE).get_party_data("")


def test_klant_v2_should_resolve_party(query_base: MagicMock) -> None:
    query_base.get.return_value = PartyResults.model_validate(
        {
            "count": 1,
            "results": [
                {
                    "url": "p1",
                    "partijIdentificatie": {"contactnaam": {"voornaam": "Alice"}},
                    "_expand": {
                        "digitaleAdressen": [
                            {"uuid": "a1", "adres": "0612345678", "soortDigitaalAdres": "telefoonnummer"},
                            {"uuid": "a2", "adres": "alice@example.com", "soortDigitaalAdres": "email"},
                        ]
                    },
                }
            ],
        }
    )
    klant = QueryKlantV2(
        query_base, KLANT_BASE, ContactChannelResolver("email", "telefoon"), "bsn"
    )

    party = klant.get_party_data("12345678", IdTypes.KVK, "ZAAK-1")

    assert party.uri == "p1"
    assert party.name == "Alice"
    assert party.distribution_channel == DistributionChannels.EMAIL
    assert party.email_address == "alice@example.com"
    assert query_base.get.call_args.kwargs["params"] == {
        "partijIdentificator__codeSoortObjectId": "kvk_nummer",
        "partijIdentificator__objectId": "12345678",
        "expand": "digitaleAdressen",
    }


@pytest.mark.parametrize("version, expected", [(1, "klanten"), (2, "partijen")])
def test_data_query_service_should_pick_openklant_version(version: int, expected: str) -> None:
    config = get_test_config()
    config.zgw.openklant_version = version
    query_base = MagicMock(spec=QueryBase)
    query_base.get.side_effect = QueryFailedException(url="", body="", message="stop")
    service = DataQueryService(query_base, config.zgw, ConfigVariables())

    context = service.from_event(make_case_event())
    with pytest.raises(QueryFailedException):
        context.get_party_data("999993653")

    assert query_base.get.call_args.args[1].endswith(expected)


def test_objecten_should_create_message_object(query_base: MagicMock) -> None:
    query_base.post.return_value = GenericObject.model_validate({"url": OBJECT_URI})
    objecten = QueryObjectenV2(
        query_base,
        make_decision_event(),
        base_url="http://objecten.test/api/v2",
        object_types_url="http://objecttypen.test/api/v2",
        message_object_type_uuid=MESSAGE_OBJECT_TYPE_UUID,
        message_object_type_version=2,
    )

    created = objecten.create_message_object({"onderwerp": "Besluit"})

    assert created.uri == OBJECT_URI
    client_type, url, body, model = query_base.post.call_args.args
    assert client_type == ClientTypes.OBJECTEN
    assert url == "http://objecten.test/api/v2/objects"
    assert model is GenericObject
    assert body["type"] == f"http://objecttypen.test/api/v2/objecttypes/{MESSAGE_OBJECT_TYPE_UUID}"
    assert body["record"]["typeVersion"] == 2
    assert body["record"]["data"] == {"onderwerp": "Besluit"}


def test_objecten_should_require_message_object_type(query_base: MagicMock) -> None:
    with pytest.raises(QueryContextException):
        QueryObjectenV2(query_base, make_decision_event()).create_message_object({})

    query_base.post.assert_not_called()


def test_objecten_should_fail_without_object_uri(query_base: MagicMock) -> None:
    event = make_object_event().model_copy(update={"resource_uri": "", "main_object_uri": CASE_URI})

    with pytest.raises(QueryContextException):
        QueryObjectenV2(query_base, event).get_message()
