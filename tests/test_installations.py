"""
Unit tests for the installation record store and registration flow.
"""
import pytest

from solarview.catalog.schemas import StatusConfig
from solarview.clients.schemas import Client
from solarview.core.exceptions import NotFoundError
from solarview.installations.repository import InstallationRepository
from solarview.installations.schemas import (
    InstallationCreate,
    InstallationFilters,
    InstallationUpdate,
    Inverter,
    Panel,
)
from solarview.installations.service import (
    create_installation,
    delete_installation,
    format_installation_code,
    search_installations,
    update_installation,
)
from solarview.storage.store import INSTALLATIONS_KEY, report_key
from solarview.workflow.engine import WorkflowEngine
from tests.conftest import NOW, make_installation

CLIENT = Client(
    id=4,
    name="João Pereira",
    client_type="pessoa_fisica",
    document="987.654.321-99",
    address="Rua D, 101",
    city="Jundiaí",
    state="SP",
    zip_code="13201-004",
)


@pytest.mark.parametrize("installation_id, expected", [
    (1, "INST-001"),
    (42, "INST-042"),
    (1234, "INST-1234"),
])
def test_installation_code(installation_id: int, expected: str):
    assert format_installation_code(installation_id) == expected


def test_create_with_protocol_opens_timeline(repository: InstallationRepository, engine: WorkflowEngine):
    data = InstallationCreate(
        client_id=4, installation_type="residencial", utility_company="CPFL", protocol_number="777"
    )

    installation = create_installation(repository, engine, CLIENT, data, StatusConfig())

    assert installation.id == 1
    assert installation.installation_id == "INST-001"
    assert installation.city == "Jundiaí"
    assert installation.status == "Pendente"
    assert installation.project_status == "Não Enviado"
    assert installation.protocol_date == NOW
    assert len(installation.events) == 1
    assert installation.events[0].type == "Protocolo"
    assert installation.events[0].description == "Protocolo 777 aberto na CPFL."
    assert repository.find(1) == installation


def test_create_without_protocol(repository: InstallationRepository, engine: WorkflowEngine):
    data = InstallationCreate(client_id=4, installation_type="comercial", utility_company="CPFL")

    installation = create_installation(repository, engine, CLIENT, data, StatusConfig())

    assert installation.protocol_number is None
    assert installation.protocol_date is None
    assert installation.events == []


def test_create_uses_first_catalog_entries(repository: InstallationRepository, engine: WorkflowEngine):
    catalog = StatusConfig(installation=["Novo", "Agendado"], project=["Rascunho"], homologation=["Aguardando"])
    data = InstallationCreate(client_id=4, installation_type="comercial", utility_company="CPFL")

    installation = create_installation(repository, engine, CLIENT, data, catalog)

    assert (installation.status, installation.project_status, installation.homologation_status) == (
        "Novo", "Rascunho", "Aguardando"
    )


def test_ids_are_sequential(repository: InstallationRepository, engine: WorkflowEngine):
    repository.save_all([make_installation(id=7, installation_id="INST-007")])
    data = InstallationCreate(client_id=4, installation_type="comercial", utility_company="CPFL")

    installation = create_installation(repository, engine, CLIENT, data, StatusConfig())

    assert installation.id == 8
    assert installation.installation_id == "INST-008"


def test_find_missing_installation(repository: InstallationRepository):
    with pytest.raises(NotFoundError):
        repository.find(99)


def test_documents_keep_camel_case_keys(repository: InstallationRepository, store):
    repository.save_all([make_installation(protocol_number="1")])

    stored = store.load(INSTALLATIONS_KEY)[0]

    assert stored["installationId"] == "INST-001"
    assert stored["projectStatus"] == "Não Enviado"
    assert "project_status" not in stored


def test_legacy_empty_dates_are_read_as_none(store, repository: InstallationRepository):
    document = make_installation().to_document()
    document.update({"protocolNumber": "", "protocolDate": "", "scheduledDate": ""})
    store.save(INSTALLATIONS_KEY, [document])

    installation = repository.find(1)

    assert installation.protocol_date is None
    assert installation.scheduled_date is None


def test_report_flag_is_read_as_stored(repository: InstallationRepository, store):
    repository.save_all([
        make_installation(id=1, client_name="Maria Silva", report_submitted=False),
        make_installation(id=2, client_name="João Pereira", report_submitted=True),
    ])
    store.save(report_key("Maria Silva"), {"clientName": "Maria Silva"})

    flags = {inst.id: inst.report_submitted for inst in repository.load()}

    assert flags == {1: False, 2: True}


def test_set_report_flag_for_client(repository: InstallationRepository):
    repository.save_all([
        make_installation(id=1, client_name="Maria Silva"),
        make_installation(id=2, client_name="João Pereira"),
        make_installation(id=3, client_name="Maria Silva", report_submitted=True),
    ])

    assert repository.set_report_flag("Maria Silva", True) == [1, 3]
    assert repository.set_report_flag("Ana Souza", True) == []

    flags = {inst.id: inst.report_submitted for inst in repository.load()}
    assert flags == {1: True, 2: False, 3: True}


def test_equipment_without_id_gets_one():
    first = Inverter(brand="Growatt", model="MIN 5000", serial_number="GRW1")
    second = Inverter.model_validate({"id": None, "brand": "Growatt", "model": "MIN 5000", "serialNumber": "GRW2"})
    panel = Panel.model_validate({"id": "", "brand": "Jinko Solar", "model": "Tiger Pro", "power": 550, "quantity": 1})

    assert first.id and second.id and panel.id
    assert first.id != second.id
    assert Inverter.model_validate(first.to_document()).id == first.id


def test_update_assigns_ids_to_new_inverters(repository: InstallationRepository):
    repository.save_all([make_installation()])
    data = InstallationUpdate.model_validate(
        {"inverters": [{"brand": "Growatt", "model": "MIN 5000", "serialNumber": "GRW1"}]}
    )

    updated = update_installation(repository, 1, data)

    assert updated.inverters[0].id
    assert repository.find(1).inverters[0].id == updated.inverters[0].id


def test_update_descriptive_fields(repository: InstallationRepository):
    repository.save_all([make_installation(status="Agendado")])
    data = InstallationUpdate(
        utility_company="CPFL",
        inverters=[Inverter(id="inv9", brand="Fronius", model="Primo", serial_number="FR-1")],
    )

    updated = update_installation(repository, 1, data)

    assert updated.utility_company == "CPFL"
    assert updated.inverters[0].serial_number == "FR-1"
    assert updated.status == "Agendado"
    assert updated.city == "São Paulo"
    assert repository.find(1) == updated


def test_delete_removes_report(repository: InstallationRepository, store):
    repository.save_all([
        make_installation(id=1, report_submitted=True),
        make_installation(id=2, report_submitted=True),
    ])
    store.save(report_key("Maria Silva"), {"clientName": "Maria Silva"})

    removed = delete_installation(repository, 1)

    assert removed.id == 1
    assert [inst.id for inst in repository.load()] == [2]
    assert not store.exists(report_key("Maria Silva"))
    assert repository.find(2).report_submitted is False


def test_replace_unknown_installation(repository: InstallationRepository):
    with pytest.raises(NotFoundError):
        repository.replace(make_installation(id=3))


@pytest.fixture
def table():
    return [
        make_installation(id=1, client_name="Condomínio Sol Nascente", city="Campinas", status="Agendado",
                          installation_type="comercial"),
        make_installation(id=2, client_name="Maria Silva", city="São Paulo", status="Concluído"),
        make_installation(id=3, client_name="Supermercado Economia", city="Valinhos", status="Cancelado",
                          installation_type="comercial", archived=True),
    ]


@pytest.mark.parametrize("filters, expected", [
    ({}, [1, 2, 3]),
    ({"search": "maria"}, [2]),
    ({"search": "CAMPINAS"}, [1]),
    ({"status": "Cancelado"}, [3]),
    ({"installation_type": "comercial"}, [1, 3]),
    ({"archived": False}, [1, 2]),
    ({"search": "a", "installation_type": "comercial", "archived": False}, [1]),
])
def test_search_installations(table, filters, expected):
    result = search_installations(table, InstallationFilters(**filters))

    assert [i.id for i in result] == expected
