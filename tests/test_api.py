"""
API tests.
Run the FastAPI app against an in-memory document store seeded with the demo data,
a fixed-clock engine and a fake summarizer.
"""
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from solarview.core.exceptions import ExternalServiceError
from solarview.main import app
from solarview.reports.summarizer import ReportSummarizer, get_summarizer
from solarview.storage.seed import seed_demo_data
from solarview.storage.store import InMemoryDocumentStore, get_document_store
from solarview.workflow.engine import WorkflowEngine, get_workflow_engine
from tests.conftest import NOW


class StubSummarizer(ReportSummarizer):

    def __init__(self, fail: bool = False):
        self.fail = fail

    def summarize(self, installer_report: str, protocol_number: str) -> str:
        if self.fail:
            raise ExternalServiceError("model offline")
        return f"Relatório final do protocolo {protocol_number}."


@pytest.fixture
def summarizer() -> StubSummarizer:
    return StubSummarizer()


@pytest.fixture
def client(summarizer: StubSummarizer) -> Generator[TestClient, None, None]:
    store = InMemoryDocumentStore()
    seed_demo_data(store, now=NOW)
    engine = WorkflowEngine(clock=lambda: NOW, auto_schedule_days=7)

    app.dependency_overrides[get_document_store] = lambda: store
    app.dependency_overrides[get_workflow_engine] = lambda: engine
    app.dependency_overrides[get_summarizer] = lambda: summarizer
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health_check(client: TestClient):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_correlation_id_is_echoed(client: TestClient):
    response = client.get("/api-info", headers={"X-Correlation-ID": "corr-123"})

    assert response.headers["X-Correlation-ID"] == "corr-123"
    assert "X-Process-Time" in response.headers


def test_list_installations_with_filters(client: TestClient):
    assert len(client.get("/installations/").json()) == 5

    response = client.get("/installations/", params={"archived": "false", "search": "jundi"})
    assert [i["id"] for i in response.json()] == [4]

    response = client.get("/installations/", params={"status": "Pendente"})
    assert [i["installationId"] for i in response.json()] == ["INST-004", "INST-005"]


def test_report_flag_comes_from_stored_report(client: TestClient):
    assert client.get("/installations/2").json()["reportSubmitted"] is True
    assert client.get("/installations/1").json()["reportSubmitted"] is False


def test_get_unknown_installation(client: TestClient):
    response = client.get("/installations/99")

    assert response.status_code == 404
    assert "correlation_id" in response.json()


def test_register_installation(client: TestClient):
    response = client.post("/installations/", json={
        "client_id": 4,
        "installation_type": "residencial",
        "utility_company": "CPFL",
        "protocol_number": "444",
    })

    assert response.status_code == 201
    body = response.json()
    assert body["id"] == 6
    assert body["installationId"] == "INST-006"
    assert body["clientName"] == "João Pereira"
    assert body["events"][0]["description"] == "Protocolo 444 aberto na CPFL."


def test_register_installation_for_unknown_client(client: TestClient):
    response = client.post("/installations/", json={
        "client_id": 99, "installation_type": "residencial", "utility_company": "CPFL"
    })

    assert response.status_code == 404


def test_register_installation_validation(client: TestClient):
    response = client.post("/installations/", json={
        "client_id": 4, "installation_type": "industrial", "utility_company": "CPFL"
    })

    assert response.status_code == 422


def test_transition_auto_schedules_and_persists(client: TestClient):
    response = client.post("/installations/4/transition", json={"track": "status", "value": "Agendado"})

    assert response.status_code == 200
    events = client.get("/installations/4").json()["events"]
    assert [e["type"] for e in events] == ["Nota", "Agendamento"]
    assert events[0]["description"] == 'Status da Instalação alterado de "Pendente" para "Agendado".'


def test_transition_to_current_value_changes_nothing(client: TestClient):
    before = client.get("/installations/1").json()

    response = client.post("/installations/1/transition", json={"track": "status", "value": "Agendado"})

    assert response.status_code == 200
    assert client.get("/installations/1").json() == before


def test_transition_rejects_invalid_report_label(client: TestClient):
    response = client.post("/installations/1/transition", json={"track": "reportSubmitted", "value": "Sim"})

    assert response.status_code == 400


def test_transition_rejects_unknown_track(client: TestClient):
    response = client.post("/installations/1/transition", json={"track": "warranty", "value": "Ativa"})

    assert response.status_code == 422


def test_schedule_requires_approved_project(client: TestClient):
    response = client.post("/installations/4/schedule", json={"date": "2025-03-10", "time": "09:00"})

    assert response.status_code == 400


def test_schedule_installation(client: TestClient):
    response = client.post(
        "/installations/1/schedule",
        json={"date": "2025-03-10", "time": "09:00", "notes": "Portaria avisada"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "Agendado"
    assert body["events"][0]["description"] == (
        "Instalação agendada para 10 de março, 2025 às 09:00.\n\nObservações: Portaria avisada"
    )


def test_schedule_rejects_bad_time(client: TestClient):
    response = client.post("/installations/1/schedule", json={"date": "2025-03-10", "time": "9h"})

    assert response.status_code == 422


def test_manual_event_in_future_rejected(client: TestClient):
    response = client.post("/installations/1/events", json={
        "type": "Vistoria", "description": "Vistoria", "date": "2025-03-06T10:00:00Z"
    })

    assert response.status_code == 400


def test_manual_event(client: TestClient):
    response = client.post("/installations/4/events", json={
        "type": "Problema", "description": "Telhado com infiltração.", "date": "2025-03-04T10:00:00Z",
        "attachments": [{"name": "foto.jpg", "dataUrl": "data:image/jpeg;base64,AAA"}]
    })

    assert response.status_code == 201
    event = response.json()["events"][0]
    assert event["type"] == "Problema"
    assert event["attachments"][0]["dataUrl"] == "data:image/jpeg;base64,AAA"


def test_manual_event_without_offset_is_brasilia_time(client: TestClient):
    # 15:00 in Brasília is 18:00 UTC, after the fixed clock
    response = client.post("/installations/4/events", json={
        "type": "Vistoria", "description": "Vistoria", "date": "2025-03-05T15:00:00"
    })
    assert response.status_code == 400

    response = client.post("/installations/4/events", json={
        "type": "Vistoria", "description": "Vistoria", "date": "2025-03-05T14:00:00"
    })
    assert response.status_code == 201
    assert response.json()["events"][0]["date"].startswith("2025-03-05T17:00:00")


def test_protocol_update_scenario(client: TestClient):
    response = client.put("/installations/4/protocol", json={"protocol_number": "12345"})

    body = response.json()
    assert body["protocolNumber"] == "12345"
    assert body["protocolDate"] is not None
    assert body["events"][0]["description"] == 'Número de protocolo alterado de "N/A" para "12345".'


def test_archive_removes_from_board(client: TestClient):
    client.post("/installations/4/archive")

    board = client.get("/board/status").json()
    placed = [i["id"] for column in board["columns"] for i in column["installations"]]
    assert sorted(placed) == [1, 2, 5]
    assert client.get("/installations/4").json()["archived"] is True


def test_board_columns(client: TestClient):
    response = client.get("/board/projectStatus")

    assert response.status_code == 200
    board = response.json()
    assert board["label"] == "Status do Projeto"
    assert [c["id"] for c in board["columns"]] == ["Não Enviado", "Enviado para Análise", "Aprovado", "Reprovado"]
    # Archived INST-003 is the only "Reprovado"
    assert board["columns"][3]["installations"] == []


def test_move_card_onto_another_card(client: TestClient):
    response = client.post("/board/projectStatus/move", json={"installation_id": 4, "over_installation_id": 1})

    assert response.status_code == 200
    assert response.json()["projectStatus"] == "Aprovado"
    assert client.get("/installations/4").json()["projectStatus"] == "Aprovado"


def test_move_card_unknown_installation(client: TestClient):
    response = client.post("/board/status/move", json={"installation_id": 99, "column_id": "Agendado"})

    assert response.status_code == 404


def test_status_catalog_endpoints(client: TestClient):
    response = client.post("/status-catalog/homologation", json={"label": "Em Vistoria"})
    assert response.status_code == 201
    assert response.json()[-1] == "Em Vistoria"

    response = client.post("/status-catalog/homologation", json={"label": "Em Vistoria"})
    assert response.status_code == 400

    response = client.put("/status-catalog/homologation/order", json={"order": ["Pendente"]})
    assert response.status_code == 400

    response = client.delete("/status-catalog/homologation/Em Vistoria")
    assert response.status_code == 200
    assert client.get("/status-catalog/homologation").json() == ["Pendente", "Aprovado", "Reprovado"]


def test_clients_crud(client: TestClient):
    listing = client.get("/clients/").json()
    assert listing["total"] == 5
    assert listing["clients"][0]["installationCount"] == 1

    response = client.post("/clients/", json={
        "name": "Ana Souza", "clientType": "pessoa_fisica", "document": "111.222.333-44",
        "email": "", "address": "Rua F, 303", "city": "Sumaré", "state": "SP", "zipCode": "13170-006"
    })
    assert response.status_code == 201
    assert response.json()["id"] == 6

    assert client.delete("/clients/6").status_code == 204
    assert client.delete("/clients/6").status_code == 404


def test_equipment_search_and_transfer(client: TestClient):
    response = client.get("/equipment/search", params={"serial": "weg123456"})
    assert response.status_code == 200
    assert response.json()["installation_id"] == 1

    response = client.post("/equipment/transfer", json={
        "source_installation_id": 1, "destination_installation_id": 4, "inverter_id": "inv1"
    })
    assert response.status_code == 200
    assert response.json()["destination_inverter_count"] == 1

    assert client.get("/installations/1").json()["inverters"] == []
    assert client.get("/equipment/search", params={"serial": "WEG123456"}).json()["installation_id"] == 4


def test_equipment_transfer_to_same_installation(client: TestClient):
    response = client.post("/equipment/transfer", json={
        "source_installation_id": 1, "destination_installation_id": 1, "inverter_id": "inv1"
    })

    assert response.status_code == 400


def test_inverter_added_by_update_can_be_transferred(client: TestClient):
    response = client.patch("/installations/4", json={
        "inverters": [{"brand": "Growatt", "model": "MIN 5000", "serialNumber": "GRW1"}]
    })
    assert response.status_code == 200
    inverter_id = response.json()["inverters"][0]["id"]
    assert inverter_id

    response = client.post("/equipment/transfer", json={
        "source_installation_id": 4, "destination_installation_id": 5, "inverter_id": inverter_id
    })

    assert response.status_code == 200
    assert client.get("/installations/4").json()["inverters"] == []
    assert [i["id"] for i in client.get("/installations/5").json()["inverters"]] == [inverter_id]


def test_submit_report_flags_installation(client: TestClient):
    response = client.post("/reports/", json={"clientName": "João Pereira", "dataloggerConnected": False})

    assert response.status_code == 201
    assert response.json()["updated_installations"] == [4]
    assert client.get("/installations/4").json()["reportSubmitted"] is True
    assert sorted(client.get("/reports/").json()) == ["João Pereira", "Maria Silva"]


def test_report_board_move_persists_and_repeats_without_new_note(client: TestClient):
    before = len(client.get("/installations/1").json()["events"])
    move = {"installation_id": 1, "column_id": "Enviado"}

    assert client.post("/board/reportSubmitted/move", json=move).status_code == 200
    assert client.post("/board/reportSubmitted/move", json=move).status_code == 200

    installation = client.get("/installations/1").json()
    assert installation["reportSubmitted"] is True
    assert len(installation["events"]) == before + 1


def test_delete_report_clears_installation_flag(client: TestClient):
    assert client.delete("/reports/Maria Silva").status_code == 204

    assert client.get("/installations/2").json()["reportSubmitted"] is False


def test_final_report(client: TestClient):
    response = client.post("/reports/installations/2/final", json={})

    assert response.status_code == 200
    assert response.json()["final_report"] == "Relatório final do protocolo 123456789."


def test_final_report_without_installer_report(client: TestClient):
    response = client.post("/reports/installations/4/final", json={})

    assert response.status_code == 404


def test_final_report_service_failure(client: TestClient, summarizer: StubSummarizer):
    summarizer.fail = True

    response = client.post("/reports/installations/2/final", json={"protocol_number": "1"})

    assert response.status_code == 502


def test_calendar(client: TestClient):
    entries = client.get("/calendar/").json()

    assert [e["title"] for e in entries] == ["Condomínio Sol Nascente"]


def test_tracking_page(client: TestClient):
    response = client.get("/tracking/2")

    assert response.status_code == 200
    assert [m["state"] for m in response.json()["milestones"]] == [
        "completed", "completed", "pending", "completed", "completed"
    ]
    assert client.get("/tracking/99").status_code == 404
