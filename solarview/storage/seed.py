"""
Demo data for a fresh database: five clients, their installations and one installer report.
Dates are relative to the moment of seeding.
"""
from datetime import datetime, timedelta
from typing import Any, Dict, List

from solarview.core.logger import logger
from solarview.core.utils import utc_now
from solarview.storage.store import CLIENTS_KEY, INSTALLATIONS_KEY, DocumentStore, report_key

DEMO_CLIENTS: List[Dict[str, Any]] = [
    {
        "id": 1, "name": "Condomínio Sol Nascente", "clientType": "pessoa_juridica",
        "document": "12.345.678/0001-99", "email": "sindico@solnascente.com", "phone": "19987654321",
        "address": "Rua A, 123", "city": "Campinas", "state": "SP", "zipCode": "13000-001",
    },
    {
        "id": 2, "name": "Maria Silva", "clientType": "pessoa_fisica",
        "document": "123.456.789-00", "email": "maria.silva@email.com", "phone": "11912345678",
        "address": "Rua B, 456", "city": "São Paulo", "state": "SP", "zipCode": "01000-002",
    },
    {
        "id": 3, "name": "Supermercado Economia", "clientType": "pessoa_juridica",
        "document": "98.765.432/0001-11", "email": "contato@supereconomia.com", "phone": "1933334444",
        "address": "Av. C, 789", "city": "Valinhos", "state": "SP", "zipCode": "13270-003",
    },
    {
        "id": 4, "name": "João Pereira", "clientType": "pessoa_fisica",
        "document": "987.654.321-99", "email": "joao.pereira@email.com", "phone": "11988887777",
        "address": "Rua D, 101", "city": "Jundiaí", "state": "SP", "zipCode": "13201-004",
    },
    {
        "id": 5, "name": "Oficina Mecânica Veloz", "clientType": "pessoa_juridica",
        "document": "11.222.333/0001-44", "email": "veloz@oficina.com", "phone": "19977776666",
        "address": "Rua E, 202", "city": "Indaiatuba", "state": "SP", "zipCode": "13330-005",
    },
]

WEG_INVERTER = {
    "id": "inv1", "brand": "WEG", "model": "SIW500H", "serialNumber": "WEG123456",
    "warranty": "5 anos", "dataloggerId": "DTL9876",
}
HOYMILES_INVERTER = {
    "id": "inv2", "brand": "Hoymiles", "model": "MI-1500", "serialNumber": "HOY987654",
    "warranty": "12 anos", "dataloggerId": "DTU-W100",
}
JINKO_PANEL = {"id": "pan1", "brand": "Jinko Solar", "model": "Tiger Pro", "power": 550, "quantity": 40}
CANADIAN_PANEL = {"id": "pan2", "brand": "Canadian Solar", "model": "HiKu6", "power": 545, "quantity": 12}


def _event(event_id: str, when: datetime, event_type: str, description: str, attachments=None) -> Dict[str, Any]:
    return {
        "id": event_id,
        "date": when.isoformat(),
        "type": event_type,
        "description": description,
        "attachments": attachments or [],
    }


def _address(client_id: int) -> Dict[str, Any]:
    client = DEMO_CLIENTS[client_id - 1]
    return {
        "clientId": client["id"],
        "clientName": client["name"],
        "address": client["address"],
        "city": client["city"],
        "state": client["state"],
        "zipCode": client["zipCode"],
    }


def demo_installations(now: datetime) -> List[Dict[str, Any]]:
    def days(n: int) -> datetime:
        return now + timedelta(days=n)

    return [
        {
            "id": 1, "installationId": "INST-001", **_address(1),
            "installationType": "comercial", "utilityCompany": "CPFL",
            "protocolNumber": "987654321", "protocolDate": days(-10).isoformat(),
            "inverters": [WEG_INVERTER], "panels": [JINKO_PANEL],
            "projectStatus": "Aprovado", "homologationStatus": "Pendente", "status": "Agendado",
            "reportSubmitted": False, "scheduledDate": days(3).isoformat(),
            "events": [
                _event("4", days(-2), "Agendamento", "Visita técnica agendada com o síndico para a próxima semana."),
                _event("3", days(-4), "Projeto", "Projeto aprovado pela concessionária."),
                _event("2", days(-9), "Projeto", "Projeto enviado para análise da concessionária."),
                _event("1", days(-10), "Protocolo", "Protocolo 987654321 aberto na CPFL."),
            ],
            "documents": [
                {"name": "projeto_preliminar.pdf", "dataUrl": "#", "type": "application/pdf",
                 "date": days(-9).isoformat()},
            ],
            "archived": False,
        },
        {
            "id": 2, "installationId": "INST-002", **_address(2),
            "installationType": "residencial", "utilityCompany": "Enel",
            "protocolNumber": "123456789", "protocolDate": days(-15).isoformat(),
            "inverters": [HOYMILES_INVERTER], "panels": [CANADIAN_PANEL],
            "projectStatus": "Aprovado", "homologationStatus": "Aprovado", "status": "Concluído",
            "reportSubmitted": True,
            "events": [
                _event("7", days(0), "Homologação", "Instalação homologada pela concessionária."),
                _event("6", days(-1), "Conclusão", "Instalação finalizada e comissionada com sucesso."),
                _event("5", days(-3), "Problema",
                       "Atraso na entrega do inversor. Resolvido com o fornecedor no mesmo dia.",
                       [{"name": "nota_fiscal_inversor.pdf", "dataUrl": "#"}]),
                _event("4", days(-5), "Agendamento", "Instalação agendada."),
                _event("3", days(-8), "Projeto", "Projeto Aprovado."),
                _event("2", days(-14), "Projeto", "Projeto enviado para análise."),
                _event("1", days(-15), "Protocolo", "Protocolo 123456789 aberto na Enel."),
            ],
            "documents": [
                {"name": "art_assinada.pdf", "dataUrl": "#", "type": "application/pdf",
                 "date": days(-14).isoformat()},
                {"name": "contrato_servico.pdf", "dataUrl": "#", "type": "application/pdf",
                 "date": days(-16).isoformat()},
            ],
            "archived": False,
        },
        {
            "id": 3, "installationId": "INST-003", **_address(3),
            "installationType": "comercial", "utilityCompany": "CPFL",
            "protocolNumber": "555555555", "protocolDate": days(-12).isoformat(),
            "inverters": [], "panels": [],
            "projectStatus": "Reprovado", "homologationStatus": "Pendente", "status": "Cancelado",
            "reportSubmitted": False,
            "events": [
                _event("1", days(-10), "Nota", "Cliente solicitou cancelamento por motivos financeiros. Arquivar."),
            ],
            "documents": [],
            "archived": True,
        },
        {
            "id": 4, "installationId": "INST-004", **_address(4),
            "installationType": "residencial", "utilityCompany": "CPFL",
            "protocolNumber": "", "protocolDate": "",
            "inverters": [], "panels": [],
            "projectStatus": "Não Enviado", "homologationStatus": "Pendente", "status": "Pendente",
            "reportSubmitted": False, "events": [], "documents": [], "archived": False,
        },
        {
            "id": 5, "installationId": "INST-005", **_address(5),
            "installationType": "comercial", "utilityCompany": "CPFL",
            "protocolNumber": "333222111", "protocolDate": days(-5).isoformat(),
            "inverters": [], "panels": [],
            "projectStatus": "Enviado para Análise", "homologationStatus": "Pendente", "status": "Pendente",
            "reportSubmitted": False, "events": [], "documents": [], "archived": False,
        },
    ]


def sample_report() -> Dict[str, Any]:
    """Installer report of the completed demo installation."""
    return {
        "clientName": "Maria Silva",
        "inverters": [{**HOYMILES_INVERTER, "serialNumber": "HOY987654-UPDATED", "dataloggerId": "DTU-W100-UPDATED"}],
        "panels": [CANADIAN_PANEL],
        "strings": [{"voltage": 450, "plates": 6}, {"voltage": 452, "plates": 6}],
        "phase1Neutro": 220,
        "phase2Neutro": 219,
        "phase1phase2": 380,
        "phaseTerra": 220,
        "neutroTerra": 0.5,
        "cableMeterToBreaker": "16mm",
        "cableBreakerToInverter": "10mm",
        "generalBreaker": "63A",
        "inverterBreaker": "50A",
        "dataloggerConnected": True,
        "observations": (
            "Instalação realizada com sucesso, sem intercorrências. "
            "Cliente orientado sobre o monitoramento pelo aplicativo."
        ),
        "photo_uploads": [
            {"dataUrl": "https://placehold.co/600x400.png", "annotation": "Visão geral dos painéis solares no telhado."},
            {"dataUrl": "https://placehold.co/600x400.png", "annotation": "Inversor instalado na parede da garagem."},
            {"dataUrl": "https://placehold.co/600x400.png", "annotation": "Teste de goteiras após a instalação."},
            {"dataUrl": "https://placehold.co/600x400.png", "annotation": "Fachada da residência."},
        ],
        "installationVideoDataUrl": "",
    }


def seed_demo_data(store: DocumentStore, now: datetime = None) -> bool:
    """Writes the demo collections when the store has no installations yet. Returns True if seeded."""
    if store.exists(INSTALLATIONS_KEY):
        logger.info("Seed skipped: installations already present")
        return False

    now = now or utc_now()
    if not store.exists(CLIENTS_KEY):
        store.save(CLIENTS_KEY, DEMO_CLIENTS)
    store.save(INSTALLATIONS_KEY, demo_installations(now))
    report = sample_report()
    store.save(report_key(report["clientName"]), report)

    logger.info(f"Demo data seeded: {len(DEMO_CLIENTS)} clients")
    return True
