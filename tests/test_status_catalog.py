"""
Unit tests for the status catalog.
"""
import pytest
from pydantic import ValidationError

from solarview.catalog.schemas import DEFAULT_STATUS_CONFIG, StatusCategory, StatusConfig
from solarview.catalog.service import StatusCatalog
from solarview.core.exceptions import InvalidInputError
from solarview.storage.store import STATUS_CONFIG_KEY


@pytest.fixture
def catalog(store) -> StatusCatalog:
    return StatusCatalog(store)


def test_defaults_when_nothing_saved(catalog: StatusCatalog):
    assert catalog.list_statuses(StatusCategory.INSTALLATION) == DEFAULT_STATUS_CONFIG["installation"]
    assert catalog.list_statuses(StatusCategory.PROJECT) == [
        "Não Enviado", "Enviado para Análise", "Aprovado", "Reprovado"
    ]
    assert catalog.list_statuses(StatusCategory.HOMOLOGATION) == ["Pendente", "Aprovado", "Reprovado"]


def test_add_status_appends_and_persists(catalog: StatusCatalog, store):
    labels = catalog.add_status(StatusCategory.HOMOLOGATION, "Em Vistoria")

    assert labels[-1] == "Em Vistoria"
    assert store.load(STATUS_CONFIG_KEY)["homologation"][-1] == "Em Vistoria"
    # Other categories untouched
    assert catalog.list_statuses(StatusCategory.PROJECT) == DEFAULT_STATUS_CONFIG["project"]


@pytest.mark.parametrize("label", ["", "   ", "Pendente"])
def test_add_status_rejects_blank_or_duplicate(catalog: StatusCatalog, label: str):
    with pytest.raises(InvalidInputError):
        catalog.add_status(StatusCategory.INSTALLATION, label)


def test_duplicate_check_is_case_sensitive(catalog: StatusCatalog):
    labels = catalog.add_status(StatusCategory.INSTALLATION, "pendente")

    assert "pendente" in labels and "Pendente" in labels


def test_rename_status_in_place(catalog: StatusCatalog):
    labels = catalog.rename_status(StatusCategory.PROJECT, "Enviado para Análise", "Em Análise")

    assert labels == ["Não Enviado", "Em Análise", "Aprovado", "Reprovado"]


@pytest.mark.parametrize("old, new", [
    ("Inexistente", "Novo"),
    ("Aprovado", ""),
    ("Aprovado", "Reprovado"),
])
def test_rename_status_invalid(catalog: StatusCatalog, old: str, new: str):
    with pytest.raises(InvalidInputError):
        catalog.rename_status(StatusCategory.PROJECT, old, new)


def test_delete_status(catalog: StatusCatalog):
    labels = catalog.delete_status(StatusCategory.INSTALLATION, "Cancelado")

    assert "Cancelado" not in labels
    with pytest.raises(InvalidInputError):
        catalog.delete_status(StatusCategory.INSTALLATION, "Cancelado")


def test_reorder_accepts_permutation(catalog: StatusCatalog):
    new_order = ["Reprovado", "Aprovado", "Pendente"]

    assert catalog.reorder(StatusCategory.HOMOLOGATION, new_order) == new_order
    assert catalog.list_statuses(StatusCategory.HOMOLOGATION) == new_order


@pytest.mark.parametrize("new_order", [
    ["Pendente", "Aprovado"],
    ["Pendente", "Aprovado", "Reprovado", "Extra"],
    ["Pendente", "Aprovado", "Aprovado"],
])
def test_reorder_rejects_non_permutation(catalog: StatusCatalog, new_order):
    with pytest.raises(InvalidInputError):
        catalog.reorder(StatusCategory.HOMOLOGATION, new_order)


def test_replace_config(catalog: StatusCatalog):
    config = StatusConfig(installation=["A", "B"], project=["C"], homologation=["D"])

    catalog.replace_config(config)

    assert catalog.load() == config


@pytest.mark.parametrize("labels", [["A", "A"], ["A", " "]])
def test_config_rejects_duplicates_and_blanks(labels):
    with pytest.raises(ValidationError):
        StatusConfig(installation=labels)
