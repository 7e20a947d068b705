"""
Unit tests for the derived equipment inventory and serial number search.
"""
import pytest

from solarview.core.exceptions import NotFoundError
from solarview.equipment.service import find_inverter_by_serial, inventory, locate_inverter
from solarview.installations.schemas import Inverter, Panel
from tests.conftest import make_installation

WEG = Inverter(id="inv1", brand="WEG", model="SIW500H", serial_number="WEG123456")
HOYMILES = Inverter(id="inv2", brand="Hoymiles", model="MI-1500", serial_number="HOY987654")
JINKO = Panel(id="pan1", brand="Jinko Solar", model="Tiger Pro", power=550, quantity=40)


@pytest.fixture
def installations():
    return [
        make_installation(id=1, client_name="Condomínio Sol Nascente", city="Campinas",
                          inverters=[WEG], panels=[JINKO]),
        make_installation(id=2, client_name="Maria Silva", inverters=[HOYMILES, WEG], panels=[JINKO]),
        make_installation(id=3, client_name="João Pereira"),
    ]


def test_inventory_is_unique_by_id(installations):
    result = inventory(installations)

    assert [i.id for i in result.inverters] == ["inv1", "inv2"]
    assert [p.id for p in result.panels] == ["pan1"]


def test_inventory_of_empty_installations():
    result = inventory([make_installation()])

    assert result.inverters == []
    assert result.panels == []


@pytest.mark.parametrize("serial", ["HOY987654", "hoy987654", " Hoy987654 "])
def test_find_inverter_by_serial_ignores_case(installations, serial: str):
    installation, inverter = find_inverter_by_serial(installations, serial)

    assert installation.id == 2
    assert inverter.id == "inv2"


@pytest.mark.parametrize("serial", ["HOY98765", "", "XYZ"])
def test_find_inverter_by_serial_exact_match_only(installations, serial: str):
    with pytest.raises(NotFoundError):
        find_inverter_by_serial(installations, serial)


def test_locate_inverter(installations):
    location = locate_inverter(installations, "weg123456")

    assert location.installation_id == 1
    assert location.installation_code == "INST-001"
    assert location.client_name == "Condomínio Sol Nascente"
    assert location.city == "Campinas"
