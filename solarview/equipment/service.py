"""
Equipment inventory.
There is no equipment collection: inverters and panels live inside installations and the
inventory is derived from them on every read.
"""
from typing import Dict, List, Tuple

from solarview.core.exceptions import NotFoundError
from solarview.equipment.schemas import EquipmentInventory, InverterLocation
from solarview.installations.schemas import Installation, Inverter, Panel


def inventory(installations: List[Installation]) -> EquipmentInventory:
    """Unique inverters and panels across all installations, first occurrence wins."""
    inverters: Dict[str, Inverter] = {}
    panels: Dict[str, Panel] = {}
    for inst in installations:
        for inverter in inst.inverters:
            inverters.setdefault(inverter.id, inverter)
        for panel in inst.panels:
            panels.setdefault(panel.id, panel)
    return EquipmentInventory(inverters=list(inverters.values()), panels=list(panels.values()))


def find_inverter_by_serial(installations: List[Installation], serial: str) -> Tuple[Installation, Inverter]:
    """Case-insensitive exact match on the serial number."""
    wanted = serial.strip().lower()
    if wanted:
        for inst in installations:
            for inverter in inst.inverters:
                if inverter.serial_number.lower() == wanted:
                    return inst, inverter
    raise NotFoundError(f"No inverter with serial number {serial}")


def locate_inverter(installations: List[Installation], serial: str) -> InverterLocation:
    installation, inverter = find_inverter_by_serial(installations, serial)
    return InverterLocation(
        inverter=inverter,
        installation_id=installation.id,
        installation_code=installation.installation_id,
        client_name=installation.client_name,
        city=installation.city,
        state=installation.state,
    )
