"""
Installation Record Store.
The installations collection is a single document: load it whole, change it, write it whole.
reportSubmitted is stored with each record and kept in step with the installer reports by
whoever submits or deletes one.
"""
from typing import List

from solarview.core.exceptions import NotFoundError
from solarview.core.logger import logger
from solarview.installations.schemas import Installation
from solarview.storage.store import INSTALLATIONS_KEY, DocumentStore


class InstallationRepository:

    def __init__(self, store: DocumentStore):
        self.store = store

    def load(self) -> List[Installation]:
        """Returns every installation in store order."""
        return [Installation.model_validate(item) for item in self.store.load(INSTALLATIONS_KEY, [])]

    def save_all(self, installations: List[Installation]) -> None:
        self.store.save(INSTALLATIONS_KEY, [inst.to_document() for inst in installations])

    def find(self, installation_id: int) -> Installation:
        for inst in self.load():
            if inst.id == installation_id:
                return inst
        raise NotFoundError(f"Installation {installation_id} not found")

    def replace(self, *updated: Installation) -> None:
        """Writes back one or more records in a single save. Every id must already exist."""
        installations = self.load()
        index = {inst.id: position for position, inst in enumerate(installations)}
        for inst in updated:
            if inst.id not in index:
                raise NotFoundError(f"Installation {inst.id} not found")
            installations[index[inst.id]] = inst
        self.save_all(installations)
        logger.info(f"Installations saved: ids={[inst.id for inst in updated]}")

    def add(self, installation: Installation) -> None:
        installations = self.load()
        installations.append(installation)
        self.save_all(installations)

    def remove(self, installation_id: int) -> Installation:
        installations = self.load()
        removed = next((inst for inst in installations if inst.id == installation_id), None)
        if removed is None:
            raise NotFoundError(f"Installation {installation_id} not found")
        self.save_all([inst for inst in installations if inst.id != installation_id])
        return removed

    def next_id(self) -> int:
        installations = self.load()
        return max((inst.id for inst in installations), default=0) + 1

    def set_report_flag(self, client_name: str, submitted: bool) -> List[int]:
        """
        Sets reportSubmitted on every installation of a client.
        Returns the ids of that client's installations; writes only when a flag changed.
        """
        installations = self.load()
        matched, changed = [], False
        for position, inst in enumerate(installations):
            if inst.client_name != client_name:
                continue
            matched.append(inst.id)
            if inst.report_submitted != submitted:
                installations[position] = inst.model_copy(update={"report_submitted": submitted})
                changed = True
        if changed:
            self.save_all(installations)
            logger.info(f"Report flag set: client={client_name}, submitted={submitted}, ids={matched}")
        return matched
