"""
Installer reports.
A report is one document per client name. Submitting or deleting it sets or clears the
reportSubmitted flag on that client's installations.
"""
import json
from typing import List

from solarview.core.exceptions import NotFoundError
from solarview.core.logger import logger
from solarview.installations.repository import InstallationRepository
from solarview.installations.schemas import Installation
from solarview.reports.schemas import FinalReport, InstallerReport
from solarview.reports.summarizer import ReportSummarizer
from solarview.storage.store import REPORT_KEY_PREFIX, report_key


class ReportService:

    def __init__(self, repository: InstallationRepository):
        self.repository = repository
        self.store = repository.store

    def submit_report(self, report: InstallerReport) -> List[int]:
        """
        Stores the payload (replacing any previous one for the client) and flags every
        installation of that client. Returns the ids of the flagged installations.
        """
        self.store.save(report_key(report.client_name), report.to_document())

        updated = self.repository.set_report_flag(report.client_name, True)
        if not updated:
            logger.warning(f"Report stored for a client without installations: {report.client_name}")

        logger.info(f"Installer report submitted: client={report.client_name}, installations={updated}")
        return updated

    def get_report(self, client_name: str) -> InstallerReport:
        raw = self.store.load(report_key(client_name))
        if raw is None:
            raise NotFoundError(f"No installer report for client {client_name}")
        return InstallerReport.model_validate(raw)

    def delete_report(self, client_name: str) -> None:
        if not self.store.exists(report_key(client_name)):
            raise NotFoundError(f"No installer report for client {client_name}")
        self.store.delete(report_key(client_name))
        self.repository.set_report_flag(client_name, False)

    def list_clients_with_reports(self) -> List[str]:
        return sorted(key[len(REPORT_KEY_PREFIX):] for key in self.store.keys(REPORT_KEY_PREFIX))


def generate_final_report(
    service: ReportService,
    installation: Installation,
    summarizer: ReportSummarizer,
    protocol_number: str = None
) -> FinalReport:
    """
    Builds the consolidated technical report for an installation.
    Nothing is persisted: the text is returned to the caller.
    """
    report = service.get_report(installation.client_name)
    protocol = protocol_number or installation.protocol_number or ""

    installer_report = json.dumps(report.to_document(), ensure_ascii=False, indent=2)
    text = summarizer.summarize(installer_report, protocol)

    logger.info(f"Final report generated: id={installation.id}, chars={len(text)}")
    return FinalReport(
        installation_id=installation.id,
        client_name=installation.client_name,
        protocol_number=protocol,
        final_report=text,
    )
