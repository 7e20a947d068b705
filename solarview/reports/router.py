"""
FastAPI Router for installer reports and the AI final report.
"""
from typing import List
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException, Header

from solarview.core.dependencies import get_installation_repository
from solarview.core.exceptions import ExternalServiceError, NotFoundError
from solarview.core.logger import audit_log, get_logger_with_correlation
from solarview.installations.repository import InstallationRepository
from solarview.reports.schemas import (
    FinalReport,
    FinalReportRequest,
    InstallerReport,
    ReportSubmission,
)
from solarview.reports.service import ReportService, generate_final_report
from solarview.reports.summarizer import ReportSummarizer, get_summarizer

router = APIRouter(tags=["Reports"])


def get_report_service(
    repository: InstallationRepository = Depends(get_installation_repository)
) -> ReportService:
    return ReportService(repository)


@router.post("/", response_model=ReportSubmission, status_code=201)
def submit_report(
    report: InstallerReport,
    service: ReportService = Depends(get_report_service),
    x_correlation_id: str = Header(default=None)
) -> ReportSubmission:
    """
    **Relatório do Instalador**

    Field form submitted by the installer. A new report for the same client replaces the old one.
    """
    correlation_id = x_correlation_id or str(uuid4())
    updated = service.submit_report(report)

    audit_log(
        action="report_submitted",
        user="installer",
        resource=f"report={report.client_name}",
        details={"correlation_id": correlation_id, "installations": updated}
    )
    return ReportSubmission(client_name=report.client_name, updated_installations=updated)


@router.get("/", response_model=List[str])
def list_reports(service: ReportService = Depends(get_report_service)) -> List[str]:
    """Client names that have a submitted report."""
    return service.list_clients_with_reports()


@router.get("/{client_name}", response_model=InstallerReport, response_model_by_alias=True)
def read_report(client_name: str, service: ReportService = Depends(get_report_service)) -> InstallerReport:
    try:
        return service.get_report(client_name)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{client_name}", status_code=204)
def remove_report(
    client_name: str,
    service: ReportService = Depends(get_report_service),
    x_correlation_id: str = Header(default=None)
):
    try:
        service.delete_report(client_name)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    audit_log(
        action="report_deleted",
        user="admin",
        resource=f"report={client_name}",
        details={"correlation_id": x_correlation_id or str(uuid4())}
    )
    return


@router.post("/installations/{installation_id}/final", response_model=FinalReport)
def create_final_report(
    installation_id: int,
    data: FinalReportRequest,
    repository: InstallationRepository = Depends(get_installation_repository),
    service: ReportService = Depends(get_report_service),
    summarizer: ReportSummarizer = Depends(get_summarizer),
    x_correlation_id: str = Header(default=None)
) -> FinalReport:
    """
    **Gerar Relatório Final**

    Consolidates the installer report into a technical text. Not stored.
    """
    correlation_id = x_correlation_id or str(uuid4())
    logger = get_logger_with_correlation(correlation_id)

    try:
        installation = repository.find(installation_id)
        return generate_final_report(service, installation, summarizer, data.protocol_number)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ExternalServiceError as e:
        logger.error(f"Final report generation failed: {str(e)}")
        raise HTTPException(status_code=502, detail="Report generation service unavailable")
