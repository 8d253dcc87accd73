"""Endpoint de relatório de campanhas."""

from fastapi import APIRouter, Depends, HTTPException, status

from shared.observability import ErrorReporter
from projects.tiktok_ads.api.dependencies import get_error_reporter, get_reports_client
from projects.tiktok_ads.client.reports import ReportsClient
from projects.tiktok_ads.exceptions import UpstreamReportError
from projects.tiktok_ads.schemas.reports import ReportRequest

router = APIRouter()


@router.post("/report")
async def fetch_report(
    body: ReportRequest,
    client: ReportsClient = Depends(get_reports_client),
    reporter: ErrorReporter = Depends(get_error_reporter),
):
    """Impressões, cliques e conversões por campanha no período."""
    try:
        return await client.fetch_stats(
            body.token,
            body.advertiser_id,
            body.campaign_ids,
            body.start_date.isoformat(),
            body.end_date.isoformat(),
        )
    except UpstreamReportError as e:
        reporter.capture_exception(
            e, route="/report", advertiser_id=body.advertiser_id
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Report fetch failed",
        )
