"""Endpoint de criação de campanhas."""

from fastapi import APIRouter, Depends, HTTPException, status

from shared.observability import ErrorReporter
from projects.tiktok_ads.api.dependencies import get_campaigns_client, get_error_reporter
from projects.tiktok_ads.client.campaigns import CampaignsClient
from projects.tiktok_ads.exceptions import UpstreamCampaignError
from projects.tiktok_ads.schemas.campaigns import CampaignCreateRequest

router = APIRouter()


@router.post("/campaign")
async def create_campaign(
    body: CampaignCreateRequest,
    client: CampaignsClient = Depends(get_campaigns_client),
    reporter: ErrorReporter = Depends(get_error_reporter),
):
    """Cria campanha de conversão com orçamento infinito e landing em website."""
    try:
        return await client.create_campaign(body.token, body.to_params())
    except UpstreamCampaignError as e:
        reporter.capture_exception(
            e, route="/campaign", advertiser_id=body.advertiser_id
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Campaign creation failed",
        )
