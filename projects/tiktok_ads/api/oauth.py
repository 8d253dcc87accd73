"""Endpoints OAuth 2.0 do TikTok Ads."""

import secrets
from typing import Optional

from fastapi import APIRouter, Cookie, Depends, HTTPException, Query, Response, status

from shared.config import settings
from shared.core.exceptions import ConfigurationException
from shared.core.logging import get_logger
from shared.observability import ErrorReporter
from projects.tiktok_ads.api.dependencies import get_error_reporter, get_oauth_service
from projects.tiktok_ads.exceptions import UpstreamAuthError
from projects.tiktok_ads.schemas.oauth import AuthUrlResponse
from projects.tiktok_ads.services.oauth_service import OAuthService

logger = get_logger(__name__)
router = APIRouter()

STATE_COOKIE = "tiktok_oauth_state"
STATE_COOKIE_MAX_AGE = 600  # 10 minutos para concluir o consentimento


@router.get("/url", response_model=AuthUrlResponse)
async def get_auth_url(
    response: Response,
    service: OAuthService = Depends(get_oauth_service),
):
    """Gera URL de autorização do TikTok com state aleatório."""
    state = service.generate_state()
    try:
        url = service.build_authorization_url(state)
    except ConfigurationException as e:
        logger.error("TikTok App não configurado", setting=e.details.get("setting"))
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="TikTok App não configurado",
        )

    response.set_cookie(
        STATE_COOKIE,
        state,
        max_age=STATE_COOKIE_MAX_AGE,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
    return {"url": url}


@router.get("/callback")
async def oauth_callback(
    response: Response,
    code: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    expected_state: Optional[str] = Cookie(None, alias=STATE_COOKIE),
    service: OAuthService = Depends(get_oauth_service),
    reporter: ErrorReporter = Depends(get_error_reporter),
):
    """Callback do TikTok OAuth. Recebe code e troca por token."""
    if not code:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing code")

    if service.settings.tiktok_oauth_verify_state and not (
        state and expected_state and secrets.compare_digest(state, expected_state)
    ):
        logger.warning("State OAuth inválido", has_state=bool(state), has_cookie=bool(expected_state))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid state")

    try:
        token = await service.exchange_code(code)
    except UpstreamAuthError as e:
        reporter.capture_exception(e, route="/auth/callback")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Auth exchange failed",
        )

    response.delete_cookie(STATE_COOKIE)
    return token.model_dump(mode="json")
