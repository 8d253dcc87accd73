"""Schemas Pydantic do fluxo OAuth."""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TokenPair(BaseModel):
    """Par access/refresh token devolvido pelo TikTok.

    `expires_at` é derivado de `expires_in` no momento do parse.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    access_token: str = Field(min_length=1)
    refresh_token: str = Field(min_length=1)
    expires_in: int = Field(ge=0)
    refresh_token_expires_in: Optional[int] = None
    advertiser_ids: list[str] = Field(default_factory=list)
    scope: list[Any] = Field(default_factory=list)
    expires_at: Optional[datetime] = None

    @model_validator(mode="after")
    def _derive_expires_at(self) -> "TokenPair":
        if self.expires_at is None:
            self.expires_at = datetime.now(timezone.utc) + timedelta(seconds=self.expires_in)
        return self


class AuthUrlResponse(BaseModel):
    """Resposta de GET /auth/url."""
    url: str
