"""Schemas Pydantic para criação de campanhas."""

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class CampaignStatus(str, Enum):
    """Status aceitos na criação."""
    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"


class CampaignCreateParams(BaseModel):
    """Campos de campanha informados por quem chama."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    advertiser_id: str = Field(min_length=1)
    campaign_name: str = Field(min_length=1, max_length=512)
    budget: Union[int, float] = Field(gt=0)
    status: CampaignStatus


class CampaignCreateRequest(CampaignCreateParams):
    """Body de POST /campaign."""

    token: str = Field(min_length=1)

    def to_params(self) -> CampaignCreateParams:
        return CampaignCreateParams.model_validate(self.model_dump(exclude={"token"}))
