"""Schemas Pydantic para relatórios de campanha."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ReportRequest(BaseModel):
    """Body de POST /report."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    token: str = Field(min_length=1)
    advertiser_id: str = Field(min_length=1)
    campaign_ids: list[str] = Field(min_length=1)
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def _check_range(self) -> "ReportRequest":
        if self.start_date > self.end_date:
            raise ValueError("start_date deve ser anterior ou igual a end_date")
        return self
