"""Testes do ReportsClient."""

import pytest
from pydantic import ValidationError

from projects.tiktok_ads.client.reports import ReportsClient
from projects.tiktok_ads.exceptions import UpstreamReportError
from projects.tiktok_ads.schemas.reports import ReportRequest

from tiktok_fakes import REPORT_PATH, envelope

ROWS = [
    {
        "dimensions": {"campaign_id": "123"},
        "metrics": {"impressions": "1520", "click": "48", "convert": "3"},
    },
]


@pytest.mark.asyncio
async def test_fetch_stats_returns_rows_unmodified(upstream):
    """As linhas voltam exatamente como o TikTok devolveu."""
    upstream.respond(REPORT_PATH, envelope({"list": ROWS, "page_info": {"page": 1}}))
    client = ReportsClient(upstream.client())

    rows = await client.fetch_stats("act.token", "7001", ["123"], "2024-01-01", "2024-01-02")

    assert rows == ROWS


@pytest.mark.asyncio
async def test_fetch_stats_sends_fixed_report_shape(upstream):
    """BASIC, AUCTION_AD, dimensão campaign_id e três métricas."""
    upstream.respond(REPORT_PATH, envelope({"list": []}))
    client = ReportsClient(upstream.client())

    await client.fetch_stats("act.token", "7001", ["123"], "2024-01-01", "2024-01-02")

    assert upstream.body_of(REPORT_PATH) == {
        "advertiser_id": "7001",
        "report_type": "BASIC",
        "data_level": "AUCTION_AD",
        "dimensions": ["campaign_id"],
        "metrics": ["impressions", "click", "convert"],
        "start_date": "2024-01-01",
        "end_date": "2024-01-02",
        "campaign_ids": ["123"],
    }
    assert upstream.calls_to(REPORT_PATH)[0].headers["Access-Token"] == "act.token"


@pytest.mark.asyncio
async def test_fetch_stats_without_list_returns_empty(upstream):
    """`data` sem `list` resulta em lista vazia."""
    upstream.respond(REPORT_PATH, envelope({}))
    client = ReportsClient(upstream.client())

    assert await client.fetch_stats("t", "7001", ["123"], "2024-01-01", "2024-01-02") == []


@pytest.mark.asyncio
async def test_fetch_stats_envelope_error_raises_report_error(upstream):
    """Envelope com code != 0 vira UpstreamReportError."""
    upstream.respond(REPORT_PATH, envelope(None, code=40100, message="Access token expired"))
    client = ReportsClient(upstream.client())

    with pytest.raises(UpstreamReportError, match="Access token expired"):
        await client.fetch_stats("t", "7001", ["123"], "2024-01-01", "2024-01-02")


def test_report_request_rejects_inverted_range():
    """start_date depois de end_date é inválido."""
    with pytest.raises(ValidationError):
        ReportRequest(
            token="t",
            advertiser_id="7001",
            campaign_ids=["123"],
            start_date="2024-01-05",
            end_date="2024-01-02",
        )


def test_report_request_requires_campaign_ids():
    """Pelo menos uma campanha."""
    with pytest.raises(ValidationError):
        ReportRequest(
            token="t",
            advertiser_id="7001",
            campaign_ids=[],
            start_date="2024-01-01",
            end_date="2024-01-02",
        )
