"""
Testes dos endpoints HTTP.

Testa:
  - GET /auth/url: URL com state aleatório + cookie
  - GET /auth/callback: 400 sem code, 400 com state divergente, 500 em falha
  - POST /campaign e POST /report: sucesso e 500 com erro reportado uma vez
  - GET /metrics e GET /health
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient

from app.tiktok_ads_main import create_app
from shared.observability import init_observability
from projects.tiktok_ads.api.oauth import STATE_COOKIE
from projects.tiktok_ads.exceptions import (
    UpstreamAuthError,
    UpstreamCampaignError,
    UpstreamReportError,
)
from projects.tiktok_ads.factory import build_services

from tiktok_fakes import CAMPAIGN_PATH, REPORT_PATH, TOKEN_PATH, BrokenScheduler, envelope

CAMPAIGN_BODY = {
    "token": "act.token",
    "advertiser_id": "7001",
    "campaign_name": "Affiliate Q1",
    "budget": 500,
    "status": "ACTIVE",
}

REPORT_BODY = {
    "token": "act.token",
    "advertiser_id": "7001",
    "campaign_ids": ["123"],
    "start_date": "2024-01-01",
    "end_date": "2024-01-02",
}


@pytest.fixture
def observability():
    state = init_observability("tiktok-ads-test")
    state.error_reporter = MagicMock()
    return state


@pytest.fixture
def app(upstream, scheduler, tiktok_config, observability):
    services = build_services(
        metrics=observability.upstream_metrics,
        scheduler=scheduler,
        api_client=upstream.client(metrics=observability.upstream_metrics),
        config=tiktok_config,
    )
    return create_app(observability=observability, services=services)


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)


def _reported(observability) -> list:
    return [c.args[0] for c in observability.error_reporter.capture_exception.call_args_list]


class TestAuthUrl:

    def test_returns_url_and_sets_state_cookie(self, client):
        """URL carrega o mesmo state gravado no cookie."""
        response = client.get("/auth/url")

        assert response.status_code == 200
        url = response.json()["url"]
        state = response.cookies.get(STATE_COOKIE)
        assert state
        assert f"state={state}" in url
        assert "client_key=client-123" in url

    def test_state_changes_per_request(self, client):
        """Dois pedidos geram states diferentes."""
        first = client.get("/auth/url").cookies.get(STATE_COOKIE)
        second = client.get("/auth/url").cookies.get(STATE_COOKIE)

        assert first != second


class TestAuthCallback:

    def test_missing_code_returns_400_without_upstream_call(self, client, upstream, scheduler):
        """Sem code: 400 e nenhuma chamada ao endpoint de token."""
        response = client.get("/auth/callback")

        assert response.status_code == 400
        assert upstream.calls_to(TOKEN_PATH) == []
        assert scheduler.calls == []

    def test_state_mismatch_returns_400(self, client, upstream):
        """State diferente do cookie é rejeitado antes da troca."""
        response = client.get(
            "/auth/callback",
            params={"code": "c1", "state": "forged"},
            headers={"Cookie": f"{STATE_COOKIE}=expected"},
        )

        assert response.status_code == 400
        assert upstream.calls_to(TOKEN_PATH) == []

    def test_success_returns_token_json(self, client, upstream, scheduler):
        """Troca bem-sucedida devolve o par e agenda um refresh."""
        upstream.respond(
            TOKEN_PATH,
            envelope({"access_token": "act.1", "refresh_token": "rft.1", "expires_in": 86400}),
        )

        response = client.get(
            "/auth/callback",
            params={"code": "c1", "state": "s1"},
            headers={"Cookie": f"{STATE_COOKIE}=s1"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["access_token"] == "act.1"
        assert data["refresh_token"] == "rft.1"
        assert data["expires_in"] == 86400
        assert scheduler.calls == [("rft.1", 86340)]

    def test_upstream_failure_returns_500_and_reports_once(self, client, upstream, observability):
        """Falha do TikTok: 500 fixo e um único envio ao sink."""
        upstream.respond(TOKEN_PATH, {"message": "unavailable"}, status_code=503)

        response = client.get(
            "/auth/callback",
            params={"code": "c1", "state": "s1"},
            headers={"Cookie": f"{STATE_COOKIE}=s1"},
        )

        assert response.status_code == 500
        assert response.json() == {"detail": "Auth exchange failed"}
        reported = _reported(observability)
        assert len(reported) == 1
        assert isinstance(reported[0], UpstreamAuthError)


class TestCampaignEndpoint:

    def test_success_returns_campaign_data(self, client, upstream):
        upstream.respond(CAMPAIGN_PATH, envelope({"campaign_id": "1800"}))

        response = client.post("/campaign", json=CAMPAIGN_BODY)

        assert response.status_code == 200
        assert response.json() == {"campaign_id": "1800"}
        assert upstream.body_of(CAMPAIGN_PATH)["objective_type"] == "CONVERSION"

    def test_upstream_failure_returns_500_and_reports_once(self, client, upstream, observability):
        upstream.respond(CAMPAIGN_PATH, {"code": 40001, "message": "Invalid"}, status_code=400)

        response = client.post("/campaign", json=CAMPAIGN_BODY)

        assert response.status_code == 500
        assert response.json() == {"detail": "Campaign creation failed"}
        reported = _reported(observability)
        assert len(reported) == 1
        assert isinstance(reported[0], UpstreamCampaignError)

    def test_missing_field_returns_422_without_upstream_call(self, client, upstream):
        body = {k: v for k, v in CAMPAIGN_BODY.items() if k != "budget"}

        response = client.post("/campaign", json=body)

        assert response.status_code == 422
        assert upstream.requests == []


class TestReportEndpoint:

    def test_success_returns_rows(self, client, upstream):
        rows = [{"dimensions": {"campaign_id": "123"}, "metrics": {"impressions": "10"}}]
        upstream.respond(REPORT_PATH, envelope({"list": rows}))

        response = client.post("/report", json=REPORT_BODY)

        assert response.status_code == 200
        assert response.json() == rows

    def test_upstream_failure_returns_500_and_reports_once(self, client, upstream, observability):
        upstream.respond(REPORT_PATH, envelope(None, code=40100, message="expired"))

        response = client.post("/report", json=REPORT_BODY)

        assert response.status_code == 500
        assert response.json() == {"detail": "Report fetch failed"}
        reported = _reported(observability)
        assert len(reported) == 1
        assert isinstance(reported[0], UpstreamReportError)


class TestUnexpectedErrors:

    def test_unhandled_exception_is_reported_and_returns_500(self, app, client, observability):
        """Exceção fora das famílias conhecidas também vai ao sink."""
        app.state.tiktok_ads.campaigns.create_campaign = AsyncMock(side_effect=RuntimeError("boom"))

        response = client.post("/campaign", json=CAMPAIGN_BODY)

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}
        reported = _reported(observability)
        assert len(reported) == 1
        assert isinstance(reported[0], RuntimeError)


class TestObservabilityEndpoints:

    def test_metrics_exposes_prometheus_text(self, client, upstream):
        upstream.respond(CAMPAIGN_PATH, envelope({"campaign_id": "1800"}))
        client.post("/campaign", json=CAMPAIGN_BODY)

        response = client.get("/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "tiktok_api_requests_total" in response.text
        assert "http_requests_total" in response.text

    def test_health_reports_config(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["token_store"] is False

    def test_request_id_header_is_echoed(self, client):
        response = client.get("/auth/url", headers={"X-Request-ID": "req-abc"})

        assert response.headers["X-Request-ID"] == "req-abc"


class TestCallbackSchedulingFailure:

    @pytest.fixture
    def broken_client(self, upstream, tiktok_config, observability):
        services = build_services(
            scheduler=BrokenScheduler(),
            api_client=upstream.client(metrics=observability.upstream_metrics),
            config=tiktok_config,
        )
        app = create_app(observability=observability, services=services)
        return TestClient(app, raise_server_exceptions=False)

    def test_broker_down_returns_auth_exchange_failed(self, broken_client, upstream, observability):
        """Falha no agendamento é tratada como falha da troca, não erro genérico."""
        upstream.respond(
            TOKEN_PATH,
            envelope({"access_token": "act.1", "refresh_token": "rft.1", "expires_in": 86400}),
        )

        response = broken_client.get(
            "/auth/callback",
            params={"code": "c1", "state": "s1"},
            headers={"Cookie": f"{STATE_COOKIE}=s1"},
        )

        assert response.status_code == 500
        assert response.json() == {"detail": "Auth exchange failed"}
        reported = _reported(observability)
        assert len(reported) == 1
        assert isinstance(reported[0], UpstreamAuthError)
        assert isinstance(reported[0].__cause__, ConnectionError)


class TestDefaultMetrics:

    def test_metrics_include_process_and_runtime_series(self, client):
        response = client.get("/metrics")

        assert response.status_code == 200
        assert "python_info" in response.text
        assert "python_gc_objects_collected_total" in response.text


class TestHealthTokenStore:

    def test_reports_stored_token(self, app, client):
        store = AsyncMock()
        store.load.return_value = object()
        app.state.tiktok_ads.token_store = store

        data = client.get("/health").json()

        assert data["status"] == "ok"
        assert data["token_store"] is True
        assert data["token_present"] is True

    def test_unreachable_store_is_degraded(self, app, client):
        store = AsyncMock()
        store.load.side_effect = ConnectionError("redis down")
        app.state.tiktok_ads.token_store = store

        data = client.get("/health").json()

        assert data["status"] == "degraded"
        assert data["token_present"] is None

    def test_without_store_token_present_is_null(self, client):
        assert client.get("/health").json()["token_present"] is None
