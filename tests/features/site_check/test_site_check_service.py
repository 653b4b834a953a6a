import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock

from app.features.site_check.services.fetcher import PageFetcher, SiteFetchError
from app.features.site_check.services.site_check import (
    FETCH_FAILED_RECOMMENDATION,
    SiteCheckService,
)


def service_returning(page=None, error=None) -> SiteCheckService:
    fetcher = MagicMock(spec=PageFetcher)
    fetcher.fetch = AsyncMock(return_value=page, side_effect=error)
    return SiteCheckService(fetcher=fetcher)


class TestSiteCheckService:
    @pytest.mark.asyncio
    async def test_bare_domain_is_normalized_before_fetching(self, make_page):
        service = service_returning(page=make_page())

        report = await service.check("example.com")

        service.fetcher.fetch.assert_awaited_once_with("https://example.com")
        assert report.url == "https://example.com"

    @pytest.mark.asyncio
    async def test_home_page_example(self, make_page):
        body = (
            "<html><head><title>Home</title>"
            '<meta name="viewport" content="width=device-width">'
            "</head><body><h1>Welcome</h1></body></html>"
        )
        service = service_returning(page=make_page(body=body, response_time_ms=250))

        report = await service.check("https://example.com")

        assert report.seo_score == 85
        assert report.security_score == 100
        assert report.performance_score == 100
        assert report.issues == ["Missing meta description"]
        assert report.recommendations == []
        assert report.status == "warning"
        assert report.status_code == 200
        assert report.response_time == 250

    @pytest.mark.asyncio
    async def test_healthy_page_gets_positive_message(self, make_page):
        service = service_returning(page=make_page())

        report = await service.check("https://example.com")

        assert report.status == "success"
        assert report.issues == []
        assert report.recommendations == ["Great job! No critical issues detected"]
        assert (report.seo_score, report.performance_score, report.security_score) == (100, 100, 100)

    @pytest.mark.asyncio
    async def test_six_images_without_alt_cost_ten_points(self, make_page):
        images = "".join(f'<img src="{i}.png">' for i in range(6))
        body = (
            '<html><head><title>Gallery</title><meta name="description" content="Photos">'
            '<meta name="viewport" content="width=device-width"></head>'
            f"<body><h1>Gallery</h1>{images}</body></html>"
        )
        service = service_returning(page=make_page(body=body))

        report = await service.check("https://example.com")

        assert report.issues == ["6 images missing alt text"]
        assert report.seo_score == 90

    @pytest.mark.asyncio
    async def test_fetch_failure_short_circuits(self, make_page):
        service = service_returning(error=SiteFetchError("getaddrinfo ENOTFOUND nope.invalid"))

        report = await service.check("nope.invalid")

        assert report.url == "https://nope.invalid"
        assert report.status == "error"
        assert report.issues == ["Failed to fetch website: getaddrinfo ENOTFOUND nope.invalid"]
        assert report.recommendations == [FETCH_FAILED_RECOMMENDATION]
        assert report.status_code is None
        assert report.response_time is None
        assert report.seo_score is None
        assert report.performance_score is None
        assert report.security_score is None

        body = report.to_response()
        assert set(body) == {"url", "status", "issues", "recommendations", "timestamp"}

    @pytest.mark.asyncio
    async def test_fetch_failure_skips_parsing(self):
        parser = MagicMock()
        service = service_returning(error=SiteFetchError("timed out"))
        service.document_factory = parser

        await service.check("https://example.com")

        parser.assert_not_called()

    @pytest.mark.asyncio
    async def test_parser_errors_propagate(self, make_page):
        service = service_returning(page=make_page())
        service.document_factory = MagicMock(side_effect=RuntimeError("parser exploded"))

        with pytest.raises(RuntimeError, match="parser exploded"):
            await service.check("https://example.com")

    @pytest.mark.asyncio
    async def test_same_snapshot_gives_same_report(self, make_page):
        page = make_page(body="<html>    <img src=a.png></html>", headers={}, response_time_ms=1500)
        service = service_returning(page=page)

        first = await service.check("http://example.com")
        second = await service.check("http://example.com")

        assert first.model_dump(exclude={"timestamp"}) == second.model_dump(exclude={"timestamp"})

    @pytest.mark.asyncio
    async def test_report_json_shape(self, make_page):
        service = service_returning(page=make_page(status_code=503))

        body = (await service.check("https://example.com")).to_response()

        assert body["status"] == "error"
        assert body["statusCode"] == 503
        assert body["issues"] == ["Server error (503)"]
        for field in ("responseTime", "seoScore", "performanceScore", "securityScore"):
            assert isinstance(body[field], int)
        assert body["timestamp"].endswith("Z")

    @pytest.mark.asyncio
    async def test_mixed_case_security_headers_count(self, clean_html):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                headers={
                    "STRICT-TRANSPORT-SECURITY": "max-age=1",
                    "x-FRAME-options": "DENY",
                    "X-Content-Type-Options": "nosniff",
                    "Content-Security-Policy": "default-src 'self'",
                },
                text=clean_html,
            )

        service = SiteCheckService(fetcher=PageFetcher(transport=httpx.MockTransport(handler)))

        report = await service.check("https://example.com")

        assert report.security_score == 100
        assert report.recommendations == ["Great job! No critical issues detected"]
