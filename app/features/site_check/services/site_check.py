from typing import Callable, Optional

from app.features.site_check.schemas.site_check import SiteCheckReport
from app.features.site_check.services.analyzer import SiteAnalyzer
from app.features.site_check.services.fetcher import PageFetcher, SiteFetchError
from app.features.site_check.services.html_document import HtmlDocument, parse_html
from app.features.site_check.services.rules import PERFORMANCE, SECURITY, SEO, PageSnapshot
from app.platform.logger import get_logger
from app.platform.utils.url_validator import normalize_url

logger = get_logger("site_check")

FETCH_FAILED_PREFIX = "Failed to fetch website: "
FETCH_FAILED_RECOMMENDATION = "Ensure the website is accessible and not blocking requests"


class SiteCheckService:
    """
    Runs one site check end to end:
    normalize URL -> fetch -> parse -> apply rules -> build report.

    A fetch failure short-circuits into an error report; anything else
    that goes wrong propagates to the caller.
    """

    def __init__(
        self,
        fetcher: Optional[PageFetcher] = None,
        analyzer: Optional[SiteAnalyzer] = None,
        document_factory: Callable[[str], HtmlDocument] = parse_html,
    ):
        self.fetcher = fetcher or PageFetcher()
        self.analyzer = analyzer or SiteAnalyzer()
        self.document_factory = document_factory

    @staticmethod
    def fetch_failed_report(url: str, message: str) -> SiteCheckReport:
        return SiteCheckReport(
            url=url,
            status="error",
            issues=[f"{FETCH_FAILED_PREFIX}{message}"],
            recommendations=[FETCH_FAILED_RECOMMENDATION],
        )

    async def check(self, raw_url: str) -> SiteCheckReport:
        url, was_modified = normalize_url(raw_url)
        logger.info(f"Checking {url}" + (" (scheme added)" if was_modified else ""))

        try:
            page = await self.fetcher.fetch(url)
        except SiteFetchError as e:
            return self.fetch_failed_report(url, e.message)

        snapshot = PageSnapshot.from_fetched(url, page, self.document_factory(page.body))
        analysis = self.analyzer.analyze(snapshot)

        logger.info(
            f"Check complete for {url}: status={analysis.status} issues={len(analysis.issues)} "
            f"seo={analysis.scores[SEO]} performance={analysis.scores[PERFORMANCE]} "
            f"security={analysis.scores[SECURITY]}"
        )
        return SiteCheckReport(
            url=url,
            status=analysis.status,
            status_code=page.status_code,
            response_time=page.response_time_ms,
            issues=list(analysis.issues),
            recommendations=list(analysis.recommendations),
            seo_score=analysis.scores[SEO],
            performance_score=analysis.scores[PERFORMANCE],
            security_score=analysis.scores[SECURITY],
        )
