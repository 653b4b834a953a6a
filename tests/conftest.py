"""
Test configuration and fixtures for the Website Maintenance Agent API.
"""

from typing import Dict, Generator, Optional

import pytest
from fastapi.testclient import TestClient

from app.features.site_check.services.fetcher import FetchedPage
from app.features.site_check.services.html_document import SoupDocument
from app.features.site_check.services.rules import PageSnapshot

SECURE_HEADERS = {
    "strict-transport-security": "max-age=63072000",
    "x-frame-options": "DENY",
    "x-content-type-options": "nosniff",
    "content-security-policy": "default-src 'self'",
}

# no four-space runs, no triple newlines
CLEAN_HTML = (
    "<!DOCTYPE html><html><head>"
    "<title>Home</title>"
    '<meta name="description" content="A small business website">'
    '<meta name="viewport" content="width=device-width, initial-scale=1">'
    "</head><body><h1>Welcome</h1><p>Hello.</p></body></html>"
)


@pytest.fixture(scope="session")
def test_app():
    """Create FastAPI test application."""
    from app.main import app

    return app


@pytest.fixture(scope="function")
def client(test_app) -> Generator[TestClient, None, None]:
    """
    Create a test client for making HTTP requests.
    A clean TestClient per test function keeps dependency overrides isolated.
    """
    with TestClient(test_app) as test_client:
        yield test_client
    test_app.dependency_overrides.clear()


@pytest.fixture
def secure_headers() -> Dict[str, str]:
    return dict(SECURE_HEADERS)


@pytest.fixture
def clean_html() -> str:
    return CLEAN_HTML


@pytest.fixture
def make_page(secure_headers):
    """Build a FetchedPage; defaults describe a healthy, fast, fully secured page."""

    def _make(
        body: str = CLEAN_HTML,
        status_code: int = 200,
        response_time_ms: int = 120,
        headers: Optional[Dict[str, str]] = None,
    ) -> FetchedPage:
        return FetchedPage(
            status_code=status_code,
            response_time_ms=response_time_ms,
            body=body,
            headers=secure_headers if headers is None else headers,
        )

    return _make


@pytest.fixture
def make_snapshot(make_page):
    """Build a PageSnapshot parsed with the real BeautifulSoup document."""

    def _make(url: str = "https://example.com", **page_kwargs) -> PageSnapshot:
        page = make_page(**page_kwargs)
        return PageSnapshot.from_fetched(url, page, SoupDocument(page.body))

    return _make
