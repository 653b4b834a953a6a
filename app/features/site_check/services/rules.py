"""
Check rules for a single-page site check.

Every rule is an independent predicate/effect pair evaluated over an immutable
PageSnapshot. Rules run in the order they appear in ALL_RULES, which is also
the order their issues and recommendations show up in the report:

    status code -> latency -> SEO -> security -> performance

A rule's category names the score it deducts from (None for the status code
and latency rules, which only report).
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Tuple

from app.features.site_check.services.fetcher import FetchedPage
from app.features.site_check.services.html_document import HtmlDocument
from app.platform.utils.url_validator import is_https

SEO = "seo"
SECURITY = "security"
PERFORMANCE = "performance"
CATEGORIES = (SEO, SECURITY, PERFORMANCE)

SLOW_RESPONSE_MS = 3000
SLUGGISH_RESPONSE_MS = 1000
TITLE_MAX_LENGTH = 60
DESCRIPTION_MAX_LENGTH = 160
MISSING_ALT_PENALTY_PER_IMAGE = 2
MISSING_ALT_PENALTY_CAP = 10
INLINE_SCRIPT_LIMIT = 5
EXTERNAL_SCRIPT_LIMIT = 15
STYLESHEET_LIMIT = 10

SECURITY_HEADERS = {
    "strict-transport-security": "Strict-Transport-Security",
    "x-frame-options": "X-Frame-Options",
    "x-content-type-options": "X-Content-Type-Options",
    "content-security-policy": "Content-Security-Policy",
}


@dataclass(frozen=True)
class PageSnapshot:
    url: str
    status_code: int
    response_time_ms: int
    body: str
    headers: Mapping[str, str]
    document: HtmlDocument

    @classmethod
    def from_fetched(cls, url: str, page: FetchedPage, document: HtmlDocument) -> "PageSnapshot":
        headers = MappingProxyType(dict(page.headers))
        return cls(
            url=url,
            status_code=page.status_code,
            response_time_ms=page.response_time_ms,
            body=page.body,
            headers=headers,
            document=document,
        )

    def header(self, name: str) -> Optional[str]:
        return self.headers.get(name)


@dataclass(frozen=True)
class Finding:
    issues: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()
    deduction: int = 0


@dataclass(frozen=True)
class Rule:
    name: str
    category: Optional[str]
    applies: Callable[[PageSnapshot], bool]
    effect: Callable[[PageSnapshot], Finding] = field(repr=False)

    def evaluate(self, snapshot: PageSnapshot) -> Optional[Finding]:
        if not self.applies(snapshot):
            return None
        return self.effect(snapshot)


def _issue(message: str, deduction: int = 0) -> Callable[[PageSnapshot], Finding]:
    return lambda _snapshot: Finding(issues=(message,), deduction=deduction)


def _recommend(message: str, deduction: int = 0) -> Callable[[PageSnapshot], Finding]:
    return lambda _snapshot: Finding(recommendations=(message,), deduction=deduction)


# ── Status code ─────────────────────────────────

STATUS_RULES = (
    Rule(
        "server-error",
        None,
        lambda s: s.status_code >= 500,
        lambda s: Finding(issues=(f"Server error ({s.status_code})",)),
    ),
    Rule(
        "client-error",
        None,
        lambda s: 400 <= s.status_code < 500,
        lambda s: Finding(issues=(f"Client error ({s.status_code})",)),
    ),
    Rule(
        "redirect",
        None,
        lambda s: 300 <= s.status_code < 400,
        lambda s: Finding(issues=(f"Redirect detected ({s.status_code})",)),
    ),
)

# ── Latency ─────────────────────────────────────

LATENCY_RULES = (
    Rule(
        "slow-response",
        None,
        lambda s: s.response_time_ms > SLOW_RESPONSE_MS,
        lambda s: Finding(
            issues=("Slow response time (>3 seconds)",),
            recommendations=("Consider optimizing server performance or using a CDN",),
        ),
    ),
    Rule(
        "sluggish-response",
        None,
        lambda s: SLUGGISH_RESPONSE_MS < s.response_time_ms <= SLOW_RESPONSE_MS,
        _recommend("Response time could be improved (currently >1 second)"),
    ),
)

# ── SEO ─────────────────────────────────────────


def _text_length(text: str) -> int:
    # length in UTF-16 code units
    return len(text.encode("utf-16-le")) // 2


def _title(s: PageSnapshot) -> str:
    return s.document.text("title")


def _description(s: PageSnapshot) -> Optional[str]:
    return s.document.attribute('meta[name="description"]', "content")


def _missing_alt(s: PageSnapshot) -> int:
    return s.document.count("img:not([alt])")


def _missing_alt_finding(s: PageSnapshot) -> Finding:
    missing = _missing_alt(s)
    return Finding(
        issues=(f"{missing} images missing alt text",),
        deduction=min(MISSING_ALT_PENALTY_CAP, missing * MISSING_ALT_PENALTY_PER_IMAGE),
    )


SEO_RULES = (
    Rule("missing-title", SEO, lambda s: not _title(s), _issue("Missing page title", 15)),
    Rule(
        "long-title",
        SEO,
        lambda s: _text_length(_title(s)) > TITLE_MAX_LENGTH,
        _recommend("Page title is too long (should be under 60 characters)", 5),
    ),
    Rule(
        "missing-description",
        SEO,
        lambda s: not _description(s),
        _issue("Missing meta description", 15),
    ),
    Rule(
        "long-description",
        SEO,
        lambda s: _text_length(_description(s) or "") > DESCRIPTION_MAX_LENGTH,
        _recommend("Meta description is too long (should be under 160 characters)", 5),
    ),
    Rule("missing-h1", SEO, lambda s: s.document.count("h1") == 0, _issue("No H1 heading found", 10)),
    Rule(
        "multiple-h1",
        SEO,
        lambda s: s.document.count("h1") > 1,
        _recommend("Multiple H1 headings detected (should have only one)", 5),
    ),
    Rule("images-missing-alt", SEO, lambda s: _missing_alt(s) > 0, _missing_alt_finding),
    Rule(
        "missing-viewport",
        SEO,
        lambda s: not s.document.attribute('meta[name="viewport"]', "content"),
        _issue("Missing viewport meta tag for mobile responsiveness", 10),
    ),
)

# ── Security ────────────────────────────────────


def _header_rule(key: str, canonical: str) -> Rule:
    return Rule(
        f"missing-{key}",
        SECURITY,
        lambda s: not s.header(key),
        _recommend(f"Consider adding {canonical} header", 10),
    )


SECURITY_RULES = (
    Rule(
        "no-https",
        SECURITY,
        lambda s: not is_https(s.url),
        lambda s: Finding(
            issues=("Website is not using HTTPS",),
            recommendations=("Enable HTTPS to secure data transmission",),
            deduction=30,
        ),
    ),
) + tuple(_header_rule(key, canonical) for key, canonical in SECURITY_HEADERS.items())

# ── Performance ─────────────────────────────────


def _looks_unminified(s: PageSnapshot) -> bool:
    # any run of four spaces or three newlines
    return "    " in s.body or "\n\n\n" in s.body


PERFORMANCE_RULES = (
    Rule(
        "inline-scripts",
        PERFORMANCE,
        lambda s: s.document.count("script:not([src])") > INLINE_SCRIPT_LIMIT,
        _recommend("Consider reducing inline scripts and using external files", 10),
    ),
    Rule(
        "external-scripts",
        PERFORMANCE,
        lambda s: s.document.count("script[src]") > EXTERNAL_SCRIPT_LIMIT,
        _recommend("Consider reducing number of external scripts", 10),
    ),
    Rule(
        "stylesheets",
        PERFORMANCE,
        lambda s: s.document.count('link[rel="stylesheet"]') > STYLESHEET_LIMIT,
        _recommend("Consider combining CSS files to reduce HTTP requests", 10),
    ),
    Rule(
        "unminified-html",
        PERFORMANCE,
        _looks_unminified,
        _recommend("Consider minifying HTML for better performance", 5),
    ),
)

ALL_RULES = STATUS_RULES + LATENCY_RULES + SEO_RULES + SECURITY_RULES + PERFORMANCE_RULES
