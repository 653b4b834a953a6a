from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from app.features.site_check.schemas.site_check import CheckStatus
from app.features.site_check.services.rules import ALL_RULES, CATEGORIES, PageSnapshot, Rule

MAX_SCORE = 100
ERROR_ISSUE_THRESHOLD = 5
WARNING_RECOMMENDATION_THRESHOLD = 3
NO_ISSUES_MESSAGE = "Great job! No critical issues detected"


@dataclass(frozen=True)
class Analysis:
    status: CheckStatus
    issues: Tuple[str, ...]
    recommendations: Tuple[str, ...]
    scores: Dict[str, int]


def clamp_score(score: int) -> int:
    return max(0, min(MAX_SCORE, score))


def derive_status(issue_count: int, recommendation_count: int, status_code: Optional[int]) -> CheckStatus:
    if issue_count > ERROR_ISSUE_THRESHOLD or (status_code is not None and status_code >= 500):
        return "error"
    if issue_count > 0 or recommendation_count > WARNING_RECOMMENDATION_THRESHOLD:
        return "warning"
    return "success"


class SiteAnalyzer:
    """Applies the rule table to a page snapshot and scores the result."""

    def __init__(self, rules: Sequence[Rule] = ALL_RULES):
        self.rules = tuple(rules)

    def analyze(self, snapshot: PageSnapshot) -> Analysis:
        issues = []
        recommendations = []
        scores = {category: MAX_SCORE for category in CATEGORIES}

        for rule in self.rules:
            finding = rule.evaluate(snapshot)
            if finding is None:
                continue
            issues.extend(finding.issues)
            recommendations.extend(finding.recommendations)
            if rule.category is not None:
                scores[rule.category] -= finding.deduction

        status = derive_status(len(issues), len(recommendations), snapshot.status_code)

        # appended after status derivation, never feeds back into it
        if not issues:
            recommendations.append(NO_ISSUES_MESSAGE)

        return Analysis(
            status=status,
            issues=tuple(issues),
            recommendations=tuple(recommendations),
            scores={category: clamp_score(score) for category, score in scores.items()},
        )
