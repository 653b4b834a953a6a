GOOD_SCORE = 80
FAIR_SCORE = 60


def score_band(score: int) -> str:
    """good (>= 80), fair (>= 60) or poor."""
    if score >= GOOD_SCORE:
        return "good"
    elif score >= FAIR_SCORE:
        return "fair"
    return "poor"
