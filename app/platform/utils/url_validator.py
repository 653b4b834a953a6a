from typing import Tuple

SUPPORTED_SCHEMES = ("http://", "https://")


def normalize_url(url: str) -> Tuple[str, bool]:
    """
    Prepend https:// when the input carries no http(s) scheme.
    Returns the normalized URL and whether it was modified.
    """
    url = url.strip()

    if url.lower().startswith(SUPPORTED_SCHEMES):
        return url, False

    return f"https://{url}", True


def is_https(url: str) -> bool:
    return url.lower().startswith("https://")
