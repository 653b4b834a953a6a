#!/usr/bin/env python3
"""
Run a single site check from the command line and print the report as JSON.

Usage:
    python scripts/check_site.py example.com [--indent 2]

Exit codes: 0 success/warning, 1 error report, 2 missing URL.
"""

import argparse
import asyncio
import json
import sys

from app.features.site_check.services.site_check import SiteCheckService
from app.features.site_check.utils.score_band import score_band

SCORE_FIELDS = ("seoScore", "performanceScore", "securityScore")


def summary_line(report: dict) -> str:
    parts = [f"{report['status'].upper()} {report['url']}"]
    for field in SCORE_FIELDS:
        if field in report:
            parts.append(f"{field}={report[field]} ({score_band(report[field])})")
    return " | ".join(parts)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Check a single web page")
    parser.add_argument("url", help="URL or bare domain to check")
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation")
    args = parser.parse_args(argv)

    if not args.url.strip():
        print("URL is required", file=sys.stderr)
        return 2

    report = asyncio.run(SiteCheckService().check(args.url)).to_response()
    print(json.dumps(report, indent=args.indent))
    print(summary_line(report), file=sys.stderr)
    return 1 if report["status"] == "error" else 0


if __name__ == "__main__":
    sys.exit(main())
