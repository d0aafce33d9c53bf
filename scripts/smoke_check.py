#!/usr/bin/env python3
"""
Hello Server - Post-deployment Smoke Check

This script checks that a running server answers correctly:
- GET on the root path
- POST with a malformed body on an arbitrary path
- DELETE on a nested path with a query string

Every response must be 200, text/plain, with the fixed body.

Usage: python scripts/smoke_check.py [--url http://localhost:3000/]
"""

import argparse
import os
import sys
from typing import List, Optional, Tuple

import requests

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from hello_server.config import PORT
from hello_server.responder import RESPONSE_BODY, RESPONSE_CONTENT_TYPE, RESPONSE_STATUS

CHECKS: List[Tuple[str, str, Optional[bytes]]] = [
    ("GET", "/", None),
    ("POST", "/anything", b"{not json"),
    ("DELETE", "/a/b/c?x=1", None),
]


def check_request(
    base_url: str, method: str, path: str, body: Optional[bytes] = None, timeout: float = 10
) -> List[str]:
    """
    Issue one request and compare the response with the fixed one.

    Returns:
        A list of problems, empty when the response is correct
    """
    url = base_url.rstrip("/") + path
    try:
        response = requests.request(method, url, data=body, timeout=timeout)
    except requests.RequestException as e:
        return [f"request failed: {e}"]

    problems = []
    if response.status_code != RESPONSE_STATUS:
        problems.append(f"status {response.status_code}, expected {RESPONSE_STATUS}")

    content_type = response.headers.get("Content-Type", "")
    if content_type.split(";")[0].strip() != RESPONSE_CONTENT_TYPE:
        problems.append(f"Content-Type {content_type!r}, expected {RESPONSE_CONTENT_TYPE!r}")

    if response.content != RESPONSE_BODY.encode("utf-8"):
        problems.append(f"body {response.content!r}, expected {RESPONSE_BODY.encode('utf-8')!r}")

    return problems


def run_checks(base_url: str, timeout: float = 10) -> Tuple[int, int]:
    """Run every check against ``base_url`` and print the outcome of each."""
    passed = 0
    failed = 0

    for method, path, body in CHECKS:
        problems = check_request(base_url, method, path, body, timeout)
        if problems:
            failed += 1
            print(f"❌ {method} {path}")
            for problem in problems:
                print(f"    {problem}")
        else:
            passed += 1
            print(f"✅ {method} {path}")

    return passed, failed


def main(argv: Optional[List[str]] = None) -> bool:
    """Run the smoke check."""
    parser = argparse.ArgumentParser(description="Check a running Hello Server")
    parser.add_argument(
        "--url",
        default=f"http://localhost:{PORT}/",
        help="Base URL of the server (default: %(default)s)",
    )
    parser.add_argument("--timeout", type=float, default=10, help="Per-request timeout in seconds")
    args = parser.parse_args(argv)

    print(f"🧪 HELLO SERVER SMOKE CHECK - {args.url}")
    print("=" * 50)

    passed, failed = run_checks(args.url, args.timeout)

    print("=" * 50)
    print(f"📊 Passed: {passed}, Failed: {failed}")
    return failed == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
