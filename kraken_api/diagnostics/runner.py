"""
Diagnostics Runner — Orchestrates all test suites and produces a report.

Usage:
    python -m kraken_api.diagnostics.runner              # Run all suites
    python -m kraken_api.diagnostics.runner nonce auth   # Run specific suites
    python -m kraken_api.diagnostics.runner --list       # List available suites
    python -m kraken_api.diagnostics.runner --json       # Print a JSON report
"""

import sys
import time
import importlib

import orjson as json

from ..config import (
    API_KEY,
    API_SECRET,
    API_VERSION,
    REQUEST_TIMEOUT,
    REST_BASE,
    SSL_VERIFY,
    validate_credentials,
    print_config,
)
from .report import format_json_report, print_banner, print_section, print_result, print_verdict

# ── Available Suites ─────────────────────────────────────────────────────────

SUITE_MAP = {
    "nonce": ("Nonce", "kraken_api.diagnostics.suites.test_nonce"),
    "signing": ("Signing", "kraken_api.diagnostics.suites.test_signing"),
    "public": ("Public API", "kraken_api.diagnostics.suites.test_public"),
    "auth": ("Authentication", "kraken_api.diagnostics.suites.test_auth"),
}

# Default run order: offline first
DEFAULT_ORDER = ["nonce", "signing", "public", "auth"]

AUTH_SUITES = {"auth"}


def build_config() -> dict:
    """Build the config dict passed to each suite."""
    return {
        "rest_base": REST_BASE,
        "version": API_VERSION,
        "ssl_verify": SSL_VERIFY,
        "timeout": REQUEST_TIMEOUT,
        "api_key": API_KEY,
        "api_secret": API_SECRET,
    }


def run_suite(suite_key: str, config: dict, quiet: bool = False) -> list[dict]:
    """Dynamically import and run a test suite."""
    if suite_key not in SUITE_MAP:
        return [{"name": f"Unknown suite: {suite_key}", "passed": False, "detail": "Not found"}]

    label, module_path = SUITE_MAP[suite_key]
    if not quiet:
        print_section(label)

    try:
        module = importlib.import_module(module_path)
        results = module.run(config)
    except Exception as e:
        results = [{"name": f"{label}: Import/Run Error", "passed": False, "detail": str(e)}]

    if not quiet:
        for r in results:
            print_result(r)
    return results


def main(argv=None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    as_json = "--json" in args
    args = [a for a in args if a != "--json"]

    # --list flag
    if "--list" in args:
        print("\nAvailable diagnostic suites:")
        for key, (label, _) in SUITE_MAP.items():
            print(f"  {key:<12} {label}")
        print()
        return 0

    if not as_json:
        print_banner()
        print_config()
    has_creds = validate_credentials()

    # Determine which suites to run
    if args:
        suites_to_run = [s for s in args if s in SUITE_MAP]
        unknown = [s for s in args if s not in SUITE_MAP]
        if unknown and not as_json:
            print(f"  ⚠ Unknown suites: {', '.join(unknown)}")
    else:
        suites_to_run = DEFAULT_ORDER

    # Skip auth-required suites if no credentials
    if not has_creds:
        skipped = [s for s in suites_to_run if s in AUTH_SUITES]
        if skipped and not as_json:
            print(f"  ⚠ Skipping auth-required suites (no credentials): {', '.join(skipped)}")
        suites_to_run = [s for s in suites_to_run if s not in AUTH_SUITES]

    # Run
    config = build_config()
    all_results = []
    start = time.time()

    for suite_key in suites_to_run:
        all_results.extend(run_suite(suite_key, config, quiet=as_json))

    elapsed = time.time() - start

    if as_json:
        report = format_json_report(all_results, elapsed)
        print(json.dumps(report, option=json.OPT_INDENT_2).decode("utf-8"))
        return 0 if report["all_passed"] else 1

    all_passed = print_verdict(all_results, elapsed)
    return 0 if all_passed else 1


if __name__ == "__main__":
    sys.exit(main())
