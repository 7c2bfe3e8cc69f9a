"""
Run the ParaBank suite without pytest and print the report.

    cd e2e && python -m src.flows.cli --only tc003_invalid_login --headless
"""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from dotenv import load_dotenv

from src.core.config import load_settings
from src.core.playwright_factory import close_browser, launch_browser, open_session
from src.core.scenario_loader import DEFAULT_SCENARIO_FILE, load_scenarios
from src.flows.suite import Suite


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="parabank-e2e", description="ParaBank registration/login suite")
    p.add_argument("--scenarios", default=str(DEFAULT_SCENARIO_FILE), help="scenario yaml")
    p.add_argument("--only", nargs="+", metavar="ID", help="run only these scenario ids")
    p.add_argument("--headless", action="store_true", help="force headless chromium")
    p.add_argument("--label", default="Parabank Test Suite - Core Functionality")
    p.add_argument("-v", "--verbose", action="store_true", help="log every step")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    load_dotenv()
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = load_settings()
    if args.headless:
        settings = replace(settings, headless=True)

    scenarios = load_scenarios(args.scenarios)
    if args.only:
        unknown = set(args.only) - {s.id for s in scenarios}
        if unknown:
            print(f"Unknown scenario id(s): {', '.join(sorted(unknown))}", file=sys.stderr)
            return 2
        scenarios = [s for s in scenarios if s.id in args.only]

    suite = Suite(args.label)
    for sc in scenarios:
        suite.add(sc)

    bundle = launch_browser(settings)
    try:
        report = suite.run(
            lambda case: open_session(bundle.browser, settings, case.scenario.id),
            timeout_ms=settings.timeout_ms,
            nav_timeout_ms=settings.nav_timeout_ms,
            artifacts_base_dir=settings.artifact_dir,
        )
    finally:
        close_browser(bundle)

    print(report.format())
    return 0 if report.failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
