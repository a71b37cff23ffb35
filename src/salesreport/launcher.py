"""GUI launcher for the sales report viewer."""

from __future__ import annotations

import argparse
import logging
import sys

from config import settings

DEMO_ROWS = [
    {
        "salesRepName": "Ada Byron",
        "totalLeads": 42,
        "totalOpps": 12,
        "conversionRate": 0.2857,
        "latestCreatedDate": "2020-03-27",
        "totalValue": 185000.0,
    },
    {
        "salesRepName": "Grace Hopper",
        "totalLeads": 35,
        "totalOpps": 14,
        "conversionRate": 0.4,
        "latestCreatedDate": "2020-03-30",
        "totalValue": 240500.5,
    },
    {
        "salesRepName": "Alan Kay",
        "totalLeads": 18,
        "totalOpps": 3,
        "conversionRate": 0.1667,
        "latestCreatedDate": "2020-03-12",
        "totalValue": 41250.0,
    },
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="salesreport", description="Sales rep performance report viewer"
    )
    parser.add_argument("--endpoint", help=f"Report endpoint (default {settings.REPORT_ENDPOINT})")
    parser.add_argument(
        "--demo", action="store_true", help="Use built-in sample rows instead of HTTP"
    )
    parser.add_argument("--log-level", default=settings.LOG_LEVEL, help="Logging level")
    return parser


def main(argv: list[str] | None = None) -> int:  # pragma: no cover - starts event loop
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    from salesreport.app.bootstrap import create_app
    from salesreport.services.report_provider import StaticReportProvider
    from salesreport.views.report_window import ReportWindow

    provider = StaticReportProvider(DEMO_ROWS) if args.demo else None
    ctx = create_app(
        headless=False, provider=provider, endpoint=args.endpoint, log_level=args.log_level
    )
    window = ReportWindow(ctx)
    window.show()
    window.viewmodel.load()
    return ctx.qt_app.exec()


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
