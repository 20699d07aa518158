#!/usr/bin/env python3
"""
Command-line QAP score calculator
Scores a Texas or California location and optionally exports a PDF report
"""
import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .amenities import JsonAmenitySource, MockAmenitySource
from .calculator import run_evaluation, scorer_from_settings
from .config import Settings
from .errors import QAPError
from .jurisdictions import category_breakdown, total_points
from .locations import resolve_location
from .logging_utils import configure_logging
from .report import QAPReport, default_report_filename, export_report_pdf


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qap-score",
        description="Estimate a LIHTC QAP Development Location score for a Texas or California site.",
    )
    parser.add_argument("--state", required=True, help="Texas or California")
    parser.add_argument("--city", required=True)
    parser.add_argument("--zip", dest="zip_code", required=True, help="ZIP code")
    parser.add_argument("--address", required=True, help="Street address")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the demo amenity generator")
    parser.add_argument("--amenities", type=Path, default=None,
                        help="JSON file of nearby places to score instead of demo data")
    parser.add_argument("--pdf", nargs="?", const="", default=None,
                        help="Write a PDF report (optional path; defaults to QAP_REPORT_DIR)")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    return parser


def print_report(report: QAPReport):
    result = report.result
    print(f"\n🏠 LIHTC QAP Score - {report.location.label}")
    print("=" * 60)
    for row in category_breakdown(report.jurisdiction, result.normalized_points):
        print(f"{row['category']:<48} {row['awarded_points']:>6.2f} / {row['max_points']:g}")
    print("-" * 60)
    print(f"{'Total':<48} {result.normalized_points:>6.2f} / {total_points(report.jurisdiction):g}")
    print(f"\n📍 Development Location: {result.normalized_points:.2f} points "
          f"(based on {result.amenity_count} nearby amenities)")
    print(f"   variety {result.variety_points:.2f} + volume {result.volume_points:.2f} "
          f"+ proximity {result.proximity_points:.2f} = {result.raw_points:.2f} raw")
    print(f"📊 Total Score: {report.percentage_text()} of maximum points")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = Settings.from_env()
        configure_logging(settings.log_level)

        location = resolve_location(args.state, args.city, args.zip_code, args.address)
        if args.amenities:
            source = JsonAmenitySource(args.amenities)
        else:
            seed = args.seed if args.seed is not None else settings.amenity_seed
            source = MockAmenitySource(seed=seed, delay_s=0)

        report = run_evaluation(location, source, scorer_from_settings(settings))

        if args.json:
            print(json.dumps(report.to_dict(), indent=2))
        else:
            print_report(report)

        if args.pdf is not None:
            path = Path(args.pdf) if args.pdf else Path(settings.report_dir) / default_report_filename(report)
            export_report_pdf(report, path)
            if not args.json:
                print(f"✅ Report saved to {path}")
    except QAPError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
