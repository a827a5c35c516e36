"""
Analysis Runner - Command Line
==============================

Analyze one place reference, or list stored analyses.

    python run_analysis.py "Blue Bottle Coffee"
    python run_analysis.py "https://www.google.com/maps/place/Blue+Bottle+Coffee/@37.77,-122.42,17z"
    python run_analysis.py --list --limit 10
"""

import argparse
import logging
import sys

from review_radar.application import AnalysisPipeline
from review_radar.domain.errors import AnalysisError
from review_radar.infrastructure.config import get_settings

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def print_record(record, cached: bool = False):
    summary = record.summary
    print("\n" + "=" * 60)
    print(f"   {record.place_name}" + ("  (cached)" if cached else ""))
    print("=" * 60)
    print(f"   Place ID: {record.place_id}")
    print(f"   Analyzed: {record.created_at}")
    print(f"   Reviews:  {summary.total_count} | Positive: {summary.positive_count} "
          f"| Negative: {summary.negative_count} | Neutral: {summary.neutral_count}")
    print(f"   Score:    {summary.overall_score_sum} (avg {summary.average_score:.2f})")
    print(f"   Overall:  {summary.overall_label.value}")
    print("=" * 60 + "\n")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Review Radar - place review sentiment")
    parser.add_argument("reference", nargs="?", help="Place name or Google Maps URL")
    parser.add_argument("--list", action="store_true", help="List stored analyses")
    parser.add_argument("--limit", type=int, default=None, help="Maximum analyses to list")
    args = parser.parse_args(argv)

    if not args.list and not args.reference:
        parser.error("a place reference is required unless --list is given")

    settings = get_settings()
    for issue in settings.validate():
        print(issue)

    try:
        pipeline = AnalysisPipeline.from_settings(settings)

        if args.list:
            records = pipeline.list_analyses(args.limit)
            if not records:
                print("No analyses stored yet.")
            for record in records:
                print_record(record)
            return 0

        outcome = pipeline.analyze(args.reference)
        print_record(outcome.record, cached=outcome.cached)
        return 0

    except AnalysisError as e:
        logger.error(f"Analysis failed ({e.code}): {e.detail or e.message}")
        print(f"\n{e.message}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
