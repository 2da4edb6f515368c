#!/usr/bin/env python3
"""Run the churn analyses over a customer extract.

The extract is either read from a CSV file (``--source``) or generated
synthetically (``--generate``). Results are written as JSON files and,
optionally, printed to the console. With ``--postgres`` (target taken from the
POSTGRES_* environment variables) or ``--postgres-url`` the star schema is
also materialised in PostgreSQL.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from churn_analytics.config import ChurnAnalyticsConfig
from churn_analytics.exceptions import ChurnAnalyticsError
from churn_analytics.generators import ExtractGenerator
from churn_analytics.logging import get_logger, setup_logging
from churn_analytics.pipeline import ChurnAnalysis
from churn_analytics.sinks import ConsoleSink, JsonFileSink, PostgresSink
from churn_analytics.source import read_extract, write_extract

logger = get_logger(__name__)


def parse_args(config: ChurnAnalyticsConfig, argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments, defaulting to environment config."""
    parser = argparse.ArgumentParser(description="Run churn analyses over a customer extract")
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--source",
        type=Path,
        default=config.analysis.source_path,
        help="CSV extract to analyse",
    )
    source.add_argument(
        "--generate",
        type=int,
        metavar="N",
        help="Generate N synthetic customers instead of reading a file",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.seed,
        help="Random seed for --generate",
    )
    parser.add_argument(
        "--save-extract",
        type=Path,
        default=None,
        help="Write the generated extract to this CSV path",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=config.output.output_dir,
        help="Directory for JSON result files (default: output)",
    )
    parser.add_argument("--pretty", action="store_true", default=config.output.pretty_json, help="Pretty-print JSON")
    parser.add_argument("--console", action="store_true", help="Also print result tables")
    target = parser.add_mutually_exclusive_group()
    target.add_argument(
        "--postgres",
        action="store_true",
        help="Materialise the star schema in the PostgreSQL database from POSTGRES_* settings",
    )
    target.add_argument(
        "--postgres-url",
        type=str,
        default=None,
        help="Materialise the star schema in this PostgreSQL database",
    )
    parser.add_argument(
        "--truncate",
        action="store_true",
        help="Truncate PostgreSQL tables before loading",
    )
    parser.add_argument(
        "--places",
        type=int,
        default=config.analysis.rate_places,
        help="Decimal places for rates (default: 2)",
    )
    parser.add_argument("--log-level", type=str, default=config.log_level, help="Log level")
    parser.add_argument(
        "--log-format",
        choices=["standard", "json"],
        default=config.log_format,
        help="Log output format (default: standard)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    try:
        config = ChurnAnalyticsConfig.from_env()
    except ChurnAnalyticsError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2
    args = parse_args(config, argv)
    setup_logging(args.log_level, args.log_format)
    postgres_url = args.postgres_url or (config.postgres.connection_string if args.postgres else None)

    try:
        if args.generate:
            records = list(ExtractGenerator(seed=args.seed).generate_batch(args.generate))
            if args.save_extract:
                write_extract(records, args.save_extract)
        elif args.source:
            records = read_extract(args.source)
        else:
            logger.error("Either --source or --generate is required")
            return 2

        analysis = ChurnAnalysis(records, places=args.places)
        analysis.run()

        sinks: list = [JsonFileSink(args.output_dir, pretty=args.pretty)]
        if args.console:
            sinks.append(ConsoleSink())
        analysis.export(sinks)
        for sink in sinks:
            sink.close()

        if postgres_url:
            pg = PostgresSink(postgres_url)
            try:
                pg.create_tables()
                if args.truncate:
                    pg.truncate_tables()
                pg.write_schema(analysis.store)
            finally:
                pg.close()
    except ChurnAnalyticsError as e:
        logger.error("Analysis failed: %s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
