"""
Script to run one ingestion pass per named source (all sources when none given)

Usage:
    python scripts/run_ingestion.py                 # games, tv_shows, movies
    python scripts/run_ingestion.py games movies
"""

import argparse
import asyncio
import sys
import os
import logging

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from core.database import engine
from core.exceptions import IngestionException
from core.logging import setup_logging
from ingestion.runner import run_ingestion
from models.base import SourceType

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Run catalog ingestion")
    parser.add_argument(
        "sources",
        nargs="*",
        choices=[source.value for source in SourceType],
        help="Sources to ingest (default: all)"
    )
    return parser.parse_args(argv)


async def run_all(source_names) -> int:
    """Run each source in turn; returns the number of sources that failed"""
    failures = 0
    try:
        for name in source_names:
            source_type = SourceType(name)
            try:
                logger.info(f"Running ingestion for source: {name}")
                result = await run_ingestion(source_type)
                logger.info(
                    f"Ingestion completed for {name}: {result['status']}, "
                    f"Rows={result['rows_written']}, Failed rows={result['rows_failed']}"
                )
            except IngestionException as e:
                failures += 1
                logger.error(f"Ingestion failed for {name}: {e}", extra={"error_context": e.to_dict()})
            except Exception:
                failures += 1
                logger.exception(f"Ingestion failed for {name}")

        logger.info("All ingestion jobs completed")
    finally:
        await engine.dispose()
    return failures


def main(argv=None):
    setup_logging()
    args = parse_args(argv)
    source_names = args.sources or [source.value for source in SourceType]
    failures = asyncio.run(run_all(source_names))
    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    main()
