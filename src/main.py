"""
Main Entry Point - Attrition ETL

Command-line interface for running the attrition pipeline once over a
raw employee file. Settings come from the environment (.env) and can be
overridden with flags.
"""

import sys
import os
import logging
from typing import List, Optional

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.coreutils.config import PipelineConfig
from src.coreutils.logging import setup_logging
from src.orchestration.pipeline import AttritionPipeline

logger = logging.getLogger(__name__)


def build_config(args) -> PipelineConfig:
    """Merge command-line flags over environment settings"""
    config = PipelineConfig.from_env()

    if args.input:
        config.input_path = args.input
    if args.output_dir:
        config.output_dir = args.output_dir
    if args.duckdb_path:
        config.duckdb_path = args.duckdb_path
    if args.case_insensitive_labels:
        config.case_sensitive_labels = False
    if args.reject_invalid_records:
        config.reject_invalid_records = True
    if args.verbose:
        config.log_level = logging.DEBUG
    config.dry_run = args.dry_run

    return config


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(description="Employee Attrition ETL Pipeline")
    parser.add_argument("--input", help="Raw employee file (.csv, .parquet, .json)")
    parser.add_argument("--output-dir", help="Directory for result files")
    parser.add_argument("--duckdb-path", help="Also write tables to this DuckDB file")
    parser.add_argument(
        "--case-insensitive-labels",
        action="store_true",
        help="Match Gender/MaritalStatus/BusinessTravel labels ignoring case",
    )
    parser.add_argument(
        "--reject-invalid-records",
        action="store_true",
        help="Drop records violating range constraints instead of failing",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Run in dry-run mode (no result files written)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    args = parser.parse_args(argv)
    config = build_config(args)

    setup_logging(config.log_level, config.log_dir)

    try:
        result = AttritionPipeline(config).run()
    except Exception as e:
        logger.error(f"❌ Pipeline failed: {e}")
        return 1

    for name, summary_df in result.summaries.items():
        print(f"\n📊 Attrition by {name}:")
        print(summary_df)

    logger.info("✅ Pipeline completed successfully")
    return 0


if __name__ == "__main__":
    exit(main())
