"""
Pipeline Orchestrator - Single-Run Attrition ETL

Runs the stages strictly in order over one employee frame:
1. Load raw staging into the employee table (staging is discarded)
2. Normalize flags and categorical labels
3. Check required fields for missing values
4. Cap MonthlyIncome outliers at 3 x mean (computed once)
5. Derive tenure and salary categories
6. Aggregate attrition per dashboard dimension

Each stage hands its output frame to the next; nothing is shared globally.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

import polars as pl

from src.coreutils.config import PipelineConfig
from src.coreutils.errors import PipelineStateError
from src.coreutils.logging import log_stage
from src.extract.staging import RawEmployeeStaging

# Load layer imports
from src.load.employee_loader import load_employee_records
from src.load.local_storage import save_attrition_report, save_employee_data
from src.load.duckdb_store import save_to_duckdb

# Transform layer imports
from src.transformation.transformers import (
    IncomeCap,
    normalize_employee_data,
    cap_monthly_income,
    categorize_employees,
)
from src.transformation.validators import (
    check_required_nulls,
    validate_business_rules,
    validate_data_quality,
)
from src.transformation.aggregations import (
    build_attrition_report,
    get_summary_stats,
)

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Everything a run produced, queryable by the dashboard"""

    employees: pl.DataFrame
    missing_values: Dict[str, int]
    income_cap: IncomeCap
    summaries: Dict[str, pl.DataFrame]
    summary_stats: Dict[str, Any] = field(default_factory=dict)
    data_quality: Dict[str, Any] = field(default_factory=dict)
    saved_files: Dict[str, Dict[str, str]] = field(default_factory=dict)

    def summary(self, dimension: str) -> pl.DataFrame:
        """Attrition table for one dimension (e.g. "department")"""
        if dimension not in self.summaries:
            raise KeyError(
                f"Unknown dimension '{dimension}', expected one of {list(self.summaries)}"
            )
        return self.summaries[dimension]


class AttritionPipeline:
    """Runs the attrition ETL once over a static snapshot"""

    def __init__(self, config: Optional[PipelineConfig] = None):
        """
        Initialize the pipeline

        Args:
            config: Run settings (defaults to PipelineConfig())
        """
        self.config = config or PipelineConfig()
        self._has_run = False

        if self.config.dry_run:
            logger.info("🔍 DRY RUN MODE: results will not be written")

    def run(self, staging: Optional[RawEmployeeStaging] = None) -> PipelineResult:
        """
        Run every stage end to end

        Args:
            staging: Raw employee staging; read from config.input_path
                when omitted

        Returns:
            PipelineResult: Cleaned employees and attrition summaries
        """
        if self._has_run:
            raise PipelineStateError(
                "AttritionPipeline.run() may only be called once per instance"
            )
        self._has_run = True

        logger.info("🚀 Starting Attrition ETL Pipeline")
        logger.info("=" * 50)

        try:
            if staging is None:
                if not self.config.input_path:
                    raise ValueError(
                        "No raw staging given and ATTRITION_INPUT_PATH is not set"
                    )
                staging = RawEmployeeStaging.from_file(self.config.input_path)

            logger.info(f"Raw preview:\n{staging.preview()}")

            # Step 1: Load
            logger.info("🔄 Step 1: Loading raw staging into employee table...")
            employees_df = load_employee_records(
                staging, reject_invalid_records=self.config.reject_invalid_records
            )
            log_stage("load", employees_df.height)

            # Step 2: Normalize
            logger.info("🔄 Step 2: Normalizing flags and labels...")
            employees_df = normalize_employee_data(
                employees_df, case_sensitive_labels=self.config.case_sensitive_labels
            )
            log_stage("normalize", employees_df.height)

            # Step 3: Integrity check
            logger.info("🔄 Step 3: Checking required fields for missing values...")
            missing_values = check_required_nulls(employees_df)
            data_quality = validate_data_quality(employees_df)

            # Step 4: Cap income outliers
            logger.info("🔄 Step 4: Capping MonthlyIncome outliers...")
            summary_stats = get_summary_stats(employees_df)
            employees_df, income_cap = cap_monthly_income(employees_df)
            log_stage("cap", employees_df.height)

            # Step 5: Categorize
            logger.info("🔄 Step 5: Deriving tenure and salary categories...")
            employees_df = categorize_employees(employees_df)
            validate_business_rules(employees_df)
            log_stage("categorize", employees_df.height)

            # Step 6: Aggregate
            logger.info("🔄 Step 6: Aggregating attrition by dimension...")
            summaries = build_attrition_report(employees_df)

            result = PipelineResult(
                employees=employees_df,
                missing_values=missing_values,
                income_cap=income_cap,
                summaries=summaries,
                summary_stats=summary_stats,
                data_quality=data_quality,
            )

            overall = summaries["overall"].row(0, named=True)
            logger.info(
                f"Overall attrition: {overall['AttritionCount']} of "
                f"{overall['TotalEmployees']} employees ({overall['AttritionRate']}%)"
            )

            if not self.config.dry_run:
                self._persist(result)
            else:
                logger.info("🔍 DRY RUN: Skipping result persistence")

            logger.info("🎉 Attrition ETL Pipeline completed successfully!")
            return result

        except Exception as e:
            logger.error(f"❌ Attrition ETL Pipeline failed: {e}")
            raise

    def _persist(self, result: PipelineResult) -> None:
        """Write the employee table and summaries to disk"""
        logger.info(f"💾 Saving results to {self.config.output_dir}...")
        result.saved_files = save_attrition_report(
            result.summaries, self.config.output_dir
        )
        result.saved_files["employee_data"] = {
            "parquet": save_employee_data(result.employees, self.config.output_dir)
        }

        if self.config.duckdb_path:
            logger.info(f"💾 Writing tables to DuckDB at {self.config.duckdb_path}...")
            save_to_duckdb(result.employees, result.summaries, self.config.duckdb_path)

    def get_pipeline_status(self) -> dict:
        """
        Get current pipeline status

        Returns:
            dict: Pipeline status information
        """
        return {
            "timestamp": datetime.now().isoformat(),
            "has_run": self._has_run,
            "dry_run": self.config.dry_run,
            "output_dir": self.config.output_dir,
            "duckdb_path": self.config.duckdb_path,
        }
