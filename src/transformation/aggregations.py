"""
Attrition Aggregations - Transform Layer

Grouped attrition counts and rates for the dashboard. Grouping runs as
SQL in DuckDB over the registered employee frame; the rate is rounded
half-up to two decimals with integer arithmetic.
"""

import polars as pl
import duckdb
from typing import Any, Dict, Optional
from .schemas import (
    ATTRITION_DIMENSIONS,
    ATTRITION_SUMMARY_SCHEMA,
    OVERALL_GROUP_KEY,
)
import logging

logger = logging.getLogger(__name__)


def _attrition_rate_expr() -> pl.Expr:
    """round(100 * AttritionCount / TotalEmployees, 2), half-up"""
    attrition = pl.col("AttritionCount")
    total = pl.col("TotalEmployees")
    # Rate in hundredths of a percent: floor((20000 * a + t) / (2 * t))
    hundredths = (attrition * 20000 + total) // (total * 2)
    return (
        pl.when(total > 0)
        .then((hundredths.cast(pl.Float64()) / 100).round(2))
        .otherwise(None)
        .cast(pl.Float64())
        .alias("AttritionRate")
    )


def aggregate_attrition(
    df: pl.DataFrame, dimension: Optional[str] = None
) -> pl.DataFrame:
    """
    Attrition count and rate per distinct value of a dimension

    Args:
        df: Categorized employee table
        dimension: Column to group by, or None for the whole table

    Returns:
        pl.DataFrame: Rows with ATTRITION_SUMMARY_SCHEMA, ordered by
            AttritionRate descending then GroupKey ascending
    """
    if dimension is not None and dimension not in ATTRITION_DIMENSIONS.values():
        raise ValueError(f"Unknown attrition dimension: {dimension}")

    logger.info(f"Aggregating attrition by {dimension or 'overall'}")

    conn = duckdb.connect()
    try:
        conn.register("employee_data", df)

        if dimension is None:
            sql = f"""
                SELECT
                    '{OVERALL_GROUP_KEY}' AS GroupKey
                    , COUNT(*) AS TotalEmployees
                    , CAST(SUM(Attrition) AS BIGINT) AS AttritionCount
                FROM employee_data
            """
        else:
            sql = f"""
                SELECT
                    CAST("{dimension}" AS VARCHAR) AS GroupKey
                    , COUNT(*) AS TotalEmployees
                    , CAST(SUM(Attrition) AS BIGINT) AS AttritionCount
                FROM employee_data
                GROUP BY "{dimension}"
            """

        grouped_df = conn.execute(sql).pl()
    finally:
        conn.close()

    summary_df = (
        grouped_df.with_columns(
            [
                pl.col("GroupKey").cast(pl.String()),
                pl.col("TotalEmployees").cast(pl.Int64()),
                pl.col("AttritionCount").cast(pl.Int64()),
            ]
        )
        .with_columns(_attrition_rate_expr())
        .select(list(ATTRITION_SUMMARY_SCHEMA.names()))
        .sort(
            ["AttritionRate", "GroupKey"],
            descending=[True, False],
            nulls_last=True,
        )
    )

    logger.info(f"Aggregated {summary_df.height} attrition groups")
    return summary_df


def build_attrition_report(df: pl.DataFrame) -> Dict[str, pl.DataFrame]:
    """
    Attrition summaries for every dashboard dimension

    Args:
        df: Categorized employee table

    Returns:
        Dict: Dimension name (e.g. "department") -> summary table
    """
    logger.info(f"Building attrition report over {df.height} employees")

    report = {
        name: aggregate_attrition(df, column)
        for name, column in ATTRITION_DIMENSIONS.items()
    }

    logger.info(f"Built {len(report)} attrition summaries")
    return report


def get_summary_stats(df: pl.DataFrame) -> Dict[str, Any]:
    """
    Min, max and mean of the columns inspected for outliers

    Args:
        df: Employee table

    Returns:
        Dict: Summary statistics
    """
    logger.info("Generating summary stats for employee data")

    stats = {"total_records": df.height}
    for column in ["Age", "MonthlyIncome", "YearsAtCompany"]:
        stats[column] = {
            "min": df.select(pl.col(column).min()).item(),
            "max": df.select(pl.col(column).max()).item(),
            "mean": df.select(pl.col(column).mean()).item(),
        }

    logger.info(f"Generated summary stats: {list(stats.keys())}")
    return stats
